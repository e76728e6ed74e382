"""
Detections Blueprint.

Handles detection routes:
- GET /api/detections - The caller's detections, newest first
- POST /api/detections/<id>/verify - Confirm or reject a detection
- OPTIONS on both - CORS preflight
"""

from flask import Blueprint, g, jsonify, request

from config import get_config
from logging_config import get_logger
from web.blueprints.auth import user_required
from web.services import detections_service

logger = get_logger(__name__)
config = get_config()

detections_bp = Blueprint("detections", __name__)

# Set by create_web_interface()
detections_bp.context = None


def _context():
    ctx = detections_bp.context
    if ctx is None:
        raise RuntimeError("detections blueprint has no service context")
    return ctx


@detections_bp.after_request
def add_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = config["CORS_ALLOW_ORIGIN"]
    response.headers["Access-Control-Allow-Headers"] = "Content-Type,x-user-id"
    response.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
    return response


@detections_bp.route("/api/detections", methods=["OPTIONS"])
@detections_bp.route("/api/detections/<detection_id>/verify", methods=["OPTIONS"])
def preflight(detection_id=None):
    """CORS preflight."""
    return "", 204


@detections_bp.route(
    "/api/detections", methods=["GET"], provide_automatic_options=False
)
@user_required
def list_detections():
    """
    GET /api/detections
    Returns: { detections: [...] } for the X-User-Id owner, newest first.
    """
    try:
        detections = detections_service.list_detections(_context(), g.user_id)
        return jsonify({"detections": detections})
    except Exception as e:
        logger.error(f"Failed to query detections: {e}", exc_info=True)
        return jsonify({"error": "Failed to retrieve detections"}), 500


@detections_bp.route(
    "/api/detections/<detection_id>/verify",
    methods=["POST"],
    provide_automatic_options=False,
)
@user_required
def verify_detection(detection_id):
    """
    POST /api/detections/<id>/verify
    Payload: { isVerified: true, isDeer: bool }

    <id> is the "<timestamp>#<suffix>" part of the sort key ('#' sent as %23).
    Only existing detections can be verified (404 otherwise).
    """
    if not detection_id:
        return jsonify({"error": "Missing detection id"}), 400

    data = request.get_json(force=True, silent=True)
    if data is None:
        if request.get_data():
            return jsonify({"error": "Invalid JSON body"}), 400
        data = {}

    if (
        not isinstance(data, dict)
        or not isinstance(data.get("isVerified"), bool)
        or not isinstance(data.get("isDeer"), bool)
    ):
        return (
            jsonify(
                {"error": "Body must include isVerified (boolean) and isDeer (boolean)"}
            ),
            400,
        )

    if data["isVerified"] is not True:
        return jsonify({"error": "isVerified must be true"}), 400

    try:
        result = detections_service.verify_detection(
            _context(), g.user_id, detection_id, data["isDeer"]
        )
        return jsonify(result)
    except detections_service.DetectionNotFoundError:
        return jsonify({"error": "Detection not found"}), 404
    except Exception as e:
        logger.error(f"Failed to update detection: {e}", exc_info=True)
        return jsonify({"error": "Failed to update detection"}), 500
