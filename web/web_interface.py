# ------------------------------------------------------------------------------
# web_interface.py
# ------------------------------------------------------------------------------

import logging

from flask import Flask, jsonify

from core.context import ServiceContext
from web.blueprints.detections import detections_bp


def create_web_interface(context: ServiceContext | None = None):
    """
    Creates and returns the Flask server for the detection API.

    Args:
        context: Service context shared by all requests. Built from the
                 environment configuration when omitted.

    Returns:
        dict with "server" (the Flask app) and "run" (callable starting it).
    """
    logger = logging.getLogger(__name__)

    context = context or ServiceContext()
    server = Flask(__name__)

    detections_bp.context = context
    server.register_blueprint(detections_bp)

    @server.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    logger.info(f"Web interface ready (store: {context.config['DETECTION_STORE']})")

    def run(debug=False, host="0.0.0.0", port=8050):
        server.run(debug=debug, host=host, port=port)

    return {"server": server, "run": run}
