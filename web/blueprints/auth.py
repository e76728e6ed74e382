"""
Authentication Helpers.

Identity is established upstream; requests carry the already
authenticated user id in the X-User-Id header.
"""

import logging
from functools import wraps

from flask import g, jsonify, request

logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-User-Id"


def user_required(f):
    """Decorator that requires the X-User-Id header and exposes it as g.user_id."""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        # Flask headers are case-insensitive
        user_id = (request.headers.get(USER_ID_HEADER) or "").strip()
        if not user_id:
            logger.warning(f"Rejected {request.method} {request.path}: missing {USER_ID_HEADER}")
            return jsonify({"error": "Missing x-user-id header"}), 401
        g.user_id = user_id
        return f(*args, **kwargs)

    return decorated_function
