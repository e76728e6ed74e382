"""
DeerWatch Web Blueprints Package.

This package contains Flask Blueprints for modular route organization.
"""

from web.blueprints.auth import user_required
from web.blueprints.detections import detections_bp

__all__ = ["detections_bp", "user_required"]
