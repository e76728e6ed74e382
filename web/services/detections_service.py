"""
Detections Service - Web Layer Service for Detection Operations.

Thin wrapper over core.detections_core for web-specific concerns.
"""

from typing import Any

from core import detections_core
from core.context import ServiceContext

DetectionNotFoundError = detections_core.DetectionNotFoundError


def verify_detection(
    ctx: ServiceContext, owner: str, detection_id: str, is_deer: bool
) -> dict[str, Any]:
    """
    Record a user's deer verdict on an existing detection.

    Delegates to core.detections_core.
    """
    return detections_core.verify_detection(
        ctx.detection_store, owner, detection_id, is_deer
    )


def list_detections(ctx: ServiceContext, owner: str) -> list[dict[str, Any]]:
    """
    List an owner's detections, newest first.

    Delegates to core.detections_core.
    """
    return detections_core.list_detections(ctx.detection_store, owner)
