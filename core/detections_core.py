"""
Detections Core - Detection Record Operations.

Provides verification and listing of detection records.
"""

from datetime import UTC, datetime
from typing import Any

from core.detection_record import format_timestamp
from detectors.interfaces.persistence import (
    DetectionNotFoundError,
    DetectionStoreInterface,
    detection_sort_key,
)
from logging_config import get_logger

logger = get_logger(__name__)

__all__ = ["DetectionNotFoundError", "list_detections", "verify_detection"]


def verify_detection(
    store: DetectionStoreInterface,
    owner: str,
    detection_id: str,
    is_deer: bool,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Records a user's verdict on an existing detection.

    Sets isVerified, overwrites isDeer and stamps verifiedAt in one
    conditional write. Labels and confidence are left as detected.

    Args:
        store: Detection store.
        owner: Owner identifier.
        detection_id: "<capture timestamp>#<suffix>" part of the sort key.
        is_deer: User-confirmed deer verdict.
        now: Verification time override.

    Returns:
        Summary dict with updated, SK, isVerified and isDeer.

    Raises:
        DetectionNotFoundError: If the owner has no such detection.
    """
    sort_key = detection_sort_key(detection_id)
    verified_at = format_timestamp(now or datetime.now(UTC))

    record = store.mark_verified(owner, sort_key, is_deer, verified_at)

    logger.info(f"Verified {sort_key} for {owner}: isDeer={record.is_deer}")
    return {
        "updated": True,
        "SK": record.sort_key,
        "isVerified": record.is_verified,
        "isDeer": record.is_deer,
        "verifiedAt": record.verified_at,
    }


def list_detections(store: DetectionStoreInterface, owner: str) -> list[dict[str, Any]]:
    """
    Returns all detection items of an owner, newest first.
    """
    return [record.to_item() for record in store.list_for_owner(owner)]
