"""
Detection Record Builder.

Combines owner, storage key, capture date and classifier output into a
persistable DetectionRecord.
"""

from datetime import UTC, datetime

from detectors.deer_classifier import ClassifierOutput
from detectors.interfaces.labels import DetectionLabel
from detectors.interfaces.persistence import DetectionRecord, detection_sort_key


def format_timestamp(dt: datetime) -> str:
    """Formats a datetime as ISO-8601 UTC with millisecond precision and a Z suffix."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def unique_suffix(image_key: str) -> str:
    """
    Returns the disambiguating suffix for a storage key.

    Upload keys look like "uploads/<uuid4>-<filename>", so the suffix is the
    first group of the UUID. Keys without a filename segment yield "".
    """
    filename = image_key.rsplit("/", 1)[-1]
    return filename.split("-", 1)[0]


def build_record(
    owner: str,
    image_key: str,
    capture_date: datetime,
    labels: list[DetectionLabel],
    classifier_output: ClassifierOutput,
    now: datetime | None = None,
) -> DetectionRecord:
    """
    Builds a new, unverified detection record.

    Args:
        owner: Owner identifier from the object metadata.
        image_key: Storage key of the image.
        capture_date: Resolved capture timestamp.
        labels: Full label set from label detection.
        classifier_output: Output of deer_classifier.classify(labels).
        now: Creation time override.

    Returns:
        DetectionRecord with is_verified=False and no verified_at.
    """
    timestamp = format_timestamp(capture_date)
    suffix = unique_suffix(image_key)

    return DetectionRecord(
        owner=owner,
        sort_key=detection_sort_key(f"{timestamp}#{suffix}"),
        image_key=image_key,
        capture_date=timestamp,
        labels=list(labels),
        deer_labels=list(classifier_output.deer_labels),
        confidence=classifier_output.confidence,
        is_deer=classifier_output.is_deer,
        is_verified=False,
        created_at=format_timestamp(now or datetime.now(UTC)),
        verified_at=None,
    )
