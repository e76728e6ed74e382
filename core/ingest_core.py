"""
Ingest Core - Detection Ingestion Pipeline.

Turns object-storage creation events into detection records:
owner -> bytes -> capture date -> labels (best effort) -> record -> store.

Every image is processed independently. A failure inside one image is
reported in its IngestResult and never aborts the rest of the batch.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from typing import Any
from urllib.parse import unquote_plus

from core.context import ServiceContext
from core.detection_record import build_record
from detectors.deer_classifier import classify
from detectors.interfaces.labels import DetectionLabel
from logging_config import get_logger
from utils.exif import resolve_capture_date

logger = get_logger(__name__)

OWNER_METADATA_KEY = "userid"

STATUS_PERSISTED = "persisted"
STATUS_SKIPPED = "skipped"
STATUS_ERROR = "error"


@dataclass
class IngestResult:
    """
    Outcome of processing one image.

    Attributes:
        key: Decoded object key.
        status: 'persisted', 'skipped' or 'error'.
        owner: Owner identifier, if resolved.
        sort_key: Sort key of the written record.
        is_deer: Classifier verdict of the written record.
        confidence: Confidence of the written record.
        labels_available: False if label detection failed.
        error: Error message for 'skipped' and 'error' results.
    """

    key: str
    status: str
    owner: str | None = None
    sort_key: str | None = None
    is_deer: bool | None = None
    confidence: int | None = None
    labels_available: bool = True
    error: str | None = None


@dataclass
class BatchSummary:
    """Per-item results of one event, in event order."""

    results: list[IngestResult] = field(default_factory=list)

    def count(self, status: str) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def persisted(self) -> int:
        return self.count(STATUS_PERSISTED)

    @property
    def skipped(self) -> int:
        return self.count(STATUS_SKIPPED)

    @property
    def errors(self) -> int:
        return self.count(STATUS_ERROR)

    def to_dict(self) -> dict[str, Any]:
        return {
            "processed": len(self.results),
            "persisted": self.persisted,
            "skipped": self.skipped,
            "errors": self.errors,
            "results": [asdict(r) for r in self.results],
        }


def decode_object_key(raw_key: str) -> str:
    """Decodes an S3 event key ('+' is a space, then percent-decoding)."""
    return unquote_plus(raw_key)


def detect_labels_best_effort(ctx: ServiceContext, key: str) -> list[DetectionLabel] | None:
    """
    Runs label detection once. Returns None if the provider call failed.
    """
    try:
        return ctx.label_detector.detect_labels(key)
    except Exception as e:
        logger.warning(
            f"Label detection failed for {key} ({type(e).__name__}: {e}), "
            "saving record without labels"
        )
        return None


def process_image(ctx: ServiceContext, key: str) -> IngestResult:
    """
    Ingests a single stored image.

    Returns:
        IngestResult; never raises.
    """
    try:
        # 1. Owner from upload-time metadata
        metadata = ctx.storage.get_metadata(key)
        owner = metadata.get(OWNER_METADATA_KEY)
        if not owner:
            logger.error(f"No {OWNER_METADATA_KEY} metadata on {key}, skipping")
            return IngestResult(
                key=key, status=STATUS_SKIPPED, error="missing owner metadata"
            )

        # 2. Payload for EXIF parsing
        image_bytes = ctx.storage.get_bytes(key)

        # 3. Capture date (falls back to now)
        capture_date = resolve_capture_date(image_bytes)

        # 4. Label detection, once per image
        labels = detect_labels_best_effort(ctx, key)
        labels_available = labels is not None
        labels = labels or []

        # 5. Classify, build and persist
        classifier_output = classify(labels)
        record = build_record(owner, key, capture_date, labels, classifier_output)
        ctx.detection_store.put(record)
    except Exception as e:
        logger.error(f"Failed to process {key}: {e}", exc_info=True)
        return IngestResult(key=key, status=STATUS_ERROR, error=str(e))

    logger.info(
        f"Processed {key} for {owner}: isDeer={record.is_deer}, "
        f"confidence={record.confidence}, captureDate={record.capture_date}"
    )
    return IngestResult(
        key=key,
        status=STATUS_PERSISTED,
        owner=owner,
        sort_key=record.sort_key,
        is_deer=record.is_deer,
        confidence=record.confidence,
        labels_available=labels_available,
    )


def _process_event_record(ctx: ServiceContext, event_record: dict) -> IngestResult:
    try:
        raw_key = event_record["s3"]["object"]["key"]
    except (KeyError, TypeError) as e:
        logger.error(f"Malformed event record, no object key: {e}")
        return IngestResult(key="", status=STATUS_ERROR, error="malformed event record")
    return process_image(ctx, decode_object_key(raw_key))


def process_event(ctx: ServiceContext, event: dict) -> BatchSummary:
    """
    Processes every record of an object-creation event.

    Args:
        ctx: Service context.
        event: S3 notification event ({"Records": [...]}).

    Returns:
        BatchSummary with one result per record, in event order.
    """
    records = event.get("Records") or []
    max_workers = ctx.config.get("INGEST_MAX_WORKERS", 1)
    logger.info(f"Starting ingest for {len(records)} records (workers: {max_workers})")

    if max_workers > 1 and len(records) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(
                executor.map(lambda r: _process_event_record(ctx, r), records)
            )
    else:
        results = [_process_event_record(ctx, r) for r in records]

    summary = BatchSummary(results=results)
    logger.info(
        f"Ingest complete. Persisted: {summary.persisted}, "
        f"Skipped: {summary.skipped}, Errors: {summary.errors}"
    )
    return summary
