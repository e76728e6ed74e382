# ------------------------------------------------------------------------------
# S3 ObjectCreated entry point for the ingestion pipeline
# lambda_handler.py
# ------------------------------------------------------------------------------
from core.context import ServiceContext
from core.ingest_core import process_event
from logging_config import get_logger

logger = get_logger(__name__)

_context = None


def get_context() -> ServiceContext:
    """Returns the process-wide service context, reused across warm invocations."""
    global _context
    if _context is None:
        _context = ServiceContext()
    return _context


def handler(event, context=None):
    """
    Processes an S3 notification event.

    Per-image failures are logged and reported in the summary; the handler
    itself does not raise, so one bad image never fails the whole batch.
    """
    summary = process_event(get_context(), event)
    return summary.to_dict()
