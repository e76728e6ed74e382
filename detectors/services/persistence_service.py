"""
Persistence Service - Local Detection Storage.

Implements DetectionStoreInterface on the SQLite database in OUTPUT_DIR.
Used for local runs and tests; production uses DynamoDBPersistenceService.
"""

from pathlib import Path

from detectors.interfaces.persistence import (
    DETECTION_PREFIX,
    DetectionNotFoundError,
    DetectionRecord,
    DetectionStoreInterface,
    owner_partition_key,
)
from logging_config import get_logger
from utils.db import (
    closing_connection,
    fetch_detections_for_owner,
    mark_detection_verified,
    upsert_detection,
)

logger = get_logger(__name__)


class SqlitePersistenceService(DetectionStoreInterface):
    """
    Stores detection records in SQLite.

    Each call opens and closes its own connection so the service can be
    shared across ingest worker threads.
    """

    def __init__(self, db_path: Path | str | None = None):
        """
        Args:
            db_path: Database file. Defaults to OUTPUT_DIR/SQLITE_DB_FILENAME.
        """
        self.db_path = db_path
        # Create the schema before worker threads share the database
        with closing_connection(self.db_path):
            pass

    def put(self, record: DetectionRecord) -> None:
        with closing_connection(self.db_path) as conn:
            upsert_detection(conn, record.to_item())

    def mark_verified(
        self, owner: str, sort_key: str, is_deer: bool, verified_at: str
    ) -> DetectionRecord:
        with closing_connection(self.db_path) as conn:
            item = mark_detection_verified(
                conn, owner_partition_key(owner), sort_key, is_deer, verified_at
            )
        if item is None:
            raise DetectionNotFoundError(owner, sort_key)
        return DetectionRecord.from_item(item)

    def list_for_owner(self, owner: str) -> list[DetectionRecord]:
        with closing_connection(self.db_path) as conn:
            items = fetch_detections_for_owner(
                conn, owner_partition_key(owner), DETECTION_PREFIX
            )
        return [DetectionRecord.from_item(item) for item in items]
