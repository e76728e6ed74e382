"""
DeerWatch Database Module.

This package provides SQLite access for the local detection store.
All functions are re-exported here.

Usage:
    from utils.db import closing_connection, upsert_detection
    # or
    from utils.db.detections import upsert_detection
"""

# Connection and Schema
from utils.db.connection import (
    _init_schema,
    closing_connection,
    get_connection,
    get_db_path,
)

# Detection Operations
from utils.db.detections import (
    fetch_detections_for_owner,
    mark_detection_verified,
    row_to_item,
    upsert_detection,
)

__all__ = [
    "_init_schema",
    "closing_connection",
    "get_connection",
    "get_db_path",
    "fetch_detections_for_owner",
    "mark_detection_verified",
    "row_to_item",
    "upsert_detection",
]
