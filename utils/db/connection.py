"""
Database Connection and Schema Management.

This module handles SQLite connection creation and schema initialization
for the local detection store.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path

from config import get_config

# Module-level cache: initialize schema once per database path.
# Tests use temporary paths, so schema init must be keyed by db path (not process-global).
_schema_initialized_paths: set[Path] = set()


def get_db_path() -> Path:
    cfg = get_config()
    output_dir = Path(cfg["OUTPUT_DIR"])
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir / cfg["SQLITE_DB_FILENAME"]


def get_connection(db_path: Path | str | None = None) -> sqlite3.Connection:
    db_path = Path(db_path) if db_path is not None else get_db_path()
    conn = sqlite3.connect(db_path, check_same_thread=False, timeout=30)
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    if db_path not in _schema_initialized_paths:
        _init_schema(conn)
        _schema_initialized_paths.add(db_path)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def closing_connection(db_path: Path | str | None = None):
    """Context manager that creates a DB connection and guarantees it is closed.

    IMPORTANT: `with sqlite3.Connection as conn:` only manages transactions
    (commit/rollback); it does NOT call conn.close(). This context manager
    ensures the file descriptor is released when the block exits.

    Usage:
        with closing_connection(path) as conn:
            conn.execute("SELECT ...")
    """
    conn = get_connection(db_path)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _init_schema(conn: sqlite3.Connection) -> None:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS detections (
            pk TEXT NOT NULL,
            sk TEXT NOT NULL,
            image_key TEXT NOT NULL,
            capture_date TEXT NOT NULL,
            labels_json TEXT NOT NULL DEFAULT '[]',
            deer_labels_json TEXT NOT NULL DEFAULT '[]',
            confidence INTEGER NOT NULL DEFAULT 0,
            is_deer INTEGER NOT NULL DEFAULT 0,
            is_verified INTEGER NOT NULL DEFAULT 0,
            created_at TEXT,
            verified_at TEXT,
            gsi1pk TEXT,
            gsi1sk TEXT,
            PRIMARY KEY (pk, sk)
        );
        """)
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_detections_gsi1 ON detections(gsi1pk, gsi1sk DESC);"
    )
    conn.commit()
