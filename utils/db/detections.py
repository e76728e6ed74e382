"""
Detection CRUD and Query Operations.

This module handles detection-related database operations for the local
SQLite store. Rows mirror the DynamoDB item layout (PK/SK/GSI1) so both
stores share one record shape.
"""

import json
import sqlite3
from typing import Any


def upsert_detection(conn: sqlite3.Connection, item: dict[str, Any]) -> None:
    """Creates or overwrites a detection row keyed by (PK, SK)."""
    conn.execute(
        """
        INSERT OR REPLACE INTO detections (
            pk,
            sk,
            image_key,
            capture_date,
            labels_json,
            deer_labels_json,
            confidence,
            is_deer,
            is_verified,
            created_at,
            verified_at,
            gsi1pk,
            gsi1sk
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?);
        """,
        (
            item["PK"],
            item["SK"],
            item.get("imageKey"),
            item.get("captureDate"),
            json.dumps(item.get("labels") or []),
            json.dumps(item.get("deerLabels") or []),
            int(item.get("confidence", 0)),
            1 if item.get("isDeer") else 0,
            1 if item.get("isVerified") else 0,
            item.get("createdAt"),
            item.get("verifiedAt"),
            item.get("GSI1PK"),
            item.get("GSI1SK"),
        ),
    )
    conn.commit()


def mark_detection_verified(
    conn: sqlite3.Connection, pk: str, sk: str, is_deer: bool, verified_at: str
) -> dict[str, Any] | None:
    """
    Sets the verification fields of an existing row.

    The existence check is the UPDATE's own WHERE clause, so check and write
    are a single statement. Returns the updated item, or None if no row
    matched (nothing is written in that case).
    """
    cur = conn.execute(
        """
        UPDATE detections
        SET is_verified = 1, is_deer = ?, verified_at = ?
        WHERE pk = ? AND sk = ?
        """,
        (1 if is_deer else 0, verified_at, pk, sk),
    )
    if cur.rowcount == 0:
        conn.rollback()
        return None

    row = conn.execute(
        "SELECT * FROM detections WHERE pk = ? AND sk = ?", (pk, sk)
    ).fetchone()
    conn.commit()
    return row_to_item(row)


def fetch_detections_for_owner(
    conn: sqlite3.Connection, pk: str, sk_prefix: str
) -> list[dict[str, Any]]:
    """Returns all items of a partition whose sort key starts with sk_prefix, newest first."""
    rows = conn.execute(
        """
        SELECT * FROM detections
        WHERE pk = ? AND substr(sk, 1, ?) = ?
        ORDER BY sk DESC
        """,
        (pk, len(sk_prefix), sk_prefix),
    ).fetchall()
    return [row_to_item(row) for row in rows]


def row_to_item(row: sqlite3.Row) -> dict[str, Any]:
    """Converts a detections row into the shared item layout."""
    item = {
        "PK": row["pk"],
        "SK": row["sk"],
        "imageKey": row["image_key"],
        "captureDate": row["capture_date"],
        "labels": json.loads(row["labels_json"] or "[]"),
        "deerLabels": json.loads(row["deer_labels_json"] or "[]"),
        "confidence": row["confidence"],
        "isDeer": bool(row["is_deer"]),
        "isVerified": bool(row["is_verified"]),
        "createdAt": row["created_at"],
        "GSI1PK": row["gsi1pk"],
        "GSI1SK": row["gsi1sk"],
    }
    if row["verified_at"]:
        item["verifiedAt"] = row["verified_at"]
    return item
