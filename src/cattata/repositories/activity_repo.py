"""
Persistent storage for per-user last activity.

Timestamps are stored as INTEGER epoch milliseconds.
"""

from __future__ import annotations

from typing import List

import aiosqlite

from cattata.datatypes.activity_datatypes import ActivityRecord


class ActivityRepo:
    """Low-level CRUD for the ``user_activity`` table."""

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @staticmethod
    async def upsert(conn: aiosqlite.Connection, user_id: str, last_activity: int) -> None:
        """Insert a row or overwrite the stored timestamp (primary key = user_id)."""
        await conn.execute(
            """
            INSERT INTO user_activity (user_id, last_message_timestamp)
            VALUES (?, ?)
            ON CONFLICT(user_id) DO UPDATE SET
                last_message_timestamp = excluded.last_message_timestamp
            """,
            (str(user_id), int(last_activity)),
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @staticmethod
    async def get(conn: aiosqlite.Connection, user_id: str) -> int | None:
        """Return the stored timestamp, or ``None`` when the user has no row."""
        async with conn.execute(
            "SELECT last_message_timestamp FROM user_activity WHERE user_id = ?",
            (str(user_id),),
        ) as cursor:
            row = await cursor.fetchone()
        return None if row is None else int(row[0])

    @staticmethod
    async def get_all(conn: aiosqlite.Connection) -> List[ActivityRecord]:
        """Return every row, ordered by user id."""
        async with conn.execute(
            "SELECT user_id, last_message_timestamp FROM user_activity ORDER BY user_id"
        ) as cursor:
            rows = await cursor.fetchall()
        return [ActivityRecord(user_id=str(row[0]), last_activity=int(row[1])) for row in rows]

    @staticmethod
    async def count(conn: aiosqlite.Connection) -> int:
        async with conn.execute("SELECT COUNT(*) FROM user_activity") as cursor:
            row = await cursor.fetchone()
        return int(row[0]) if row else 0


# Module-level singleton
activity_storage = ActivityRepo()
