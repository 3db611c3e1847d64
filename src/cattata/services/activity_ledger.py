"""
Activity ledger: durable ``user_id -> last activity`` mapping.

Writes go through :meth:`ConnectionManager.transaction`, whose write
semaphore serialises every upsert, so two events for the same user resolve
in arrival order (last writer wins, by arrival rather than by value).
Driver failures surface as :class:`StorageError`.
"""

from __future__ import annotations

from typing import List

import aiosqlite

from cattata.database.db_connection import ConnectionManager
from cattata.datatypes.activity_datatypes import ActivityRecord
from cattata.errors import StorageError
from cattata.repositories.activity_repo import ActivityRepo, activity_storage
from cattata.util.logger import get_logger

logger = get_logger("activity_ledger")

# Raised by aiosqlite/sqlite3 on query failure, or when the connection is missing/closed
_STORAGE_FAILURES = (aiosqlite.Error, RuntimeError)


class ActivityLedger:
    """Stores one last-activity timestamp per user."""

    def __init__(self, connection: ConnectionManager, repo: ActivityRepo = activity_storage) -> None:
        self._connection = connection
        self._repo = repo

    async def record_activity(self, user_id: str, at: int) -> None:
        """Insert or overwrite the last activity of ``user_id``.

        Repeating a call with the same arguments leaves the same state, so
        redelivered events are harmless. An older ``at`` still overwrites a
        newer one.

        Raises:
            StorageError: If the write could not be committed.
            ValueError: If ``at`` is not an integer instant.
        """
        user_id = str(user_id)
        at = int(at)

        try:
            async with self._connection.transaction() as conn:
                await self._repo.upsert(conn, user_id, at)
        except _STORAGE_FAILURES as exc:
            raise StorageError(f"Failed to record activity for user {user_id}") from exc

        logger.debug("[LEDGER] Updated activity for user %s at %d", user_id, at)

    async def get_last_activity(self, user_id: str) -> int | None:
        """Return the stored instant for ``user_id``, or ``None`` if never recorded.

        Raises:
            StorageError: If the read failed.
        """
        try:
            async with self._connection.read() as conn:
                return await self._repo.get(conn, str(user_id))
        except _STORAGE_FAILURES as exc:
            raise StorageError(f"Failed to read activity for user {user_id}") from exc

    async def list_all(self) -> List[ActivityRecord]:
        """Return a snapshot of every record, sorted by user id.

        Raises:
            StorageError: If the read failed.
        """
        try:
            async with self._connection.read() as conn:
                return await self._repo.get_all(conn)
        except _STORAGE_FAILURES as exc:
            raise StorageError("Failed to list recorded activity") from exc

    async def count(self) -> int:
        """Return the number of tracked users."""
        try:
            async with self._connection.read() as conn:
                return await self._repo.count(conn)
        except _STORAGE_FAILURES as exc:
            raise StorageError("Failed to count recorded activity") from exc
