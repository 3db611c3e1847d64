"""
Database connection management: one writer connection, one reader connection.

Concurrency model
-----------------
SQLite is single-writer.  Writes are serialised at the application layer
with a write semaphore (``_write_sem``) so concurrent activity updates queue
up in arrival order instead of fighting SQLite's busy-timeout.

Reads go through a second, read-only connection.  In WAL mode a reader
only sees committed transactions, so a value written inside a
``transaction()`` that has not committed yet (or that is rolled back) is
never visible to ``read()``.  Reads take no lock and never wait on writers.

Usage
-----
    manager = ConnectionManager()
    await manager.open(path)

    async with manager.read() as conn:
        async with conn.execute("SELECT ...") as cursor:
            ...

    async with manager.transaction() as conn:
        await conn.execute("INSERT ...")
        # commits on clean exit, rolls back on exception

    await manager.close()
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from cattata.database.db_schema import SchemaManager
from cattata.util.logger import get_logger

logger = get_logger("database_connection")

# Applied once when the writer connection is opened
_PRAGMAS = [
    "PRAGMA journal_mode = WAL",
    "PRAGMA synchronous = NORMAL",    # safe with WAL
    "PRAGMA temp_store = MEMORY",
    "PRAGMA busy_timeout = 5000",
]

_READER_PRAGMAS = [
    "PRAGMA busy_timeout = 5000",
]


class ConnectionManager:
    """
    Owns the writer and reader aiosqlite connections of the process.

    * Reads:  ``async with read()``; read-only connection, committed rows only.
    * Writes: ``async with transaction()``; one writer at a time.
    """

    def __init__(self) -> None:
        self._conn: aiosqlite.Connection | None = None
        self._reader: aiosqlite.Connection | None = None
        self._write_sem = asyncio.Semaphore(1)
        self._path: Path | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def open(self, path: Path) -> None:
        """
        Open the database, apply pragmas, make sure the schema exists and
        attach the read-only connection.

        Args:
            path: Path to the SQLite database file.
        """
        if self._conn is not None:
            logger.warning("[DB CONNECTION] open() called but connection already exists, ignoring")
            return

        path = Path(path).resolve()
        self._path = path
        path.parent.mkdir(parents=True, exist_ok=True)

        self._conn = await aiosqlite.connect(path)
        self._conn.row_factory = aiosqlite.Row

        for pragma in _PRAGMAS:
            await self._conn.execute(pragma)
        await SchemaManager.initialize_schema(self._conn)

        # The schema must be committed before the read-only handle is opened
        self._reader = await aiosqlite.connect(f"{path.as_uri()}?mode=ro", uri=True)
        self._reader.row_factory = aiosqlite.Row
        for pragma in _READER_PRAGMAS:
            await self._reader.execute(pragma)

        logger.info("[DB CONNECTION] Opened connection to %s", path)

    async def close(self) -> None:
        """Close the reader, flush the WAL and close the writer."""
        if self._reader is not None:
            try:
                await self._reader.close()
            finally:
                self._reader = None

        if self._conn is None:
            return

        try:
            await self._conn.execute("PRAGMA wal_checkpoint(TRUNCATE)")
            await self._conn.commit()
        except Exception:
            logger.exception("[DB CONNECTION] WAL checkpoint failed during close")
        finally:
            await self._conn.close()
            self._conn = None
            logger.info("[DB CONNECTION] Connection closed")

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    # ------------------------------------------------------------------
    # Connection access
    # ------------------------------------------------------------------

    @property
    def connection(self) -> aiosqlite.Connection:
        """
        The raw writer connection.

        Raises:
            RuntimeError: If the connection has not been opened yet.
        """
        if self._conn is None:
            raise RuntimeError(
                "ConnectionManager: connection is not open. "
                "Call await manager.open(path) at startup."
            )
        return self._conn

    @property
    def reader(self) -> aiosqlite.Connection:
        """
        The read-only connection.

        Raises:
            RuntimeError: If the connection has not been opened yet.
        """
        if self._reader is None:
            raise RuntimeError(
                "ConnectionManager: connection is not open. "
                "Call await manager.open(path) at startup."
            )
        return self._reader

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Serialised write transaction.

        Commits on clean exit and rolls back if the body raises.

        Raises:
            RuntimeError: If the connection is not open.
        """
        conn = self.connection

        async with self._write_sem:
            try:
                yield conn
                await conn.commit()
            except Exception:
                await conn.rollback()
                raise

    @asynccontextmanager
    async def read(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Read access through the read-only connection.

        Cursors should be closed (``async with conn.execute(...)``) so the
        next read starts from the latest committed snapshot.
        """
        yield self.reader
