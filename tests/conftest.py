"""
Pytest configuration and fixtures for Cattata tests.
"""

import sys
from pathlib import Path

import pytest_asyncio

# Add src directory to path so imports work without installing the package
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from cattata.database.db_connection import ConnectionManager  # noqa: E402
from cattata.services.activity_ledger import ActivityLedger  # noqa: E402


@pytest_asyncio.fixture
async def db_connection(tmp_path: Path):
    """An open connection manager backed by a temporary SQLite file."""
    manager = ConnectionManager()
    await manager.open(tmp_path / "activity.db")
    yield manager
    await manager.close()


@pytest_asyncio.fixture
async def ledger(db_connection: ConnectionManager) -> ActivityLedger:
    return ActivityLedger(db_connection)
