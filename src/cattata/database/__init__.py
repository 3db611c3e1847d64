"""
Database package for Cattata.

Provides the single long-lived aiosqlite connection used by the activity
ledger, with serialised write transactions and schema initialization.

Public API:
    - ConnectionManager: Connection lifecycle, ``transaction()`` and ``read()``
    - SchemaManager: Table creation and schema version tracking
"""
