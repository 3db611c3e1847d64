"""
Exception types raised by the Cattata core.

Every error carries its underlying cause via ``raise ... from exc`` so the
original driver or Discord exception survives into the logs.
"""

from __future__ import annotations


class CattataError(Exception):
    """Base class for errors raised by the activity tracking core."""


class StorageError(CattataError):
    """A read or write against the activity ledger failed."""


class SnapshotError(CattataError):
    """The current member list could not be enumerated."""


class PerMemberLookupError(CattataError):
    """Looking up a single member's activity failed during an evaluation.

    Not raised out of an evaluation; instances are collected as diagnostics
    while the remaining members are still evaluated.
    """

    def __init__(self, user_id: str, cause: Exception) -> None:
        super().__init__(f"Activity lookup failed for user {user_id}: {cause}")
        self.user_id = user_id
        self.cause = cause
