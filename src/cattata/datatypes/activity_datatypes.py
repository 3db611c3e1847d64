"""
Data structures for activity tracking and inactivity evaluation.

All instants are integer epoch milliseconds. ``None`` is the only
representation of "never active"; epoch zero is a real instant.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ActivityRecord:
    """One ledger row: the last time a user was seen.

    Attributes:
        user_id: Discord user snowflake as a string
        last_activity: Epoch milliseconds of the most recent recorded event
    """
    user_id: str
    last_activity: int


@dataclass(frozen=True, slots=True)
class MembershipSnapshot:
    """A current guild member as seen at evaluation time.

    Attributes:
        user_id: Discord user snowflake as a string
        holds_target_tag: Whether the member holds the watched role
        display_name: Only used in log lines
    """
    user_id: str
    holds_target_tag: bool
    display_name: str = ""


@dataclass(frozen=True, slots=True)
class InactiveEntry:
    """A role holder whose last activity is older than the threshold."""
    user_id: str
    last_activity: int | None
