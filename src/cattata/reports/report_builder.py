"""
Builders for the two reports the bot produces.

* the activity table: every user in the ledger with their last activity;
* the inactivity report: watched-role holders who have gone silent.
"""

from __future__ import annotations

from typing import List, Sequence

from cattata.datatypes.activity_datatypes import ActivityRecord, InactiveEntry
from cattata.datatypes.report_datatypes import PageAccent, ReportBatch
from cattata.reports.paginator import (
    MAX_PAGE_LENGTH,
    MAX_PAGES_PER_BATCH,
    ReportEntry,
    paginate,
)
from cattata.util.format_utils import humanize_last_active

ACTIVITY_REPORT_TITLE = "Users in Database"
ACTIVITY_REPORT_EMPTY = "No users found in the database."
INACTIVITY_REPORT_TITLE = "Inactive Users"
INACTIVITY_REPORT_EMPTY = "No inactive users found."


def mention(user_id: str) -> str:
    return f"<@{user_id}>"


def last_active_value(epoch_ms: int | None) -> str:
    return f"Last active: {humanize_last_active(epoch_ms)}"


def activity_entries(records: Sequence[ActivityRecord]) -> List[ReportEntry]:
    return [(mention(record.user_id), last_active_value(record.last_activity)) for record in records]


def inactivity_entries(entries: Sequence[InactiveEntry]) -> List[ReportEntry]:
    return [(mention(entry.user_id), last_active_value(entry.last_activity)) for entry in entries]


def build_activity_report(
    records: Sequence[ActivityRecord],
    max_length: int = MAX_PAGE_LENGTH,
    max_pages: int = MAX_PAGES_PER_BATCH,
) -> List[ReportBatch]:
    """Paginate the full ledger in the order given."""
    return paginate(
        activity_entries(records),
        title=ACTIVITY_REPORT_TITLE,
        empty_message=ACTIVITY_REPORT_EMPTY,
        max_length=max_length,
        max_pages=max_pages,
        accent=PageAccent.NORMAL,
    )


def build_inactivity_report(
    entries: Sequence[InactiveEntry],
    max_length: int = MAX_PAGE_LENGTH,
    max_pages: int = MAX_PAGES_PER_BATCH,
) -> List[ReportBatch]:
    """Paginate the inactive members in the order given."""
    return paginate(
        inactivity_entries(entries),
        title=INACTIVITY_REPORT_TITLE,
        empty_message=INACTIVITY_REPORT_EMPTY,
        max_length=max_length,
        max_pages=max_pages,
        accent=PageAccent.ALERT,
    )
