"""
Report pagination.

Packs an ordered list of ``(label, value)`` pairs into report pages bounded
by a character budget, and groups pages into batches bounded by a page
count (Discord accepts at most ten embeds per message).

Guarantees for non-empty input:

* every entry lands in exactly one page, in input order, never truncated;
* a page only exceeds ``max_length`` when it holds a single entry that is
  longer than the budget on its own;
* no empty pages are produced;
* every batch holds between 1 and ``max_pages`` pages.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from cattata.datatypes.report_datatypes import PageAccent, ReportBatch, ReportPage

MAX_PAGE_LENGTH = 1024
MAX_PAGES_PER_BATCH = 10

ReportEntry = Tuple[str, str]


def format_entry(label: str, value: str) -> str:
    """Render one entry as a report line, including its trailing newline."""
    return f"{label} - {value}\n"


def paginate(
    entries: Iterable[ReportEntry],
    title: str,
    empty_message: str,
    max_length: int = MAX_PAGE_LENGTH,
    max_pages: int = MAX_PAGES_PER_BATCH,
    accent: PageAccent = PageAccent.NORMAL,
) -> List[ReportBatch]:
    """Split ``entries`` into batches of length-bounded pages.

    Args:
        entries: Ordered ``(label, value)`` pairs.
        title: Title carried by every page.
        empty_message: Body of the single page returned for empty input.
        max_length: Character budget per page.
        max_pages: Maximum number of pages per batch.
        accent: Accent for pages built from entries. The empty-input page
            is always :attr:`PageAccent.ALERT`.

    Returns:
        Batches in packing order.

    Raises:
        ValueError: If either bound is not positive.
    """
    if max_length < 1:
        raise ValueError(f"max_length must be positive, got {max_length}")
    if max_pages < 1:
        raise ValueError(f"max_pages must be positive, got {max_pages}")

    batches: List[ReportBatch] = []
    batch: ReportBatch = []
    page_text = ""

    for label, value in entries:
        line = format_entry(label, value)

        if page_text and len(page_text) + len(line) > max_length:
            batch.append(ReportPage(title=title, body=page_text, accent=accent))
            page_text = line

            if len(batch) >= max_pages:
                batches.append(batch)
                batch = []
        else:
            page_text += line

    if not page_text:
        return [[ReportPage(title=title, body=empty_message, accent=PageAccent.ALERT)]]

    batch.append(ReportPage(title=title, body=page_text, accent=accent))
    batches.append(batch)
    return batches
