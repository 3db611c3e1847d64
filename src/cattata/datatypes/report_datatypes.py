"""
Report page types produced by the paginator and consumed by the embed renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List


class PageAccent(Enum):
    """Visual emphasis of a report page."""

    NORMAL = "normal"
    ALERT = "alert"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ReportPage:
    """One bounded block of report text, rendered as a single embed."""
    title: str
    body: str
    accent: PageAccent = PageAccent.NORMAL


# Pages delivered together in one message; never empty
ReportBatch = List[ReportPage]
