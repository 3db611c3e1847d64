"""
Report service: joins the ledger, the evaluator and the paginator.

Used by the report commands and by the scheduled inactivity check. Errors
are raised to the caller, which decides how to tell the user.
"""

from __future__ import annotations

from typing import Callable, List

import discord

from cattata.configuration.app_configuration import AppConfig
from cattata.datatypes.report_datatypes import ReportBatch
from cattata.reports.report_builder import build_activity_report, build_inactivity_report
from cattata.services.activity_ledger import ActivityLedger
from cattata.services.inactivity_evaluator import EvaluationResult, evaluate_with_diagnostics
from cattata.services.membership import fetch_membership_snapshot
from cattata.util.format_utils import now_ms
from cattata.util.logger import get_logger

logger = get_logger("report_service")


class ReportService:
    """Builds activity and inactivity reports for one guild.

    Parameters
    ----------
    ledger:
        Activity ledger to read from.
    config:
        Source of the watched role, threshold and page limits.
    clock:
        Returns "now" in epoch milliseconds.
    """

    def __init__(self, ledger: ActivityLedger, config: AppConfig, clock: Callable[[], int] = now_ms) -> None:
        self._ledger = ledger
        self._config = config
        self._clock = clock

    async def evaluate_guild(self, guild: discord.Guild) -> EvaluationResult:
        """Snapshot ``guild``'s members and evaluate them against the ledger.

        Raises:
            SnapshotError: If the member list could not be fetched.
        """
        members = await fetch_membership_snapshot(guild, self._config.target_role_id)
        return await evaluate_with_diagnostics(
            members,
            self._ledger,
            self._config.inactivity_threshold,
            self._clock(),
        )

    def inactivity_batches(self, result: EvaluationResult) -> List[ReportBatch]:
        return build_inactivity_report(
            result.entries,
            max_length=self._config.max_page_length,
            max_pages=self._config.max_pages_per_message,
        )

    async def inactivity_report(self, guild: discord.Guild) -> List[ReportBatch]:
        """Evaluate ``guild`` and paginate the inactive members."""
        result = await self.evaluate_guild(guild)
        return self.inactivity_batches(result)

    async def activity_report(self) -> List[ReportBatch]:
        """Paginate every user in the ledger.

        Raises:
            StorageError: If the ledger could not be read.
        """
        records = await self._ledger.list_all()
        logger.info("[REPORTS] Building activity report for %d users", len(records))
        return build_activity_report(
            records,
            max_length=self._config.max_page_length,
            max_pages=self._config.max_pages_per_message,
        )

    @property
    def footer(self) -> str:
        return self._config.report_footer
