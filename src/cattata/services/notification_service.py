"""Delivery of scheduled inactivity results to a report channel."""

from __future__ import annotations

import discord

from cattata.services.inactivity_evaluator import EvaluationResult
from cattata.services.report_service import ReportService
from cattata.ui.report_embed import send_batches
from cattata.util.logger import get_logger

logger = get_logger("notification_service")


class InactivityNotifier:
    """Posts the result of a scheduled check to the configured channel.

    With no channel configured, or when the channel cannot be found, the
    result is only logged.
    """

    def __init__(self, bot: discord.Bot, report_service: ReportService, channel_id: int | None) -> None:
        self.bot = bot
        self._report_service = report_service
        self._channel_id = channel_id

    def _resolve_channel(self) -> discord.abc.Messageable | None:
        if self._channel_id is None:
            return None
        channel = self.bot.get_channel(self._channel_id)
        if not isinstance(channel, discord.abc.Messageable):
            logger.warning("[NOTIFIER] Report channel %s not found or not messageable", self._channel_id)
            return None
        return channel

    async def deliver(self, result: EvaluationResult) -> None:
        logger.info(
            "[NOTIFIER] Scheduled check found %d inactive member(s) (%d lookup failures)",
            len(result.entries),
            len(result.diagnostics),
        )

        channel = self._resolve_channel()
        if channel is None:
            return

        batches = self._report_service.inactivity_batches(result)
        await send_batches(channel.send, batches, self._report_service.footer)
