"""Activity listener Cog for Cattata.

This cog has exactly ONE responsibility: record every non-bot message as
activity in the ledger. Command handling lives in the report commands cog.
"""

import discord
from discord.ext import commands

from cattata.errors import StorageError
from cattata.services.activity_ledger import ActivityLedger
from cattata.util.format_utils import datetime_to_ms
from cattata.util.logger import get_logger

logger = get_logger("activity_listener_cog")


class ActivityListenerCog(commands.Cog):
    """Thin event listener that forwards message timestamps to the ledger."""

    def __init__(self, bot: discord.Bot, ledger: ActivityLedger) -> None:
        self.bot = bot
        self._ledger = ledger
        logger.info("[ACTIVITY LISTENER] Activity listener cog loaded")

    @commands.Cog.listener(name="on_message")
    async def on_message(self, message: discord.Message) -> None:
        """Record the author's activity at the message's creation time."""
        if message.author.bot:
            return

        try:
            await self._ledger.record_activity(str(message.author.id), datetime_to_ms(message.created_at))
        except StorageError:
            logger.exception("[ACTIVITY LISTENER] Failed to record activity for %s (%s)", message.author, message.author.id)
            return

        logger.debug("Updated activity for user: %s (%s)", message.author, message.author.id)


def setup(bot: discord.Bot, ledger: ActivityLedger) -> None:
    """Register the ActivityListenerCog with the bot."""
    bot.add_cog(ActivityListenerCog(bot, ledger))
