"""Event listener Cog for Cattata.

Handles the ``on_ready`` lifecycle event: logs the login and starts the
inactivity scheduler the first time the connection becomes ready.
"""

import discord
from discord.ext import commands

from cattata.scheduler.inactivity_scheduler import InactivityScheduler
from cattata.util.logger import get_logger

logger = get_logger("events_listener")


class EventsListenerCog(commands.Cog):
    """Handles Discord bot lifecycle events."""

    def __init__(self, bot: discord.Bot, scheduler: InactivityScheduler) -> None:
        self.bot = bot
        self._scheduler = scheduler
        logger.info("[EVENTS LISTENER] Events listener cog loaded")

    @commands.Cog.listener(name="on_ready")
    async def on_ready(self) -> None:
        """Start the periodic inactivity check once per process."""
        if not self.bot.user:
            logger.warning("[EVENTS LISTENER] Bot partially connected; user info not yet available.")
            return

        logger.info("[Cattata] Initial login: %s (ID: %s)", self.bot.user, self.bot.user.id)

        # on_ready fires again after reconnects
        if self._scheduler.is_running:
            return
        self._scheduler.start()


def setup(bot: discord.Bot, scheduler: InactivityScheduler) -> None:
    """Register the EventsListenerCog with the bot."""
    bot.add_cog(EventsListenerCog(bot, scheduler))
