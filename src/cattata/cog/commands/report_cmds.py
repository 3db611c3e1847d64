"""
Report commands cog for Cattata.

Exposes the inactivity report and the activity table both as the
``/activity`` slash command group and as the legacy text triggers
(``!checkInactive`` and ``!showUsers`` by default).
"""

import discord
from discord.ext import commands

from cattata.configuration.app_configuration import AppConfig
from cattata.services.report_service import ReportService
from cattata.ui.report_embed import EmbedSender, send_batches
from cattata.util.logger import get_logger

logger = get_logger("report_commands")

INACTIVE_FAILURE_MESSAGE = "There was an error retrieving inactive users."
USERS_FAILURE_MESSAGE = "There was an error retrieving users from the database."
GUILD_ONLY_MESSAGE = "This command can only be used in a server."
TEXT_CHANNEL_ONLY_MESSAGE = "This command can only be used in a text channel."


class ReportCommandsCog(commands.Cog):
    """Cog for the activity and inactivity reports."""

    activity = discord.SlashCommandGroup("activity", "Member activity reports")

    def __init__(self, bot: discord.Bot, report_service: ReportService, config: AppConfig) -> None:
        self.bot = bot
        self._report_service = report_service
        self._config = config

    # ------------------------------------------------------------------
    # Shared report flows; each request is its own error boundary
    # ------------------------------------------------------------------

    async def send_inactivity_report(self, guild: discord.Guild, send: EmbedSender) -> None:
        try:
            batches = await self._report_service.inactivity_report(guild)
            await send_batches(send, batches, self._report_service.footer)
        except Exception:
            logger.exception("[REPORTS] Error fetching inactive users for guild %s", guild.id)
            await send(content=INACTIVE_FAILURE_MESSAGE)

    async def send_activity_report(self, send: EmbedSender) -> None:
        try:
            batches = await self._report_service.activity_report()
            await send_batches(send, batches, self._report_service.footer)
        except Exception:
            logger.exception("[REPORTS] Error fetching users from database")
            await send(content=USERS_FAILURE_MESSAGE)

    # ------------------------------------------------------------------
    # Slash commands
    # ------------------------------------------------------------------

    @activity.command(name="inactive", description="List watched-role members who have gone quiet")
    async def inactive(self, application_context: discord.ApplicationContext) -> None:
        guild = application_context.guild
        if not guild:
            await application_context.respond(content=GUILD_ONLY_MESSAGE, ephemeral=True)
            return

        await application_context.defer()
        await self.send_inactivity_report(guild, application_context.send_followup)

    @activity.command(name="users", description="Show every user's last recorded activity")
    async def users(self, application_context: discord.ApplicationContext) -> None:
        if not application_context.guild:
            await application_context.respond(content=GUILD_ONLY_MESSAGE, ephemeral=True)
            return

        await application_context.defer()
        await self.send_activity_report(application_context.send_followup)

    # ------------------------------------------------------------------
    # Legacy text triggers
    # ------------------------------------------------------------------

    @commands.Cog.listener(name="on_message")
    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot:
            return

        content = message.content.strip()

        if content == self._config.check_inactive_command:
            if not message.guild:
                await message.reply(GUILD_ONLY_MESSAGE)
                return
            await self.send_inactivity_report(message.guild, message.channel.send)

        elif content == self._config.show_users_command:
            if not isinstance(message.channel, discord.TextChannel):
                await message.reply(TEXT_CHANNEL_ONLY_MESSAGE)
                return
            await self.send_activity_report(message.channel.send)


def setup(bot: discord.Bot, report_service: ReportService, config: AppConfig) -> None:
    """Register the report commands cog with the bot."""
    bot.add_cog(ReportCommandsCog(bot, report_service, config))
