"""Tests for the Discord cogs."""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from cattata.cog.commands.report_cmds import (
    GUILD_ONLY_MESSAGE,
    INACTIVE_FAILURE_MESSAGE,
    TEXT_CHANNEL_ONLY_MESSAGE,
    USERS_FAILURE_MESSAGE,
    ReportCommandsCog,
)
from cattata.cog.listener.activity_listener import ActivityListenerCog
from cattata.cog.listener.events_listener import EventsListenerCog
from cattata.datatypes.report_datatypes import PageAccent, ReportPage
from cattata.errors import SnapshotError, StorageError

SENT_AT = datetime(2024, 1, 2, 3, 4, tzinfo=timezone.utc)
SENT_AT_MS = 1_704_164_640_000


def make_message(content="hello", *, bot=False, guild=True, text_channel=True):
    author = SimpleNamespace(id=42, bot=bot)
    channel = MagicMock(spec=discord.TextChannel) if text_channel else MagicMock(spec=discord.DMChannel)
    channel.send = AsyncMock()
    return SimpleNamespace(
        author=author,
        content=content,
        created_at=SENT_AT,
        guild=MagicMock() if guild else None,
        channel=channel,
        reply=AsyncMock(),
    )


def make_config(**overrides):
    values = {"check_inactive_command": "!checkInactive", "show_users_command": "!showUsers"}
    values.update(overrides)
    return SimpleNamespace(**values)


def make_report_service(inactivity=None, activity=None):
    service = MagicMock()
    service.footer = "footer"
    service.inactivity_report = AsyncMock(return_value=inactivity or [[ReportPage("Inactive Users", "<@1> - x\n", PageAccent.ALERT)]])
    service.activity_report = AsyncMock(return_value=activity or [[ReportPage("Users in Database", "<@1> - y\n")]])
    return service


class TestActivityListener:

    @pytest.mark.asyncio
    async def test_records_author_activity(self):
        ledger = MagicMock()
        ledger.record_activity = AsyncMock()
        cog = ActivityListenerCog(MagicMock(), ledger)

        await cog.on_message(make_message())

        ledger.record_activity.assert_awaited_once_with("42", SENT_AT_MS)

    @pytest.mark.asyncio
    async def test_ignores_bots(self):
        ledger = MagicMock()
        ledger.record_activity = AsyncMock()
        cog = ActivityListenerCog(MagicMock(), ledger)

        await cog.on_message(make_message(bot=True))

        ledger.record_activity.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_storage_error_is_logged_not_raised(self):
        ledger = MagicMock()
        ledger.record_activity = AsyncMock(side_effect=StorageError("locked"))
        cog = ActivityListenerCog(MagicMock(), ledger)

        await cog.on_message(make_message())

        ledger.record_activity.assert_awaited_once()


class TestReportCommands:

    @pytest.mark.asyncio
    async def test_check_inactive_sends_one_message_per_batch(self):
        batches = [[ReportPage("Inactive Users", "a\n", PageAccent.ALERT)] * 10, [ReportPage("Inactive Users", "b\n", PageAccent.ALERT)]]
        service = make_report_service(inactivity=batches)
        cog = ReportCommandsCog(MagicMock(), service, make_config())
        message = make_message("!checkInactive")

        await cog.on_message(message)

        service.inactivity_report.assert_awaited_once_with(message.guild)
        assert message.channel.send.await_count == 2
        first_embeds = message.channel.send.await_args_list[0].kwargs["embeds"]
        assert len(first_embeds) == 10
        assert first_embeds[0].color == discord.Color.red()
        assert first_embeds[0].footer.text == "footer"

    @pytest.mark.asyncio
    async def test_check_inactive_outside_guild(self):
        service = make_report_service()
        cog = ReportCommandsCog(MagicMock(), service, make_config())
        message = make_message("!checkInactive", guild=False)

        await cog.on_message(message)

        message.reply.assert_awaited_once_with(GUILD_ONLY_MESSAGE)
        service.inactivity_report.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_check_inactive_failure_sends_explanation(self):
        service = make_report_service()
        service.inactivity_report.side_effect = SnapshotError("members unavailable")
        cog = ReportCommandsCog(MagicMock(), service, make_config())
        message = make_message("!checkInactive")

        await cog.on_message(message)

        message.channel.send.assert_awaited_once_with(content=INACTIVE_FAILURE_MESSAGE)

    @pytest.mark.asyncio
    async def test_show_users_sends_report(self):
        service = make_report_service()
        cog = ReportCommandsCog(MagicMock(), service, make_config())
        message = make_message("!showUsers")

        await cog.on_message(message)

        service.activity_report.assert_awaited_once()
        embeds = message.channel.send.await_args.kwargs["embeds"]
        assert embeds[0].title == "Users in Database"
        assert embeds[0].color == discord.Color.green()

    @pytest.mark.asyncio
    async def test_show_users_requires_text_channel(self):
        service = make_report_service()
        cog = ReportCommandsCog(MagicMock(), service, make_config())
        message = make_message("!showUsers", text_channel=False)

        await cog.on_message(message)

        message.reply.assert_awaited_once_with(TEXT_CHANNEL_ONLY_MESSAGE)
        service.activity_report.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_show_users_failure_sends_explanation(self):
        service = make_report_service()
        service.activity_report.side_effect = StorageError("disk")
        cog = ReportCommandsCog(MagicMock(), service, make_config())
        message = make_message("!showUsers")

        await cog.on_message(message)

        message.channel.send.assert_awaited_once_with(content=USERS_FAILURE_MESSAGE)

    @pytest.mark.asyncio
    async def test_show_users_runs_once_per_message(self):
        service = make_report_service()
        cog = ReportCommandsCog(MagicMock(), service, make_config())

        await cog.on_message(make_message("!showUsers"))

        assert service.activity_report.await_count == 1

    @pytest.mark.asyncio
    async def test_custom_triggers_and_other_messages(self):
        service = make_report_service()
        cog = ReportCommandsCog(MagicMock(), service, make_config(show_users_command="?users"))

        await cog.on_message(make_message("!showUsers"))
        await cog.on_message(make_message("just chatting"))
        await cog.on_message(make_message("?users"))

        assert service.activity_report.await_count == 1
        service.inactivity_report.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_bots_cannot_trigger_reports(self):
        service = make_report_service()
        cog = ReportCommandsCog(MagicMock(), service, make_config())

        await cog.on_message(make_message("!showUsers", bot=True))

        service.activity_report.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_followup_sender_used_for_slash_flow(self):
        service = make_report_service()
        cog = ReportCommandsCog(MagicMock(), service, make_config())
        send_followup = AsyncMock()

        await cog.send_activity_report(send_followup)

        send_followup.assert_awaited_once()
        assert "embeds" in send_followup.await_args.kwargs

    @pytest.mark.asyncio
    async def test_slash_users_outside_guild_is_refused(self):
        service = make_report_service()
        cog = ReportCommandsCog(MagicMock(), service, make_config())
        ctx = MagicMock()
        ctx.guild = None
        ctx.respond = AsyncMock()
        ctx.defer = AsyncMock()
        ctx.send_followup = AsyncMock()

        await ReportCommandsCog.users.callback(cog, ctx)

        ctx.respond.assert_awaited_once_with(content=GUILD_ONLY_MESSAGE, ephemeral=True)
        ctx.defer.assert_not_awaited()
        service.activity_report.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_slash_users_in_guild_sends_report(self):
        service = make_report_service()
        cog = ReportCommandsCog(MagicMock(), service, make_config())
        ctx = MagicMock()
        ctx.respond = AsyncMock()
        ctx.defer = AsyncMock()
        ctx.send_followup = AsyncMock()

        await ReportCommandsCog.users.callback(cog, ctx)

        ctx.defer.assert_awaited_once()
        ctx.send_followup.assert_awaited_once()
        ctx.respond.assert_not_awaited()


class TestEventsListener:

    @pytest.mark.asyncio
    async def test_on_ready_starts_scheduler_once(self):
        bot = MagicMock()
        bot.user = SimpleNamespace(id=1)
        scheduler = MagicMock()
        scheduler.is_running = False
        cog = EventsListenerCog(bot, scheduler)

        await cog.on_ready()
        scheduler.start.assert_called_once()

        scheduler.is_running = True
        await cog.on_ready()
        scheduler.start.assert_called_once()

    @pytest.mark.asyncio
    async def test_on_ready_without_user_does_not_start(self):
        bot = MagicMock()
        bot.user = None
        scheduler = MagicMock()
        cog = EventsListenerCog(bot, scheduler)

        await cog.on_ready()

        scheduler.start.assert_not_called()
