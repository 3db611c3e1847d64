"""Tests for the composition root."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from cattata import main as cattata_main


def make_config(**overrides):
    values = {"guild_id": None, "report_channel_id": None, "check_interval": 60.0}
    values.update(overrides)
    return SimpleNamespace(**values)


def test_build_intents_enables_members_and_message_content():
    intents = cattata_main.build_intents()

    assert intents.members is True
    assert intents.message_content is True
    assert intents.guilds is True
    assert intents.messages is True


@pytest.mark.asyncio
async def test_scheduled_check_evaluates_first_guild():
    guild = MagicMock()
    bot = SimpleNamespace(guilds=[guild])
    report_service = MagicMock()
    report_service.evaluate_guild = AsyncMock(return_value=SimpleNamespace(entries=[], diagnostics=[]))

    scheduler = cattata_main.build_scheduler(bot, report_service, make_config())

    assert await scheduler.run_once() is True
    report_service.evaluate_guild.assert_awaited_once_with(guild)


@pytest.mark.asyncio
async def test_scheduled_check_without_guild_fails_tick_only():
    report_service = MagicMock()
    report_service.evaluate_guild = AsyncMock()

    scheduler = cattata_main.build_scheduler(SimpleNamespace(guilds=[]), report_service, make_config())

    assert await scheduler.run_once() is False
    report_service.evaluate_guild.assert_not_awaited()


@pytest.mark.asyncio
async def test_shutdown_runtime_closes_everything():
    scheduler = MagicMock()
    scheduler.shutdown = AsyncMock()
    bot = MagicMock()
    bot.is_closed.return_value = False
    bot.close = AsyncMock()
    database = MagicMock()
    database.close = AsyncMock()

    await cattata_main.shutdown_runtime(bot, scheduler, database)

    scheduler.shutdown.assert_awaited_once()
    bot.close.assert_awaited_once()
    database.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_shutdown_runtime_continues_after_scheduler_error():
    scheduler = MagicMock()
    scheduler.shutdown = AsyncMock(side_effect=RuntimeError("stuck"))
    database = MagicMock()
    database.close = AsyncMock()

    await cattata_main.shutdown_runtime(None, scheduler, database)

    database.close.assert_awaited_once()
