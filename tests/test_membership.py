"""Tests for membership snapshots."""

import asyncio
from types import SimpleNamespace
from unittest.mock import MagicMock

import aiohttp
import discord
import pytest

from cattata.datatypes.activity_datatypes import MembershipSnapshot
from cattata.errors import SnapshotError
from cattata.services.membership import fetch_membership_snapshot, resolve_guild, snapshot_member
from discord_fakes import make_guild, make_member

ROLE_ID = 1289017750722969653


def test_snapshot_member_with_role():
    snapshot = snapshot_member(make_member(1, 10, ROLE_ID), ROLE_ID)

    assert snapshot.user_id == "1"
    assert snapshot.holds_target_tag is True


def test_snapshot_member_without_role():
    assert snapshot_member(make_member(1, 10), ROLE_ID).holds_target_tag is False


def test_snapshot_member_without_configured_role():
    assert snapshot_member(make_member(1, ROLE_ID), None).holds_target_tag is False


@pytest.mark.asyncio
async def test_fetch_preserves_member_order():
    guild = make_guild([make_member(3, ROLE_ID), make_member(1), make_member(2, ROLE_ID)])

    snapshot = await fetch_membership_snapshot(guild, ROLE_ID)

    assert [(m.user_id, m.holds_target_tag) for m in snapshot] == [("3", True), ("1", False), ("2", True)]
    assert all(isinstance(m, MembershipSnapshot) for m in snapshot)
    guild.fetch_members.assert_called_once_with(limit=None)


@pytest.mark.asyncio
async def test_fetch_failure_raises_snapshot_error():
    guild = make_guild(error=discord.ClientException("members intent disabled"))

    with pytest.raises(SnapshotError) as exc_info:
        await fetch_membership_snapshot(guild, ROLE_ID)

    assert isinstance(exc_info.value.__cause__, discord.ClientException)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        aiohttp.ClientConnectionError("connection reset"),
        asyncio.TimeoutError(),
        OSError("network unreachable"),
    ],
)
async def test_transport_failure_raises_snapshot_error(error):
    guild = make_guild(error=error)

    with pytest.raises(SnapshotError) as exc_info:
        await fetch_membership_snapshot(guild, ROLE_ID)

    assert exc_info.value.__cause__ is error


def test_resolve_configured_guild():
    guild = MagicMock()
    bot = MagicMock()
    bot.get_guild.return_value = guild

    assert resolve_guild(bot, 555) is guild
    bot.get_guild.assert_called_once_with(555)


def test_resolve_missing_configured_guild():
    bot = MagicMock()
    bot.get_guild.return_value = None

    with pytest.raises(SnapshotError):
        resolve_guild(bot, 555)


def test_resolve_first_guild_by_default():
    first, second = MagicMock(), MagicMock()
    bot = SimpleNamespace(guilds=[first, second])

    assert resolve_guild(bot, None) is first


def test_resolve_without_guilds():
    with pytest.raises(SnapshotError):
        resolve_guild(SimpleNamespace(guilds=[]), None)
