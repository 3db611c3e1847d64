"""
Membership snapshots taken from Discord.

The evaluator never talks to Discord; it receives the list built here.
"""

from __future__ import annotations

import asyncio
from typing import List

import aiohttp
import discord

from cattata.datatypes.activity_datatypes import MembershipSnapshot
from cattata.errors import SnapshotError
from cattata.util.logger import get_logger

logger = get_logger("membership")

# Discord API errors plus transport failures from the HTTP and gateway layers
_SNAPSHOT_FAILURES = (discord.DiscordException, aiohttp.ClientError, asyncio.TimeoutError, OSError)


def resolve_guild(bot: discord.Bot, guild_id: int | None) -> discord.Guild:
    """Return the configured guild, or the first guild the bot is in.

    Raises:
        SnapshotError: If no matching guild is available.
    """
    if guild_id is not None:
        guild = bot.get_guild(guild_id)
        if guild is None:
            raise SnapshotError(f"Configured guild {guild_id} is not available")
        return guild

    if not bot.guilds:
        raise SnapshotError("The bot is not in any guild")
    return bot.guilds[0]


def snapshot_member(member: discord.Member, target_role_id: int | None) -> MembershipSnapshot:
    holds_role = target_role_id is not None and any(role.id == target_role_id for role in member.roles)
    return MembershipSnapshot(
        user_id=str(member.id),
        holds_target_tag=holds_role,
        display_name=str(member),
    )


async def fetch_membership_snapshot(guild: discord.Guild, target_role_id: int | None) -> List[MembershipSnapshot]:
    """Fetch every member of ``guild`` and record whether they hold the role.

    Raises:
        SnapshotError: If the member list could not be fetched.
    """
    if target_role_id is None:
        logger.warning("[MEMBERSHIP] No target role configured; no member will qualify")

    try:
        members = [member async for member in guild.fetch_members(limit=None)]
    except _SNAPSHOT_FAILURES as exc:
        raise SnapshotError(f"Failed to fetch members of guild {guild.id}") from exc

    logger.info("[MEMBERSHIP] Fetched %d members from guild %s", len(members), guild.name)
    return [snapshot_member(member, target_role_id) for member in members]
