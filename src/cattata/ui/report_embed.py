"""
Embed rendering and delivery for report pages.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, List, Sequence

import discord

from cattata.datatypes.report_datatypes import PageAccent, ReportBatch, ReportPage
from cattata.util.logger import get_logger

logger = get_logger("report_embed")

ACCENT_COLORS = {
    PageAccent.NORMAL: discord.Color.green(),
    PageAccent.ALERT: discord.Color.red(),
}

# channel.send / ApplicationContext.send_followup both accept ``embeds=``
EmbedSender = Callable[..., Awaitable[Any]]


def render_page(page: ReportPage, footer: str | None = None) -> discord.Embed:
    """Render one report page as an embed coloured by its accent."""
    embed = discord.Embed(
        title=page.title,
        description=page.body,
        color=ACCENT_COLORS.get(page.accent, discord.Color.green()),
    )
    if footer:
        embed.set_footer(text=footer)
    return embed


def render_batch(batch: ReportBatch, footer: str | None = None) -> List[discord.Embed]:
    return [render_page(page, footer) for page in batch]


async def send_batches(send: EmbedSender, batches: Sequence[ReportBatch], footer: str | None = None) -> None:
    """Deliver each batch as one message, in order."""
    for batch in batches:
        await send(embeds=render_batch(batch, footer))
    logger.debug("[REPORTS] Delivered %d report message(s)", len(batches))
