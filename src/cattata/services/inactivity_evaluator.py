"""
Inactivity evaluation.

A member is reported as inactive when, checked in this order:

1. they hold the watched role,
2. the ledger has a record for them (never-seen members are "not tracked
   yet", not inactive),
3. ``now - last_activity`` is strictly greater than the threshold.

A failed lookup for one member excludes that member and is kept as a
diagnostic; the remaining members are still evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Protocol, Sequence

from cattata.datatypes.activity_datatypes import InactiveEntry, MembershipSnapshot
from cattata.errors import PerMemberLookupError, StorageError
from cattata.util.format_utils import humanize_last_active
from cattata.util.logger import get_logger

logger = get_logger("inactivity_evaluator")


class ActivityLookup(Protocol):
    async def get_last_activity(self, user_id: str) -> int | None: ...


@dataclass(slots=True)
class EvaluationResult:
    """Inactive members plus any per-member lookup failures."""
    entries: List[InactiveEntry] = field(default_factory=list)
    diagnostics: List[PerMemberLookupError] = field(default_factory=list)


def threshold_to_ms(threshold: timedelta) -> int:
    """Convert a threshold to whole milliseconds without float rounding."""
    return threshold // timedelta(milliseconds=1)


async def evaluate_with_diagnostics(
    members: Sequence[MembershipSnapshot],
    ledger: ActivityLookup,
    threshold: timedelta,
    now: int,
) -> EvaluationResult:
    """Evaluate ``members`` and return the inactive ones in snapshot order."""
    threshold_ms = threshold_to_ms(threshold)
    result = EvaluationResult()

    for member in members:
        if not member.holds_target_tag:
            continue

        try:
            last_activity = await ledger.get_last_activity(member.user_id)
        except StorageError as exc:
            diagnostic = PerMemberLookupError(member.user_id, exc)
            result.diagnostics.append(diagnostic)
            logger.warning("[EVALUATOR] %s; member excluded", diagnostic)
            continue

        if last_activity is None:
            logger.debug("[EVALUATOR] Checking user %s (%s): never active, not tracked", member.display_name, member.user_id)
            continue

        inactivity_ms = now - last_activity
        logger.debug(
            "[EVALUATOR] Checking user %s (%s), last activity: %s, inactivity duration: %dms",
            member.display_name,
            member.user_id,
            humanize_last_active(last_activity),
            inactivity_ms,
        )

        if inactivity_ms > threshold_ms:
            result.entries.append(InactiveEntry(user_id=member.user_id, last_activity=last_activity))

    logger.info(
        "[EVALUATOR] Evaluated %d members: %d inactive, %d lookup failures",
        len(members),
        len(result.entries),
        len(result.diagnostics),
    )
    return result


async def evaluate(
    members: Sequence[MembershipSnapshot],
    ledger: ActivityLookup,
    threshold: timedelta,
    now: int,
) -> List[InactiveEntry]:
    """Return the inactive members; lookup failures are logged and skipped."""
    result = await evaluate_with_diagnostics(members, ledger, threshold, now)
    return result.entries
