"""Refresh a volunteer's denormalized tier, points and progress fields."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from volunteer_rank.points import calculate_points
from volunteer_rank.progress import TierProgress, get_progress
from volunteer_rank.tiers import TIER_TABLE, Tier, TierTable, calculate_tier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VolunteerProgression:
    """Display fields derived from one hours value."""

    hours: float
    points: int
    tier: Tier
    progress: TierProgress


def refresh_progression(hours: float, table: TierTable = TIER_TABLE) -> VolunteerProgression:
    """Compute points, tier and progress in sequence from the same hours.

    The tier passed to the progress calculator always comes from this call,
    so the result cannot mix a stale tier with fresh hours.
    """
    points = calculate_points(hours)
    tier = calculate_tier(hours, table)
    progress = get_progress(hours, tier, table)
    logger.debug(
        "hours=%s points=%d tier=%s next=%s percent=%.1f",
        hours, points, tier.value,
        progress.next_tier.value if progress.next_tier else None,
        progress.percent,
    )
    return VolunteerProgression(hours=hours, points=points, tier=tier, progress=progress)


def detect_tier_change(
    previous_tier: Tier, hours: float, table: TierTable = TIER_TABLE
) -> Tier | None:
    """Return the new tier if ``hours`` ranks above ``previous_tier``, else None."""
    previous_tier = Tier(previous_tier)
    new_tier = calculate_tier(hours, table)
    if table.rank(new_tier) > table.rank(previous_tier):
        logger.info("Tier upgrade: %s -> %s at %s hours", previous_tier.value, new_tier.value, hours)
        return new_tier
    return None
