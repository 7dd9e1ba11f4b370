"""Progress toward the next volunteer tier.

Both functions trust ``current_tier`` to have been computed by
``calculate_tier`` on the same ``hours`` value. A stale tier is not detected:
hours past the next threshold give ``hours_needed == 0`` and a percentage
capped at 100, and hours below the current threshold give a negative
percentage. Use ``progression.refresh_progression`` to keep the two in step.
"""

from __future__ import annotations

from dataclasses import dataclass

from volunteer_rank.tiers import TIER_TABLE, Tier, TierConfigError, TierTable


@dataclass(frozen=True)
class NextTier:
    next_tier: Tier | None
    hours_needed: float


@dataclass(frozen=True)
class TierProgress:
    next_tier: Tier | None
    hours_needed: float
    percent: float  # 0-100, may be negative for an inconsistent current_tier


def get_hours_to_next_tier(
    hours: float, current_tier: Tier, table: TierTable = TIER_TABLE
) -> NextTier:
    """Return the tier above ``current_tier`` and the hours still missing.

    At the top tier returns NextTier(None, 0). hours_needed is never negative.
    """
    upcoming = table.next_tier(current_tier)
    if upcoming is None:
        return NextTier(next_tier=None, hours_needed=0)
    return NextTier(
        next_tier=upcoming.tier,
        hours_needed=max(0, upcoming.min_hours - hours),
    )


def get_tier_progress(hours: float, current_tier: Tier, table: TierTable = TIER_TABLE) -> float:
    """Return percent progress (<= 100) through the current tier band.

    E.g., 185 hours at Gold (150h) toward Platinum (500h) -> 10.0.
    The top tier is always 100.
    """
    upcoming = table.next_tier(current_tier)
    if upcoming is None:
        return 100.0

    current = table.info(current_tier)
    tier_range = upcoming.min_hours - current.min_hours
    if tier_range <= 0:
        raise TierConfigError(
            f"Empty tier band between {current.label} and {upcoming.label}"
        )
    hours_in_band = hours - current.min_hours
    return min(100.0, (hours_in_band / tier_range) * 100)


def get_progress(hours: float, current_tier: Tier, table: TierTable = TIER_TABLE) -> TierProgress:
    """Bundle get_hours_to_next_tier and get_tier_progress into one result."""
    nxt = get_hours_to_next_tier(hours, current_tier, table)
    return TierProgress(
        next_tier=nxt.next_tier,
        hours_needed=nxt.hours_needed,
        percent=get_tier_progress(hours, current_tier, table),
    )
