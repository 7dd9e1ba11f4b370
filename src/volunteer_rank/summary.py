"""Plain-dict views of engine results, shared by the CLI and the MCP server."""

from __future__ import annotations

from collections.abc import Iterable

from volunteer_rank.badges import (
    BadgeStatus,
    VolunteerStats,
    check_badges,
    get_closest_badges,
    get_newly_unlocked,
    is_auto_awardable,
)
from volunteer_rank.progression import refresh_progression
from volunteer_rank.tiers import TierInfo, TierTable


def tier_summary(info: TierInfo) -> dict:
    return {
        "tier": info.tier.value,
        "label": info.label,
        "min_hours": info.min_hours,
        "min_points": info.min_points,
        "color": info.color,
        "icon": info.icon,
        "benefits": list(info.benefits),
    }


def progression_summary(hours: float, table: TierTable) -> dict:
    """Points, tier and progress for ``hours`` as a flat dict."""
    result = refresh_progression(hours, table)
    info = table.info(result.tier)
    next_tier = result.progress.next_tier
    return {
        "hours": hours,
        "points": result.points,
        "tier": result.tier.value,
        "tier_label": info.label,
        "tier_color": info.color,
        "tier_icon": info.icon,
        "benefits": list(info.benefits),
        "next_tier": next_tier.value if next_tier else None,
        "next_tier_label": table.info(next_tier).label if next_tier else None,
        "hours_needed": result.progress.hours_needed,
        "percent": result.progress.percent,
    }


def badge_summary(status: BadgeStatus) -> dict:
    definition = status.definition
    return {
        "id": definition.id,
        "name": definition.name,
        "description": definition.description,
        "icon": definition.icon,
        "category": definition.category.value,
        "rarity": definition.rarity.value,
        "progress": status.progress,
        "unlocked": status.unlocked,
        "auto": is_auto_awardable(definition),
    }


def badges_report(stats: VolunteerStats, awarded: Iterable[str] = ()) -> dict:
    """Badge statuses for ``stats`` plus ids newly unlocked beyond ``awarded``."""
    statuses = check_badges(stats)
    newly = get_newly_unlocked(statuses, awarded)
    return {
        "badges": [badge_summary(s) for s in statuses],
        "unlocked_count": sum(1 for s in statuses if s.unlocked),
        "total_count": len(statuses),
        "newly_unlocked": [b.id for b in newly],
        "closest": [s.definition.id for s in get_closest_badges(statuses)],
    }
