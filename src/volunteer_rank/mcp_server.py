"""MCP server for volunteer-rank.

Exposes tier, points and badge checks as MCP tools.
Run via: python3 -m volunteer_rank.mcp_server
"""
from __future__ import annotations

import math
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import FastMCP

from volunteer_rank.badges import VolunteerStats
from volunteer_rank.config import load_tier_table
from volunteer_rank.roster import RosterError, build_entry, load_roster, rank_entries, tier_distribution
from volunteer_rank.summary import badges_report, progression_summary, tier_summary
from volunteer_rank.tiers import TierConfigError, TierTable

mcp = FastMCP(name="volunteer-rank")


@lru_cache(maxsize=1)
def _get_table() -> TierTable:
    return load_tier_table()


def _bad_hours(hours: float) -> str | None:
    if not math.isfinite(hours):
        return "hours must be a finite number"
    if hours < 0:
        return "hours cannot be negative"
    return None


@mcp.tool()
def get_tier(hours: float) -> dict[str, Any]:
    """Get points, tier and progress to the next tier for a total of volunteer hours."""
    error = _bad_hours(hours)
    if error:
        return {"error": error}
    return progression_summary(hours, _get_table())


@mcp.tool()
def list_tiers() -> dict[str, Any]:
    """List the tier thresholds and benefits."""
    return {"tiers": [tier_summary(info) for info in _get_table()]}


@mcp.tool()
def check_badges(
    hours: float = 0.0,
    projects_completed: int = 0,
    skills: list[str] | None = None,
    teams_led: int = 0,
    awarded: list[str] | None = None,
) -> dict[str, Any]:
    """Check every badge against a volunteer's stats.

    awarded: badge ids the volunteer already holds; they are left out of
             newly_unlocked.
    """
    error = _bad_hours(hours)
    if error:
        return {"error": error}
    if projects_completed < 0 or teams_led < 0:
        return {"error": "counts cannot be negative"}
    stats = VolunteerStats(
        hours=hours,
        projects_completed=projects_completed,
        skills=frozenset(skills or []),
        teams_led=teams_led,
    )
    return badges_report(stats, awarded or [])


@mcp.tool()
def get_leaderboard(roster_path: str, top: int = 10) -> dict[str, Any]:
    """Rank volunteers from a JSON roster file by hours.

    top: how many ranked entries to return (0 returns none).
    """
    if top < 0:
        return {"error": "top cannot be negative"}
    try:
        records = load_roster(Path(roster_path))
    except RosterError as exc:
        return {"error": str(exc)}
    table = _get_table()
    ranked = rank_entries([build_entry(r, table) for r in records])
    return {
        "entries": ranked[:top],
        "count": len(ranked),
        "distribution": tier_distribution(records, table),
    }


def main() -> None:
    try:
        _get_table()
    except TierConfigError as exc:
        # stdout carries the MCP stdio transport
        sys.exit(f"Invalid tier configuration: {exc}")
    mcp.run()


if __name__ == "__main__":
    main()
