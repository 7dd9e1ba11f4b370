"""CLI commands for volunteer-rank."""

from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path

from volunteer_rank.badges import VolunteerStats
from volunteer_rank.config import get_log_level, load_tier_table
from volunteer_rank.display import (
    print_badges,
    print_error,
    print_leaderboard,
    print_tier_card,
    print_tier_table,
)
from volunteer_rank.log import configure_logging
from volunteer_rank.roster import (
    RosterError,
    build_entry,
    load_roster,
    rank_entries,
    tier_distribution,
)
from volunteer_rank.summary import badges_report, progression_summary, tier_summary
from volunteer_rank.tiers import TierConfigError, TierTable

logger = logging.getLogger(__name__)


def _non_negative_hours(value: str) -> float:
    try:
        hours = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid hours: {value!r}") from None
    if not math.isfinite(hours):
        raise argparse.ArgumentTypeError(f"hours must be a finite number: {value!r}")
    if hours < 0:
        raise argparse.ArgumentTypeError("hours cannot be negative")
    return hours


def _non_negative_int(value: str) -> int:
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count: {value!r}") from None
    if count < 0:
        raise argparse.ArgumentTypeError("count cannot be negative")
    return count


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="volunteer-rank",
        description="Volunteer tiers, points and badges",
    )
    parser.add_argument("--config", "-c", type=Path, default=None, help="Config file path")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command")

    tier_p = subparsers.add_parser("tier", help="Show tier, points and progress for an hours total")
    tier_p.add_argument("--hours", type=_non_negative_hours, required=True)

    subparsers.add_parser("tiers", help="List tier thresholds")

    badges_p = subparsers.add_parser("badges", help="Check badges against a volunteer's stats")
    badges_p.add_argument("--hours", type=_non_negative_hours, default=0.0)
    badges_p.add_argument("--projects", type=_non_negative_int, default=0)
    badges_p.add_argument("--skill", action="append", default=[], help="Skill (repeatable)")
    badges_p.add_argument("--teams-led", type=_non_negative_int, default=0)
    badges_p.add_argument("--awarded", action="append", default=[], help="Badge id already awarded")

    lb_p = subparsers.add_parser("leaderboard", help="Rank volunteers from a roster file")
    lb_p.add_argument("--roster", "-r", type=Path, required=True, help="JSON roster file")
    lb_p.add_argument("--top", type=_non_negative_int, default=10)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else get_log_level(args.config))
    command = args.command or "tiers"

    try:
        table = load_tier_table(args.config)
    except TierConfigError as exc:
        print_error(f"Invalid tier configuration: {exc}")
        sys.exit(1)

    if command == "tier":
        do_tier(table, hours=args.hours)
    elif command == "tiers":
        do_tiers(table)
    elif command == "badges":
        stats = VolunteerStats(
            hours=args.hours,
            projects_completed=args.projects,
            skills=frozenset(args.skill),
            teams_led=args.teams_led,
        )
        do_badges(stats, awarded=args.awarded)
    elif command == "leaderboard":
        result = do_leaderboard(table, roster=args.roster, top=args.top)
        if not result["ok"]:
            sys.exit(1)


def do_tier(table: TierTable, hours: float) -> dict:
    """Show tier, points and progress for ``hours``."""
    data = progression_summary(hours, table)
    print_tier_card(data)
    return data


def do_tiers(table: TierTable) -> dict:
    """Show the active tier table."""
    tiers = [tier_summary(info) for info in table]
    print_tier_table(tiers)
    return {"tiers": tiers}


def do_badges(stats: VolunteerStats, awarded: list[str] | None = None) -> dict:
    """Show badge progress and which badges are newly unlocked."""
    report = badges_report(stats, awarded or [])
    print_badges(report["badges"], newly_unlocked=report["newly_unlocked"])
    if report["newly_unlocked"]:
        logger.info("Newly unlocked badges: %s", ", ".join(report["newly_unlocked"]))
    return report


def do_leaderboard(table: TierTable, roster: Path, top: int = 10) -> dict:
    """Show the ranked roster and tier distribution."""
    try:
        records = load_roster(roster)
    except RosterError as exc:
        print_error(str(exc))
        return {"ok": False, "reason": "bad_roster"}

    ranked = rank_entries([build_entry(r, table) for r in records])[:top]
    distribution = tier_distribution(records, table)
    print_leaderboard(ranked, distribution)
    return {"ok": True, "entries": ranked, "count": len(records), "distribution": distribution}
