"""Volunteer roster loading and leaderboard ranking for volunteer-rank.

A roster is a JSON list of volunteer objects supplied by the caller:

    [{"id": "v1", "name": "Ahmad Ibrahim", "hours": 1250,
      "projectsCompleted": 40, "skills": ["First Aid"], "teamsLed": 12}]

Ranking and tier counts are pure functions over the loaded records.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from volunteer_rank.badges import VolunteerStats
from volunteer_rank.points import calculate_points
from volunteer_rank.tiers import TIER_TABLE, TierTable, calculate_tier

logger = logging.getLogger(__name__)


class RosterError(ValueError):
    """The roster file cannot be read or is not a JSON list."""


@dataclass(frozen=True)
class VolunteerRecord:
    id: str
    name: str
    stats: VolunteerStats


def _parse_record(data: object) -> VolunteerRecord | None:
    """Parse one roster item. Returns None if it fails validation."""
    if not isinstance(data, dict):
        return None
    volunteer_id = data.get("id")
    name = data.get("name")
    if not volunteer_id or not name:
        return None
    try:
        stats = VolunteerStats.from_dict(data)
    except ValueError:
        return None
    if stats.hours < 0:
        return None
    return VolunteerRecord(id=str(volunteer_id), name=str(name), stats=stats)


def load_roster(path: Path) -> list[VolunteerRecord]:
    """Read a roster file and return its valid records.

    Raises RosterError if the file is missing, not JSON, or not a list.
    Invalid items are skipped with a warning.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise RosterError(f"Cannot read roster {path}: {exc}") from exc
    if not isinstance(data, list):
        raise RosterError(f"Roster {path} must contain a JSON list of volunteers")

    records: list[VolunteerRecord] = []
    for i, item in enumerate(data):
        record = _parse_record(item)
        if record is None:
            logger.warning("Skipping invalid roster entry #%d in %s", i, path)
            continue
        records.append(record)
    logger.debug("Loaded %d of %d roster entries from %s", len(records), len(data), path)
    return records


def build_entry(record: VolunteerRecord, table: TierTable = TIER_TABLE) -> dict:
    """Construct a leaderboard entry dict from a volunteer record."""
    hours = record.stats.hours
    return {
        "volunteer_id": record.id,
        "name": record.name,
        "tier": calculate_tier(hours, table).value,
        "hours": hours,
        "points": calculate_points(hours),
        "projects": record.stats.projects_completed,
    }


def rank_entries(entries: list[dict]) -> list[dict]:
    """Sort entries by hours descending. Adds 'rank' key (1-based).

    Tie-break: projects desc, then name asc.
    """
    sorted_entries = sorted(
        entries,
        key=lambda e: (
            -e.get("hours", 0),
            -e.get("projects", 0),
            e.get("name", ""),
        ),
    )
    for i, entry in enumerate(sorted_entries):
        entry["rank"] = i + 1
    return sorted_entries


def tier_distribution(records: list[VolunteerRecord], table: TierTable = TIER_TABLE) -> dict[str, int]:
    """Count volunteers per tier. Every tier is present, in rank order."""
    counts = {info.tier.value: 0 for info in table}
    for record in records:
        counts[calculate_tier(record.stats.hours, table).value] += 1
    return counts
