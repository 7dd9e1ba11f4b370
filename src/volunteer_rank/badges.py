"""Badge definitions and requirement checking for volunteer-rank."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class Rarity(str, Enum):
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class BadgeCategory(str, Enum):
    HOURS = "hours"
    PROJECTS = "projects"
    SKILLS = "skills"
    LEADERSHIP = "leadership"
    SPECIAL = "special"


@dataclass(frozen=True)
class VolunteerStats:
    """Read-only snapshot of a volunteer's accumulated record."""

    hours: float = 0.0
    projects_completed: int = 0
    skills: frozenset[str] = field(default_factory=frozenset)
    teams_led: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VolunteerStats:
        """Build a snapshot from snake_case or camelCase keys.

        Raises ValueError for non-numeric counts or a non-list skills value.
        """
        def pick(snake: str, camel: str, default: Any) -> Any:
            if snake in data:
                return data[snake]
            return data.get(camel, default)

        skills = pick("skills", "skills", [])
        if isinstance(skills, str) or not isinstance(skills, Iterable):
            raise ValueError(f"skills must be a list of strings, got {skills!r}")
        try:
            stats = cls(
                hours=float(pick("hours", "totalHours", 0)),
                projects_completed=int(pick("projects_completed", "projectsCompleted", 0)),
                skills=frozenset(str(s) for s in skills),
                teams_led=int(pick("teams_led", "teamsLed", 0)),
            )
        except (TypeError, ValueError, OverflowError) as exc:
            raise ValueError(f"Invalid volunteer stats: {exc}") from exc
        if not math.isfinite(stats.hours):
            raise ValueError(f"hours must be a finite number, got {stats.hours!r}")
        return stats


@dataclass(frozen=True)
class HoursRequirement:
    threshold: float


@dataclass(frozen=True)
class ProjectsRequirement:
    threshold: int


@dataclass(frozen=True)
class SkillRequirement:
    skill: str


@dataclass(frozen=True)
class LeadershipRequirement:
    threshold: int


@dataclass(frozen=True)
class SpecialRequirement:
    """A condition the engine cannot evaluate (e.g. volunteering during Ramadan)."""

    condition: str


BadgeRequirement = Union[
    HoursRequirement,
    ProjectsRequirement,
    SkillRequirement,
    LeadershipRequirement,
    SpecialRequirement,
]

_REQUIREMENT_TYPES: dict[str, type] = {
    "hours": HoursRequirement,
    "projects": ProjectsRequirement,
    "skills": SkillRequirement,
    "leadership": LeadershipRequirement,
    "special": SpecialRequirement,
}


def requirement_from_dict(data: Mapping[str, Any]) -> BadgeRequirement:
    """Parse {"type": "hours", "value": 100} into a requirement.

    Raises ValueError on an unknown type or a value of the wrong kind.
    """
    kind = str(data.get("type", "")).lower()
    if kind not in _REQUIREMENT_TYPES:
        raise ValueError(
            f"Unknown badge requirement type {data.get('type')!r}. "
            f"Must be one of: {', '.join(_REQUIREMENT_TYPES)}"
        )
    if "value" not in data:
        raise ValueError(f"Badge requirement {kind!r} has no value")
    value = data["value"]

    if kind in ("skills", "special"):
        if not isinstance(value, str):
            raise ValueError(f"{kind} requirement value must be a string, got {value!r}")
        return _REQUIREMENT_TYPES[kind](value)

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{kind} requirement value must be a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"{kind} requirement value must be finite, got {value!r}")
    if kind == "hours":
        return HoursRequirement(float(value))
    if value != int(value):
        raise ValueError(f"{kind} requirement value must be a whole number, got {value!r}")
    return _REQUIREMENT_TYPES[kind](int(value))


def check_badge_requirement(requirement: BadgeRequirement, stats: VolunteerStats) -> bool:
    """Return True if ``stats`` satisfies ``requirement``.

    Skill names match exactly (case-sensitive). SpecialRequirement is always
    False: it marks a badge that cannot be awarded automatically.
    """
    if isinstance(requirement, HoursRequirement):
        return stats.hours >= requirement.threshold
    if isinstance(requirement, ProjectsRequirement):
        return stats.projects_completed >= requirement.threshold
    if isinstance(requirement, SkillRequirement):
        return requirement.skill in stats.skills
    if isinstance(requirement, LeadershipRequirement):
        return stats.teams_led >= requirement.threshold
    if isinstance(requirement, SpecialRequirement):
        return False
    raise TypeError(f"Unsupported badge requirement: {requirement!r}")


def requirement_progress(requirement: BadgeRequirement, stats: VolunteerStats) -> float:
    """Return progress toward ``requirement`` as a fraction in [0.0, 1.0]."""
    if isinstance(requirement, HoursRequirement):
        current, target = stats.hours, requirement.threshold
    elif isinstance(requirement, ProjectsRequirement):
        current, target = stats.projects_completed, requirement.threshold
    elif isinstance(requirement, LeadershipRequirement):
        current, target = stats.teams_led, requirement.threshold
    elif isinstance(requirement, SkillRequirement):
        return 1.0 if check_badge_requirement(requirement, stats) else 0.0
    elif isinstance(requirement, SpecialRequirement):
        return 0.0
    else:
        raise TypeError(f"Unsupported badge requirement: {requirement!r}")

    if target <= 0:
        return 1.0
    return max(0.0, min(current / target, 1.0))


@dataclass(frozen=True)
class BadgeDef:
    id: str
    name: str
    description: str
    category: BadgeCategory
    rarity: Rarity
    icon: str
    requirements: tuple[BadgeRequirement, ...]


@dataclass
class BadgeStatus:
    definition: BadgeDef
    progress: float  # 0.0 to 1.0, mean over requirements
    unlocked: bool


BADGES: list[BadgeDef] = [
    BadgeDef(
        id="first_steps",
        name="First Steps",
        description="Complete your first volunteer project",
        category=BadgeCategory.PROJECTS,
        rarity=Rarity.COMMON,
        icon="\U0001f3af",
        requirements=(ProjectsRequirement(1),),
    ),
    BadgeDef(
        id="getting_started",
        name="Getting Started",
        description="Volunteer for 10 hours",
        category=BadgeCategory.HOURS,
        rarity=Rarity.COMMON,
        icon="⏰",
        requirements=(HoursRequirement(10),),
    ),
    BadgeDef(
        id="dedicated_volunteer",
        name="Dedicated Volunteer",
        description="Volunteer for 100 hours",
        category=BadgeCategory.HOURS,
        rarity=Rarity.RARE,
        icon="⭐",
        requirements=(HoursRequirement(100),),
    ),
    BadgeDef(
        id="community_hero",
        name="Community Hero",
        description="Volunteer for 500 hours",
        category=BadgeCategory.HOURS,
        rarity=Rarity.EPIC,
        icon="\U0001f3c6",
        requirements=(HoursRequirement(500),),
    ),
    BadgeDef(
        id="legend",
        name="Legend",
        description="Volunteer for 1000 hours",
        category=BadgeCategory.HOURS,
        rarity=Rarity.LEGENDARY,
        icon="\U0001f451",
        requirements=(HoursRequirement(1000),),
    ),
    BadgeDef(
        id="team_player",
        name="Team Player",
        description="Complete 10 projects",
        category=BadgeCategory.PROJECTS,
        rarity=Rarity.RARE,
        icon="\U0001f91d",
        requirements=(ProjectsRequirement(10),),
    ),
    BadgeDef(
        id="project_master",
        name="Project Master",
        description="Complete 50 projects",
        category=BadgeCategory.PROJECTS,
        rarity=Rarity.EPIC,
        icon="\U0001f396",
        requirements=(ProjectsRequirement(50),),
    ),
    BadgeDef(
        id="first_aid_certified",
        name="First Aid Certified",
        description="Complete first aid training and 5 projects",
        category=BadgeCategory.SKILLS,
        rarity=Rarity.RARE,
        icon="\U0001f3e5",
        requirements=(SkillRequirement("First Aid"), ProjectsRequirement(5)),
    ),
    BadgeDef(
        id="natural_leader",
        name="Natural Leader",
        description="Lead 10 volunteer teams",
        category=BadgeCategory.LEADERSHIP,
        rarity=Rarity.EPIC,
        icon="\U0001f31f",
        requirements=(LeadershipRequirement(10),),
    ),
    BadgeDef(
        id="global_citizen",
        name="Global Citizen",
        description="Volunteer in 3 different countries",
        category=BadgeCategory.SPECIAL,
        rarity=Rarity.LEGENDARY,
        icon="\U0001f30d",
        requirements=(SpecialRequirement("countries"),),
    ),
    BadgeDef(
        id="ramadan_warrior",
        name="Ramadan Warrior",
        description="Volunteer during Ramadan",
        category=BadgeCategory.SPECIAL,
        rarity=Rarity.RARE,
        icon="\U0001f319",
        requirements=(SpecialRequirement("ramadan"),),
    ),
    BadgeDef(
        id="food_hero",
        name="Food Hero",
        description="Complete 20 food distribution projects",
        category=BadgeCategory.SKILLS,
        rarity=Rarity.EPIC,
        icon="\U0001f372",
        requirements=(SpecialRequirement("food_distribution_projects"),),
    ),
]


def is_auto_awardable(badge: BadgeDef) -> bool:
    """False if any requirement is special and needs a separate evaluator."""
    return not any(isinstance(r, SpecialRequirement) for r in badge.requirements)


def is_badge_unlocked(badge: BadgeDef, stats: VolunteerStats) -> bool:
    """A badge unlocks when every one of its requirements is met."""
    return all(check_badge_requirement(r, stats) for r in badge.requirements)


def check_badges(stats: VolunteerStats, badges: list[BadgeDef] | None = None) -> list[BadgeStatus]:
    """Check every badge independently against the same snapshot."""
    results: list[BadgeStatus] = []
    for badge in BADGES if badges is None else badges:
        if badge.requirements:
            progress = sum(requirement_progress(r, stats) for r in badge.requirements) / len(
                badge.requirements
            )
        else:
            progress = 0.0
        unlocked = is_badge_unlocked(badge, stats)
        results.append(
            BadgeStatus(
                definition=badge,
                progress=1.0 if unlocked else progress,
                unlocked=unlocked,
            )
        )
    return results


def get_newly_unlocked(statuses: list[BadgeStatus], already_awarded: Iterable[str]) -> list[BadgeDef]:
    """Return unlocked badges whose id is not in ``already_awarded``."""
    awarded = set(already_awarded)
    return [s.definition for s in statuses if s.unlocked and s.definition.id not in awarded]


def get_closest_badges(statuses: list[BadgeStatus], n: int = 3) -> list[BadgeStatus]:
    """Return the N locked, auto-awardable badges closest to unlocking."""
    in_progress = [s for s in statuses if not s.unlocked and is_auto_awardable(s.definition)]
    in_progress.sort(key=lambda s: s.progress, reverse=True)
    return in_progress[:n]
