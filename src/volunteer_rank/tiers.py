"""Volunteer tier table and tier resolution. Pure functions, no side effects."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum


class TierConfigError(ValueError):
    """The tier table violates its ordering invariants."""


class Tier(str, Enum):
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    DIAMOND = "DIAMOND"


@dataclass(frozen=True)
class TierInfo:
    tier: Tier
    label: str
    min_hours: float
    min_points: int
    color: str
    icon: str
    benefits: tuple[str, ...] = ()


DEFAULT_TIERS: tuple[TierInfo, ...] = (
    TierInfo(
        tier=Tier.BRONZE,
        label="Bronze",
        min_hours=0,
        min_points=0,
        color="#CD7F32",
        icon="\U0001f949",
        benefits=("Basic volunteer access", "Join projects", "Earn badges"),
    ),
    TierInfo(
        tier=Tier.SILVER,
        label="Silver",
        min_hours=50,
        min_points=500,
        color="#C0C0C0",
        icon="\U0001f948",
        benefits=(
            "All Bronze benefits",
            "Priority project notifications",
            "Connect with other volunteers",
        ),
    ),
    TierInfo(
        tier=Tier.GOLD,
        label="Gold",
        min_hours=150,
        min_points=1500,
        color="#FFD700",
        icon="\U0001f947",
        benefits=(
            "All Silver benefits",
            "Certificate of appreciation",
            "Volunteer showcase feature",
            "Exclusive project access",
        ),
    ),
    TierInfo(
        tier=Tier.PLATINUM,
        label="Platinum",
        min_hours=500,
        min_points=5000,
        color="#E5E4E2",
        icon="\U0001f48e",
        benefits=(
            "All Gold benefits",
            "Leadership opportunities",
            "Mentor new volunteers",
            "VIP event invitations",
        ),
    ),
    TierInfo(
        tier=Tier.DIAMOND,
        label="Diamond",
        min_hours=1000,
        min_points=10000,
        color="#B9F2FF",
        icon="\U0001f451",
        benefits=(
            "All Platinum benefits",
            "Exclusive Diamond events",
            "Global volunteer network",
            "Ambassador status",
            "Professional development opportunities",
        ),
    ),
)


class TierTable:
    """Ordered, validated tier definitions.

    Validation runs once in the constructor. A table that exists is a table
    whose thresholds strictly increase with rank, so resolver and progress
    functions never re-check it.
    """

    def __init__(self, tiers: Iterable[TierInfo]) -> None:
        self._tiers: tuple[TierInfo, ...] = tuple(tiers)
        _validate(self._tiers)
        self._by_tier: dict[Tier, TierInfo] = {info.tier: info for info in self._tiers}
        self._rank: dict[Tier, int] = {info.tier: i for i, info in enumerate(self._tiers)}

    @property
    def tiers(self) -> tuple[TierInfo, ...]:
        return self._tiers

    @property
    def floor(self) -> TierInfo:
        return self._tiers[0]

    @property
    def top(self) -> TierInfo:
        return self._tiers[-1]

    def info(self, tier: Tier) -> TierInfo:
        """Return the attributes of ``tier``."""
        return self._by_tier[Tier(tier)]

    def rank(self, tier: Tier) -> int:
        """Return the 0-based rank of ``tier`` (Bronze is 0)."""
        return self._rank[Tier(tier)]

    def next_tier(self, tier: Tier) -> TierInfo | None:
        """Return the tier immediately above ``tier``, or None at the top."""
        idx = self.rank(tier)
        if idx == len(self._tiers) - 1:
            return None
        return self._tiers[idx + 1]

    def __iter__(self) -> Iterator[TierInfo]:
        return iter(self._tiers)

    def __len__(self) -> int:
        return len(self._tiers)

    def __repr__(self) -> str:
        thresholds = ", ".join(f"{t.label}={t.min_hours:g}h" for t in self._tiers)
        return f"TierTable({thresholds})"


def _validate(tiers: tuple[TierInfo, ...]) -> None:
    order = [info.tier for info in tiers]
    if order != list(Tier):
        names = ", ".join(t.value for t in Tier)
        raise TierConfigError(f"Tier table must list exactly {names} in that order")

    if tiers[0].min_hours != 0:
        raise TierConfigError(
            f"{tiers[0].label} must start at 0 hours, got {tiers[0].min_hours:g}"
        )

    for info in tiers:
        if info.min_hours < 0 or info.min_points < 0:
            raise TierConfigError(f"{info.label} has a negative threshold")

    for lower, upper in zip(tiers, tiers[1:]):
        if upper.min_hours <= lower.min_hours:
            raise TierConfigError(
                f"min_hours must strictly increase: {lower.label}={lower.min_hours:g}, "
                f"{upper.label}={upper.min_hours:g}"
            )
        if upper.min_points <= lower.min_points:
            raise TierConfigError(
                f"min_points must strictly increase: {lower.label}={lower.min_points}, "
                f"{upper.label}={upper.min_points}"
            )


TIER_TABLE = TierTable(DEFAULT_TIERS)


def calculate_tier(hours: float, table: TierTable = TIER_TABLE) -> Tier:
    """Return the highest tier whose ``min_hours`` is met.

    The boundary is inclusive: exactly 150 hours is Gold. Negative hours are
    treated as 0 and resolve to the floor tier, the same clamp
    ``calculate_points`` applies.
    """
    hours = max(0.0, hours)
    for info in reversed(table.tiers):
        if hours >= info.min_hours:
            return info.tier
    return table.floor.tier
