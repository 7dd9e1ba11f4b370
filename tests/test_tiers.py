"""Tests for the tier table and tier resolution."""

from dataclasses import replace

import pytest

from volunteer_rank.tiers import (
    DEFAULT_TIERS,
    TIER_TABLE,
    Tier,
    TierConfigError,
    TierTable,
    calculate_tier,
)


def _with(tier: Tier, **changes) -> list:
    """DEFAULT_TIERS with one tier's fields replaced."""
    return [replace(t, **changes) if t.tier == tier else t for t in DEFAULT_TIERS]


class TestTierTable:
    def test_five_tiers_in_rank_order(self):
        assert [t.tier for t in TIER_TABLE] == [
            Tier.BRONZE, Tier.SILVER, Tier.GOLD, Tier.PLATINUM, Tier.DIAMOND,
        ]
        assert len(TIER_TABLE) == 5

    def test_reference_thresholds(self):
        hours = {t.tier: t.min_hours for t in TIER_TABLE}
        points = {t.tier: t.min_points for t in TIER_TABLE}
        assert hours == {
            Tier.BRONZE: 0, Tier.SILVER: 50, Tier.GOLD: 150, Tier.PLATINUM: 500, Tier.DIAMOND: 1000,
        }
        assert points[Tier.GOLD] == 1500
        assert points[Tier.DIAMOND] == 10000

    def test_min_hours_strictly_increasing(self):
        tiers = TIER_TABLE.tiers
        for lower, upper in zip(tiers, tiers[1:]):
            assert lower.min_hours < upper.min_hours
            assert lower.min_points < upper.min_points

    def test_floor_and_top(self):
        assert TIER_TABLE.floor.tier == Tier.BRONZE
        assert TIER_TABLE.top.tier == Tier.DIAMOND

    def test_rank(self):
        assert TIER_TABLE.rank(Tier.BRONZE) == 0
        assert TIER_TABLE.rank(Tier.DIAMOND) == 4

    def test_rank_accepts_string_value(self):
        assert TIER_TABLE.rank("GOLD") == 2

    def test_next_tier(self):
        assert TIER_TABLE.next_tier(Tier.GOLD).tier == Tier.PLATINUM
        assert TIER_TABLE.next_tier(Tier.DIAMOND) is None

    def test_info(self):
        gold = TIER_TABLE.info(Tier.GOLD)
        assert gold.label == "Gold"
        assert gold.color == "#FFD700"
        assert "Certificate of appreciation" in gold.benefits

    def test_tier_is_str_enum(self):
        assert Tier.GOLD == "GOLD"
        assert Tier("PLATINUM") is Tier.PLATINUM


class TestTierTableValidation:
    def test_accepts_default(self):
        TierTable(DEFAULT_TIERS)

    def test_rejects_equal_hours(self):
        with pytest.raises(TierConfigError, match="min_hours"):
            TierTable(_with(Tier.GOLD, min_hours=50))

    def test_rejects_decreasing_hours(self):
        with pytest.raises(TierConfigError):
            TierTable(_with(Tier.PLATINUM, min_hours=100))

    def test_rejects_decreasing_points(self):
        with pytest.raises(TierConfigError, match="min_points"):
            TierTable(_with(Tier.SILVER, min_points=2000))

    def test_rejects_nonzero_floor(self):
        with pytest.raises(TierConfigError, match="0 hours"):
            TierTable(_with(Tier.BRONZE, min_hours=5))

    def test_rejects_missing_tier(self):
        with pytest.raises(TierConfigError):
            TierTable(DEFAULT_TIERS[:4])

    def test_rejects_wrong_order(self):
        tiers = list(DEFAULT_TIERS)
        tiers[1], tiers[2] = tiers[2], tiers[1]
        with pytest.raises(TierConfigError):
            TierTable(tiers)

    def test_config_error_is_value_error(self):
        assert issubclass(TierConfigError, ValueError)


class TestCalculateTier:
    def test_zero_hours_is_bronze(self):
        assert calculate_tier(0) == Tier.BRONZE

    def test_boundaries_are_inclusive(self):
        for info in TIER_TABLE:
            assert calculate_tier(info.min_hours) == info.tier

    def test_just_below_boundaries(self):
        assert calculate_tier(49.9) == Tier.BRONZE
        assert calculate_tier(149.99) == Tier.SILVER
        assert calculate_tier(499) == Tier.GOLD
        assert calculate_tier(999.5) == Tier.PLATINUM

    def test_reference_volunteer(self):
        assert calculate_tier(185) == Tier.GOLD

    def test_huge_hours_is_diamond(self):
        assert calculate_tier(1_000_000) == Tier.DIAMOND

    def test_negative_hours_clamp_to_bronze(self):
        assert calculate_tier(-10) == Tier.BRONZE

    def test_monotonic_in_hours(self):
        prev_rank = 0
        hours = 0.0
        while hours <= 1200:
            rank = TIER_TABLE.rank(calculate_tier(hours))
            assert rank >= prev_rank
            prev_rank = rank
            hours += 2.5

    def test_custom_table(self):
        table = TierTable(_with(Tier.SILVER, min_hours=20))
        assert calculate_tier(25, table) == Tier.SILVER
        assert calculate_tier(25) == Tier.BRONZE

    def test_idempotent(self):
        assert calculate_tier(321.5) == calculate_tier(321.5)
