"""Tests for refreshing derived progression fields."""

import pytest

from volunteer_rank.progression import detect_tier_change, refresh_progression
from volunteer_rank.tiers import Tier


class TestRefreshProgression:
    def test_reference_volunteer(self):
        result = refresh_progression(185)
        assert result.points == 1850
        assert result.tier == Tier.GOLD
        assert result.progress.next_tier == Tier.PLATINUM
        assert result.progress.hours_needed == 315
        assert result.progress.percent == pytest.approx(10.0)

    def test_new_volunteer(self):
        result = refresh_progression(0)
        assert result.points == 0
        assert result.tier == Tier.BRONZE
        assert result.progress.percent == 0.0

    def test_diamond(self):
        result = refresh_progression(1250)
        assert result.tier == Tier.DIAMOND
        assert result.progress.next_tier is None
        assert result.progress.percent == 100

    def test_percent_always_in_range(self):
        for hours in [0, 0.4, 49.99, 50, 499.5, 1000, 2500]:
            assert 0 <= refresh_progression(hours).progress.percent <= 100


class TestDetectTierChange:
    def test_upgrade(self):
        assert detect_tier_change(Tier.SILVER, 150) == Tier.GOLD

    def test_skip_tiers(self):
        assert detect_tier_change(Tier.BRONZE, 600) == Tier.PLATINUM

    def test_same_tier(self):
        assert detect_tier_change(Tier.GOLD, 200) is None

    def test_never_reports_downgrade(self):
        assert detect_tier_change(Tier.GOLD, 10) is None

    def test_accepts_string_tier(self):
        assert detect_tier_change("BRONZE", 55) == Tier.SILVER
