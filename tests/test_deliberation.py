"""Tests for the deliberation modifier (rubber-stamp discount)."""

import pytest

from drep_scoring.schemas.results import VoteDistribution
from drep_scoring.scorers.deliberation import deliberation_modifier, deliberation_modifier_for


class TestDeliberationModifier:
    """Tiers on the dominant vote share."""

    def test_small_sample_bypassed(self):
        assert deliberation_modifier(10, 0, 0) == 1.0
        assert deliberation_modifier(0, 0, 0) == 1.0

    def test_above_95_percent(self):
        assert deliberation_modifier(100, 2, 2) == pytest.approx(0.70)

    def test_exactly_95_percent_falls_to_next_tier(self):
        assert deliberation_modifier(100, 3, 2) == pytest.approx(0.85)

    def test_exactly_90_percent(self):
        assert deliberation_modifier(100, 5, 5) == pytest.approx(0.95)

    def test_exactly_85_percent_is_neutral(self):
        assert deliberation_modifier(100, 8, 7) == 1.0

    def test_balanced(self):
        assert deliberation_modifier(100, 30, 20) == 1.0

    def test_unanimous_eleven_votes(self):
        assert deliberation_modifier(11, 0, 0) == pytest.approx(0.70)


class TestDeliberationModifierFor:
    """Largest choice is dominant regardless of which choice it is."""

    def test_no_dominant(self):
        dist = VoteDistribution(yes=2, no=96, abstain=2, total=100)
        assert deliberation_modifier_for(dist) == pytest.approx(0.70)

    def test_abstain_dominant(self):
        dist = VoteDistribution(yes=4, no=4, abstain=92, total=100)
        assert deliberation_modifier_for(dist) == pytest.approx(0.85)

    def test_empty(self):
        assert deliberation_modifier_for(VoteDistribution()) == 1.0
