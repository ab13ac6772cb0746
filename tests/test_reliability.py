"""Tests for the reliability analyzer (streak, recency, gaps, tenure)."""

from drep_scoring.schemas.results import ReliabilityResult
from drep_scoring.scorers.reliability import calculate_reliability, reliability_components_score


class TestDegenerateSeries:
    """Empty, unanchored and all-zero series score zero across the board."""

    def test_empty(self):
        assert calculate_reliability([], None, 100) == ReliabilityResult()

    def test_missing_first_epoch(self):
        assert calculate_reliability([1, 2], None, 100).score == 0

    def test_all_zero(self):
        result = calculate_reliability([0, 0, 0], 95, 100)
        assert result == ReliabilityResult()


class TestComponents:
    """Individual component behaviour."""

    def test_consistent_voter(self):
        result = calculate_reliability([3] * 20, 80, 99)
        assert result.score > 70
        assert result.streak == 20
        assert result.tenure == 19
        assert result.recency == 0
        assert result.longest_gap == 0

    def test_perfect_score(self):
        result = calculate_reliability([1] * 21, 80, 100)
        assert result.score == 100

    def test_recent_voter(self):
        result = calculate_reliability([0, 0, 0, 0, 1], 96, 100)
        assert result.recency == 0
        assert result.streak == 1

    def test_recency_counts_from_last_active_epoch(self):
        result = calculate_reliability([1, 1, 0, 0], 10, 20)
        assert result.recency == 9

    def test_gap(self):
        result = calculate_reliability([5, 0, 0, 0, 0, 0, 5], 90, 96)
        assert result.longest_gap == 5
        assert result.tenure == 6

    def test_trailing_zeros_are_not_a_gap(self):
        result = calculate_reliability([1, 0, 0, 0], 10, 13)
        assert result.longest_gap == 0

    def test_streak_stops_at_epoch_with_proposals(self):
        result = calculate_reliability([1, 1, 0, 1, 1], 10, 14)
        assert result.streak == 2

    def test_trailing_zero_breaks_streak(self):
        result = calculate_reliability([1, 1, 1, 0], 10, 13)
        assert result.streak == 0

    def test_negative_counts_treated_as_zero(self):
        result = calculate_reliability([-3, 1], 10, 11)
        assert result.streak == 1
        assert result.longest_gap == 0


class TestProposalAvailability:
    """Epochs without open proposals neither break nor extend runs."""

    def test_filter_keeps_score_positive(self):
        proposal_epochs = {95: 1, 96: 0, 97: 1}
        result = calculate_reliability([0, 0, 1, 0, 0], 95, 99, proposal_epochs)
        assert result.score > 0
        assert result.streak == 1
        assert result.recency == 2

    def test_zero_availability_skipped_in_streak(self):
        proposal_epochs = {10: 1, 11: 1, 12: 0, 13: 1}
        result = calculate_reliability([1, 1, 0, 1], 10, 13, proposal_epochs)
        assert result.streak == 3

    def test_zero_availability_skipped_in_gap(self):
        proposal_epochs = {10: 1, 11: 0, 12: 1, 13: 1}
        result = calculate_reliability([1, 0, 0, 1], 10, 13, proposal_epochs)
        assert result.longest_gap == 1

    def test_absent_epochs_have_no_availability(self):
        result = calculate_reliability([1, 0, 1], 10, 12, {10: 1, 12: 1})
        assert result.longest_gap == 0
        assert result.streak == 2

    def test_active_epochs_count_without_availability(self):
        """Votes in epochs missing from a partial map still extend the streak."""
        with_map = calculate_reliability([1] * 5, 95, 99, {95: 1})
        without_map = calculate_reliability([1] * 5, 95, 99)
        assert with_map.streak == 5
        assert with_map.score == without_map.score == 75

    def test_silent_epoch_with_proposals_breaks_streak(self):
        result = calculate_reliability([1, 0, 1, 1], 10, 13, {11: 2})
        assert result.streak == 2


class TestMonotonicity:
    """More streak/tenure or less recency/gap never lowers the score."""

    def test_streak_and_tenure(self):
        base = reliability_components_score(streak=4, recency=3, longest_gap=2, tenure=8)
        assert reliability_components_score(streak=5, recency=3, longest_gap=2, tenure=8) >= base
        assert reliability_components_score(streak=4, recency=3, longest_gap=2, tenure=9) >= base

    def test_recency_and_gap(self):
        base = reliability_components_score(streak=4, recency=3, longest_gap=2, tenure=8)
        assert reliability_components_score(streak=4, recency=2, longest_gap=2, tenure=8) >= base
        assert reliability_components_score(streak=4, recency=3, longest_gap=1, tenure=8) >= base

    def test_bounds(self):
        assert reliability_components_score(100, 0, 0, 100) == 100
        assert reliability_components_score(0, 100, 100, 0) == 0
