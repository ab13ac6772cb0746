"""
Deliberation modifier.

Discounts participation for delegates whose votes are near-uniform
(rubber-stamping). Small samples are left alone.
"""

from drep_scoring.constants import DELIBERATION_MIN_VOTES, DELIBERATION_TIERS
from drep_scoring.schemas.results import VoteDistribution


def deliberation_modifier(total_votes: int, minority_count_a: int, minority_count_b: int) -> float:
    """Participation multiplier (0.70-1.0) from the dominant vote share.

    Tiers, checked top-down on the dominant share:
        > 0.95       → 0.70
        (0.90, 0.95] → 0.85
        (0.85, 0.90] → 0.95
        otherwise    → 1.0
    """
    if total_votes <= DELIBERATION_MIN_VOTES:
        return 1.0
    dominant_share = (total_votes - minority_count_a - minority_count_b) / total_votes
    for lower_bound, multiplier in DELIBERATION_TIERS:
        if dominant_share > lower_bound:
            return multiplier
    return 1.0


def deliberation_modifier_for(distribution: VoteDistribution) -> float:
    """Modifier for a distribution: the largest choice is dominant, the other two are minorities."""
    counts = sorted((distribution.yes, distribution.no, distribution.abstain), reverse=True)
    return deliberation_modifier(distribution.total, counts[1], counts[2])
