"""
Rate calculators for the DRep Score.

Pure functions turning vote collections into 0-100 percentages:
participation, rationale provision (plain and importance-weighted), the
rationale curve, abstention penalty, vote distribution and value alignment.
Every function returns 0 for empty input rather than dividing by zero.
"""

import logging
import math
from typing import Iterable, Mapping, Optional, Sequence

from drep_scoring.constants import (
    ABSTENTION_PENALTY_MAX_MULTIPLIER,
    ABSTENTION_PENALTY_TIERS,
    CRITICAL_PROPOSAL_TYPES,
    CRITICAL_RATIONALE_WEIGHT,
    EXEMPT_RATIONALE_WEIGHT,
    MIN_RATIONALE_LENGTH,
    RATIONALE_CURVE_KNOTS,
    RATIONALE_EXEMPT_TYPES,
    STANDARD_RATIONALE_WEIGHT,
)
from drep_scoring.schemas.enums import ValuePreference, VoteChoice
from drep_scoring.schemas.results import VoteDistribution
from drep_scoring.schemas.votes import DRepVote, ProposalImportance, VoteLike, as_rationale_sources
from drep_scoring.utils.text_fields import inline_rationale_text

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3, not 2)."""
    return int(math.floor(value + 0.5))


def clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, value))


def interpolate_score(value: float, knots: Sequence[tuple[float, float]]) -> float:
    """Piecewise-linear interpolation between (value, score) knots.

    Knots must be sorted by the first element (value). Values outside the
    knot range take the nearest end score.

    Example:
        knots = [(0, 0), (20, 30), (60, 70), (100, 100)]
        interpolate_score(10, knots) → 15.0  (halfway between 0 and 30)
    """
    if value <= knots[0][0]:
        return knots[0][1]
    if value >= knots[-1][0]:
        return knots[-1][1]
    for i in range(len(knots) - 1):
        x0, y0 = knots[i]
        x1, y1 = knots[i + 1]
        if x0 <= value <= x1:
            t = (value - x0) / (x1 - x0)
            return y0 + t * (y1 - y0)
    return knots[-1][1]


# =============================================================================
# Participation
# =============================================================================


def participation_rate(votes_cast: int, total_proposals: int) -> int:
    """Share of available proposals voted on, capped at 100."""
    if total_proposals <= 0:
        return 0
    return int(clamp_percent(round_half_up(votes_cast / total_proposals * 100)))


def effective_participation(participation: float, modifier: float) -> int:
    """Participation after the deliberation discount."""
    return int(clamp_percent(round_half_up(participation * modifier)))


# =============================================================================
# Rationale
# =============================================================================


def rationale_rate(votes: Iterable[VoteLike]) -> int:
    """Share of votes carrying a rationale. Accepts raw votes or precomputed records."""
    sources = as_rationale_sources(votes)
    if not sources:
        return 0
    with_rationale = sum(1 for s in sources if s.has_rationale())
    return round_half_up(with_rationale / len(sources) * 100)


def rationale_weight(importance: Optional[ProposalImportance]) -> int:
    """Credit weight for a vote's rationale.

    InfoAction is non-binding and excluded. Critical governance actions count
    triple; everything else, including proposals missing from the map and
    treasury withdrawals of any tier, counts once.
    """
    if importance is None:
        return STANDARD_RATIONALE_WEIGHT
    if importance.proposal_type in RATIONALE_EXEMPT_TYPES:
        return EXEMPT_RATIONALE_WEIGHT
    if importance.proposal_type in CRITICAL_PROPOSAL_TYPES:
        return CRITICAL_RATIONALE_WEIGHT
    return STANDARD_RATIONALE_WEIGHT


def weighted_rationale_rate(
    votes: Iterable[VoteLike],
    importance_map: Optional[Mapping[str, ProposalImportance]] = None,
) -> int:
    """Importance-weighted rationale rate. 0 when every vote is exempt."""
    importance_map = importance_map or {}
    total_weight = 0
    weighted_with_rationale = 0
    for source in as_rationale_sources(votes):
        key = source.proposal_key
        weight = rationale_weight(importance_map.get(key) if key else None)
        total_weight += weight
        if source.has_rationale():
            weighted_with_rationale += weight
    if total_weight == 0:
        return 0
    return round_half_up(weighted_with_rationale / total_weight * 100)


def apply_rationale_curve(raw_percent: Optional[float]) -> int:
    """Lift low rationale rates along a concave curve; 100 stays 100."""
    if raw_percent is None or math.isnan(raw_percent):
        return 0
    return round_half_up(interpolate_score(clamp_percent(raw_percent), RATIONALE_CURVE_KNOTS))


def has_quality_rationale(vote: DRepVote, resolved_text: Optional[str] = None) -> bool:
    """Whether a vote's rationale is substantive.

    Resolved (fetched) text is authoritative when given. Otherwise inline
    payload text is measured, and an anchor URL alone gets the benefit of the
    doubt.
    """
    if resolved_text is not None:
        return len(resolved_text) >= MIN_RATIONALE_LENGTH

    inline = inline_rationale_text(vote.meta_json)
    if inline is not None and len(inline) >= MIN_RATIONALE_LENGTH:
        return True

    return bool(vote.meta_url)


# =============================================================================
# Distribution, abstention, alignment
# =============================================================================


def vote_distribution(votes: Iterable[DRepVote]) -> VoteDistribution:
    yes = no = abstain = 0
    for vote in votes:
        if vote.vote == VoteChoice.YES:
            yes += 1
        elif vote.vote == VoteChoice.NO:
            no += 1
        elif vote.vote == VoteChoice.ABSTAIN:
            abstain += 1
    return VoteDistribution(yes=yes, no=no, abstain=abstain, total=yes + no + abstain)


def abstention_penalty(votes: Sequence[DRepVote]) -> int:
    """Penalty (0-100, higher is worse) that grows with the abstention rate."""
    if not votes:
        return 0
    abstentions = sum(1 for v in votes if v.vote == VoteChoice.ABSTAIN)
    if abstentions == 0:
        return 0
    rate = abstentions / len(votes) * 100

    for upper_bound, multiplier in ABSTENTION_PENALTY_TIERS:
        if rate < upper_bound:
            return round_half_up(rate * multiplier)
    return round_half_up(rate * ABSTENTION_PENALTY_MAX_MULTIPLIER)


def _preference_score(preference: str, votes: Sequence[DRepVote], dist: VoteDistribution) -> float:
    non_abstain_share = dist.share(dist.total - dist.abstain)
    if preference == ValuePreference.HIGH_PARTICIPATION.value:
        return non_abstain_share * 100
    if preference == ValuePreference.ACTIVE_RATIONALE_PROVIDER.value:
        return rationale_rate(votes)
    if preference == ValuePreference.TREASURY_CONSERVATIVE.value:
        return dist.share(dist.no) * 100
    if preference == ValuePreference.PRO_DEFI.value:
        return dist.share(dist.yes) * 70
    if preference == ValuePreference.PRO_PRIVACY.value:
        return rationale_rate(votes) * 0.5
    if preference == ValuePreference.PRO_DECENTRALIZATION.value:
        return non_abstain_share * 70
    logger.debug(f"Unrecognised value preference '{preference}' scores 0")
    return 0.0


def value_alignment(votes: Sequence[DRepVote], preferences: Sequence[str]) -> int:
    """Average fit between a voting record and delegator value preferences.

    Unrecognised preferences score 0 but still count toward the average.
    """
    if not votes or not preferences:
        return 0
    dist = vote_distribution(votes)
    total = 0.0
    for preference in preferences:
        key = preference.value if isinstance(preference, ValuePreference) else preference
        total += _preference_score(key, votes, dist)
    return round_half_up(total / len(preferences))
