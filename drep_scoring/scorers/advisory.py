"""
Advisory output: reliability hints, missing profile fields and improvement
recommendations.

Gains are conservative lower bounds on composite points so the product never
over-promises an improvement.
"""

import logging
from typing import Iterable, Optional, Sequence

from drep_scoring.constants import (
    PROFILE_FIELD_POINTS,
    RATIONALE_EXEMPT_TYPES,
    RECOMMENDATION_CONSISTENCY_TARGET,
    RECOMMENDATION_PARTICIPATION_TARGET,
    RECOMMENDATION_PROFILE_FIELD_POINTS,
    RECOMMENDATION_RATIONALE_TARGET,
    RELIABILITY_HINT_MIN_STREAK,
    RELIABILITY_HINT_STALE_EPOCHS,
)
from drep_scoring.schemas.enums import Pillar, ProposalPriority, RecommendationPriority
from drep_scoring.schemas.profile import ProfileMetadata
from drep_scoring.schemas.results import Recommendation, RecommendationInput
from drep_scoring.schemas.votes import VoteRecord
from drep_scoring.scorers.profile import MetadataLike, validated_social_links
from drep_scoring.scorers.rates import apply_rationale_curve, round_half_up
from drep_scoring.scorers.reliability import calculate_reliability
from drep_scoring.scorers.weights_registry import DEFAULT_WEIGHTS, ScoringWeights
from drep_scoring.utils.chain import proposal_priority

logger = logging.getLogger(__name__)

SOCIAL_LINKS_FIELD = "social links"
SECOND_SOCIAL_LINK_FIELD = "a second social link (2+ recommended)"
UNLISTED_FIELD_POINTS = 5
MISSING_VOTE_TITLES_SHOWN = 5
BROKEN_LINKS_SHOWN = 2


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


# =============================================================================
# Reliability hints
# =============================================================================


def reliability_hint(streak: int, recency: int) -> str:
    """One-line reliability hint from stored streak and recency."""
    if recency > RELIABILITY_HINT_STALE_EPOCHS:
        return f"Last voted {_plural(recency, 'epoch')} ago"
    if streak >= RELIABILITY_HINT_MIN_STREAK:
        return f"{streak}-epoch active streak"
    if recency == 0:
        return "Voted this epoch"
    return f"Last voted {_plural(recency, 'epoch')} ago"


def reliability_hint_from_series(
    epoch_counts: Sequence[int],
    first_epoch: Optional[int],
    current_epoch: int,
) -> str:
    """Reliability hint computed from a raw epoch vote count series."""
    if not epoch_counts or first_epoch is None or not any(c > 0 for c in epoch_counts):
        return "No voting history"
    result = calculate_reliability(epoch_counts, first_epoch, current_epoch)
    return reliability_hint(result.streak, result.recency)


# =============================================================================
# Profile
# =============================================================================


def missing_profile_fields(metadata: MetadataLike, broken_uris: Optional[Iterable[str]] = None) -> list[str]:
    """Profile fields a DRep should fill in, in display order."""
    profile = ProfileMetadata.from_raw(metadata)
    if profile is None:
        return [name for name, _ in PROFILE_FIELD_POINTS] + [SOCIAL_LINKS_FIELD]

    missing = [name for name, _ in PROFILE_FIELD_POINTS if not profile.text(name)]
    link_count = len(validated_social_links(profile, broken_uris))
    if link_count == 0:
        missing.append(SOCIAL_LINKS_FIELD)
    elif link_count == 1:
        missing.append(SECOND_SOCIAL_LINK_FIELD)
    return missing


# =============================================================================
# Recommendations
# =============================================================================


def _binding(vote: VoteRecord) -> bool:
    return (vote.proposal_type or "") not in RATIONALE_EXEMPT_TYPES


def missing_rationale_votes(votes: Iterable[VoteRecord]) -> list[VoteRecord]:
    """Binding votes without a rationale, critical first, then important, then standard.

    Order within a priority band is preserved.
    """
    missing = [v for v in votes if not v.has_rationale and _binding(v)]
    return sorted(missing, key=lambda v: -proposal_priority(v.proposal_type).sort_weight)


def _profile_recommendation(drep: RecommendationInput, weights: ScoringWeights) -> Optional[Recommendation]:
    if drep.profile_completeness >= 100:
        return None
    missing = missing_profile_fields(drep.metadata, drep.broken_links)
    points_table = dict(RECOMMENDATION_PROFILE_FIELD_POINTS)
    gain = sum(points_table.get(f, UNLISTED_FIELD_POINTS) for f in missing)
    weighted_gain = round_half_up(min(gain, 100 - drep.profile_completeness) * weights.profile_completeness)

    return Recommendation(
        id="complete-profile",
        pillar=Pillar.PROFILE_COMPLETENESS,
        priority=RecommendationPriority.HIGH if drep.profile_completeness < 50 else RecommendationPriority.MEDIUM,
        title="Complete your profile metadata",
        description=(
            f"Missing: {', '.join(missing)}. This is the easiest improvement: "
            "no on-chain transactions needed."
        ),
        potential_gain=max(1, weighted_gain),
    )


def _broken_links_recommendation(drep: RecommendationInput) -> Optional[Recommendation]:
    count = len(drep.broken_links)
    if count == 0:
        return None
    return Recommendation(
        id="fix-broken-links",
        pillar=Pillar.PROFILE_COMPLETENESS,
        priority=RecommendationPriority.HIGH,
        title=_plural(count, "broken social link"),
        description=(
            f"Fix or update: {', '.join(drep.broken_links[:BROKEN_LINKS_SHOWN])}. "
            "Broken links don't count toward Profile Completeness."
        ),
        potential_gain=max(1, count * 2),
    )


def _rationale_recommendations(drep: RecommendationInput) -> list[Recommendation]:
    adjusted = apply_rationale_curve(drep.rationale_rate)
    if adjusted >= RECOMMENDATION_RATIONALE_TARGET:
        return []

    recs = []
    without_rationale = [v for v in drep.votes if _binding(v) and not v.has_rationale]
    critical_missing = [
        v for v in without_rationale if proposal_priority(v.proposal_type) == ProposalPriority.CRITICAL
    ]

    if critical_missing:
        recs.append(
            Recommendation(
                id="rationale-critical-votes",
                pillar=Pillar.RATIONALE,
                priority=RecommendationPriority.HIGH,
                title="Provide rationale on critical votes",
                description=(
                    f"You have {_plural(len(critical_missing), 'critical governance vote')} without rationale. "
                    "Critical votes count 3x in your score."
                ),
                potential_gain=min(8, len(critical_missing) * 2),
            )
        )

    if without_rationale:
        titles = ", ".join(v.title or "Unknown" for v in without_rationale[:MISSING_VOTE_TITLES_SHOWN])
        recs.append(
            Recommendation(
                id="rationale-binding-votes",
                pillar=Pillar.RATIONALE,
                priority=RecommendationPriority.HIGH if adjusted < 30 else RecommendationPriority.MEDIUM,
                title=f"{len(without_rationale)} binding votes without rationale",
                description=(
                    f"Recent: {titles}. Providing rationale on future binding votes "
                    "will steadily improve this score."
                ),
                potential_gain=min(6, round_half_up(len(without_rationale) * 0.5)),
            )
        )
    return recs


def _participation_recommendations(drep: RecommendationInput, weights: ScoringWeights) -> list[Recommendation]:
    participation = drep.effective_participation
    if participation >= RECOMMENDATION_PARTICIPATION_TARGET:
        return []

    recs = [
        Recommendation(
            id="vote-more",
            pillar=Pillar.EFFECTIVE_PARTICIPATION,
            priority=RecommendationPriority.HIGH if participation < 50 else RecommendationPriority.MEDIUM,
            title="Vote on more proposals",
            description=(
                f"Your effective participation is {participation:g}%. Voting on every available proposal "
                "is the most direct way to improve this."
            ),
            potential_gain=min(
                10,
                round_half_up((RECOMMENDATION_PARTICIPATION_TARGET - participation) * weights.effective_participation),
            ),
        )
    ]

    if drep.deliberation_modifier < 1.0:
        discount = round_half_up((1 - drep.deliberation_modifier) * 100)
        recs.append(
            Recommendation(
                id="diversify-votes",
                pillar=Pillar.EFFECTIVE_PARTICIPATION,
                priority=RecommendationPriority.LOW,
                title="Diversify your voting pattern",
                description=(
                    f"Your participation is discounted {discount}% because your votes appear uniform. "
                    "Voting differently on proposals you genuinely disagree with will remove this penalty."
                ),
                potential_gain=max(
                    0,
                    round_half_up(
                        participation * (1 - drep.deliberation_modifier) * weights.effective_participation
                    ),
                ),
            )
        )
    return recs


def _consistency_recommendation(drep: RecommendationInput, weights: ScoringWeights) -> Optional[Recommendation]:
    if drep.consistency >= RECOMMENDATION_CONSISTENCY_TARGET:
        return None
    return Recommendation(
        id="vote-consistently",
        pillar=Pillar.CONSISTENCY,
        priority=RecommendationPriority.HIGH if drep.consistency < 50 else RecommendationPriority.MEDIUM,
        title="Vote more consistently across epochs",
        description=(
            f"Your consistency is {drep.consistency:g}%. Voting in every epoch that has proposals "
            "will raise this steadily."
        ),
        potential_gain=min(
            6, round_half_up((RECOMMENDATION_CONSISTENCY_TARGET - drep.consistency) * weights.consistency)
        ),
    )


def generate_recommendations(
    drep: RecommendationInput,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[Recommendation]:
    """Actionable improvements sorted by potential gain, then priority."""
    recs: list[Recommendation] = []

    profile_rec = _profile_recommendation(drep, weights)
    if profile_rec:
        recs.append(profile_rec)
    broken_rec = _broken_links_recommendation(drep)
    if broken_rec:
        recs.append(broken_rec)
    recs.extend(_rationale_recommendations(drep))
    recs.extend(_participation_recommendations(drep, weights))
    consistency_rec = _consistency_recommendation(drep, weights)
    if consistency_rec:
        recs.append(consistency_rec)

    recs.sort(key=lambda r: (-r.potential_gain, r.priority.rank))
    logger.debug(f"Generated {len(recs)} recommendations")
    return recs
