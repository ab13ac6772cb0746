"""Deterministic DRep Score scorers."""

from drep_scoring.scorers.advisory import (
    generate_recommendations,
    missing_profile_fields,
    missing_rationale_votes,
    reliability_hint,
    reliability_hint_from_series,
)
from drep_scoring.scorers.batch import score_batch
from drep_scoring.scorers.composite import (
    DRepScorer,
    composite_score,
    easiest_win,
    pillar_status,
    simulate_score,
    size_tier,
)
from drep_scoring.scorers.deliberation import deliberation_modifier, deliberation_modifier_for
from drep_scoring.scorers.profile import profile_completeness, validated_social_links
from drep_scoring.scorers.rates import (
    abstention_penalty,
    apply_rationale_curve,
    effective_participation,
    has_quality_rationale,
    participation_rate,
    rationale_rate,
    value_alignment,
    vote_distribution,
    weighted_rationale_rate,
)
from drep_scoring.scorers.reliability import calculate_reliability
from drep_scoring.scorers.weights_registry import (
    DEFAULT_WEIGHTS,
    ScoringWeights,
    clear_cache,
    get_weight_profile,
    list_profiles,
)

__all__ = [
    # Rates
    "participation_rate",
    "effective_participation",
    "rationale_rate",
    "weighted_rationale_rate",
    "apply_rationale_curve",
    "abstention_penalty",
    "vote_distribution",
    "value_alignment",
    "has_quality_rationale",
    # Deliberation
    "deliberation_modifier",
    "deliberation_modifier_for",
    # Reliability
    "calculate_reliability",
    # Profile
    "profile_completeness",
    "validated_social_links",
    # Composite
    "DRepScorer",
    "composite_score",
    "pillar_status",
    "size_tier",
    "easiest_win",
    "simulate_score",
    # Advisory
    "reliability_hint",
    "reliability_hint_from_series",
    "missing_profile_fields",
    "generate_recommendations",
    "missing_rationale_votes",
    # Batch
    "score_batch",
    # Weights
    "DEFAULT_WEIGHTS",
    "ScoringWeights",
    "get_weight_profile",
    "list_profiles",
    "clear_cache",
]
