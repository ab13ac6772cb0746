"""Pydantic schemas and enums for DRep scoring inputs and results."""

from drep_scoring.schemas.enums import (
    Pillar,
    PillarStatus,
    ProposalPriority,
    RecommendationPriority,
    SizeTier,
    TreasuryTier,
    ValuePreference,
    VoteChoice,
)
from drep_scoring.schemas.profile import ProfileMetadata, SocialReference
from drep_scoring.schemas.results import (
    BatchResult,
    DRepScoreBreakdown,
    DRepScoringInput,
    PillarBreakdown,
    PillarScoreSet,
    PillarSummary,
    Recommendation,
    RecommendationInput,
    ReliabilityResult,
    ScoreSimulation,
    ScoreSnapshot,
    SimulatedScore,
    VoteDistribution,
)
from drep_scoring.schemas.votes import (
    DRepVote,
    PrecomputedVoteSource,
    ProposalImportance,
    RationaleSource,
    RawVoteSource,
    VoteRecord,
    as_rationale_source,
)

__all__ = [
    # Enums
    "Pillar",
    "PillarStatus",
    "ProposalPriority",
    "RecommendationPriority",
    "SizeTier",
    "TreasuryTier",
    "ValuePreference",
    "VoteChoice",
    # Votes
    "DRepVote",
    "VoteRecord",
    "ProposalImportance",
    "RationaleSource",
    "RawVoteSource",
    "PrecomputedVoteSource",
    "as_rationale_source",
    # Profile
    "ProfileMetadata",
    "SocialReference",
    # Results
    "BatchResult",
    "DRepScoreBreakdown",
    "DRepScoringInput",
    "PillarBreakdown",
    "PillarScoreSet",
    "PillarSummary",
    "Recommendation",
    "RecommendationInput",
    "ReliabilityResult",
    "ScoreSimulation",
    "ScoreSnapshot",
    "SimulatedScore",
    "VoteDistribution",
]
