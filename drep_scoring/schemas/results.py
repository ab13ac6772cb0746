"""
Pydantic schemas for scorer outputs and orchestrator inputs.

All models are frozen value snapshots; serialise with model_dump().
"""

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from drep_scoring.schemas.enums import Pillar, PillarStatus, RecommendationPriority, SizeTier
from drep_scoring.schemas.profile import ProfileMetadata
from drep_scoring.schemas.votes import DRepVote, ProposalImportance, VoteRecord


def _coerce_percent(v: Any) -> float:
    """Missing, None, NaN or non-numeric values count as 0."""
    if v is None or isinstance(v, bool):
        return 0.0
    try:
        value = float(v)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return value


class VoteDistribution(BaseModel):
    """Counts of each vote choice."""

    model_config = ConfigDict(frozen=True)

    yes: int = 0
    no: int = 0
    abstain: int = 0
    total: int = 0

    def share(self, count: int) -> float:
        """Fraction of total, 0 for an empty distribution."""
        return count / self.total if self.total > 0 else 0.0


class ReliabilityResult(BaseModel):
    """Temporal voting reliability and its components (epochs)."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(0, ge=0, le=100)
    streak: int = Field(0, ge=0, description="Consecutive active epochs ending at the last recorded epoch")
    tenure: int = Field(0, ge=0, description="Epochs since the first recorded vote epoch")
    recency: int = Field(0, ge=0, description="Epochs since the last active epoch")
    longest_gap: int = Field(0, ge=0, description="Longest run of inactive epochs between active ones")


class PillarScoreSet(BaseModel):
    """The four 0-100 pillar values feeding the composite."""

    model_config = ConfigDict(frozen=True)

    effective_participation: float = 0.0
    rationale: float = 0.0
    consistency: float = 0.0
    profile_completeness: float = 0.0

    @field_validator("effective_participation", "rationale", "consistency", "profile_completeness", mode="before")
    @classmethod
    def _missing_counts_as_zero(cls, v):
        return _coerce_percent(v)

    def value_for(self, pillar: Pillar) -> float:
        return getattr(self, pillar.value)


class PillarSummary(BaseModel):
    """Minimal pillar view used for the easiest-win hint."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: float = 0.0
    max_points: float = Field(description="Points the pillar can contribute to the composite")

    @field_validator("value", mode="before")
    @classmethod
    def _missing_counts_as_zero(cls, v):
        return _coerce_percent(v)


class PillarBreakdown(PillarSummary):
    """A pillar as reported on a score breakdown."""

    pillar: Pillar
    weight: float
    weighted_points: float
    status: PillarStatus


class DRepScoreBreakdown(BaseModel):
    """Full DRep Score result with every intermediate value."""

    model_config = ConfigDict(frozen=True)

    drep_id: str
    score: int = Field(ge=0, le=100)
    weights_profile: str
    pillars: list[PillarBreakdown]

    participation_rate: int
    deliberation_modifier: float
    raw_rationale_rate: int = Field(description="Unweighted share of votes with a rationale")
    weighted_rationale_rate: int = Field(description="Importance-weighted share before the curve")
    distribution: VoteDistribution
    abstention_penalty: int
    reliability: ReliabilityResult
    size_tier: Optional[SizeTier] = None

    easiest_win: Optional[str] = None
    reliability_hint: str
    missing_profile_fields: list[str] = Field(default_factory=list)

    def pillar(self, pillar: Pillar) -> PillarBreakdown:
        return next(p for p in self.pillars if p.pillar == pillar)


class DRepScoringInput(BaseModel):
    """Everything DRepScorer.evaluate needs for one delegate."""

    model_config = ConfigDict(frozen=True)

    drep_id: str
    votes: list[DRepVote] = Field(default_factory=list)
    total_proposals: int = Field(0, ge=0)
    current_epoch: int
    epoch_vote_counts: Optional[list[int]] = Field(
        None, description="Per-epoch vote counts from first_epoch; derived from votes when omitted"
    )
    first_epoch: Optional[int] = None
    proposal_epochs: Optional[dict[int, int]] = None
    importance_map: Optional[dict[str, ProposalImportance]] = None
    metadata: Optional[ProfileMetadata] = None
    broken_uris: frozenset[str] = Field(default_factory=frozenset)
    voting_power_ada: Optional[float] = None

    @field_validator("epoch_vote_counts", mode="before")
    @classmethod
    def _clamp_counts(cls, v):
        if v is None:
            return None
        return [max(0, int(c or 0)) for c in v]


class ScoreSnapshot(BaseModel):
    """Stored score inputs for what-if simulation."""

    model_config = ConfigDict(frozen=True)

    total_votes: int = Field(0, ge=0)
    rationale_rate: float = Field(0.0, description="Stored raw rationale rate (0-100)")
    deliberation_modifier: float = 1.0
    reliability_score: float = 0.0
    profile_completeness: float = 0.0

    @field_validator("rationale_rate", "reliability_score", "profile_completeness", mode="before")
    @classmethod
    def _missing_counts_as_zero(cls, v):
        return _coerce_percent(v)

    @field_validator("deliberation_modifier", mode="before")
    @classmethod
    def _missing_modifier_is_neutral(cls, v):
        return 1.0 if v is None else v


class SimulatedScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int
    rank: int
    participation: int
    effective_participation: int
    rationale: int
    total_votes: int


class ScoreSimulation(BaseModel):
    """Current vs simulated score after hypothetical extra votes."""

    model_config = ConfigDict(frozen=True)

    current: SimulatedScore
    simulated: SimulatedScore
    total_peers: int

    @property
    def score_delta(self) -> int:
        return self.simulated.score - self.current.score

    @property
    def rank_delta(self) -> int:
        """Positive when the rank improves (moves toward 1)."""
        return self.current.rank - self.simulated.rank


class Recommendation(BaseModel):
    """An actionable improvement with its estimated score gain."""

    model_config = ConfigDict(frozen=True)

    id: str
    pillar: Pillar
    priority: RecommendationPriority
    title: str
    description: str
    potential_gain: int = Field(ge=0, description="Estimated composite points gained")


class RecommendationInput(BaseModel):
    """Current pillar values and context used to build recommendations."""

    model_config = ConfigDict(frozen=True)

    effective_participation: float = 0.0
    rationale_rate: float = Field(0.0, description="Raw rationale rate before the curve")
    consistency: float = 0.0
    profile_completeness: float = 0.0
    deliberation_modifier: float = 1.0
    metadata: Optional[ProfileMetadata] = None
    votes: list[VoteRecord] = Field(default_factory=list)
    broken_links: list[str] = Field(default_factory=list)

    @field_validator(
        "effective_participation", "rationale_rate", "consistency", "profile_completeness", mode="before"
    )
    @classmethod
    def _missing_counts_as_zero(cls, v):
        return _coerce_percent(v)


class BatchResult(BaseModel):
    """Outcome of scoring one delegate in a batch."""

    model_config = ConfigDict(frozen=True)

    drep_id: str
    success: bool
    breakdown: Optional[DRepScoreBreakdown] = None
    error: Optional[str] = None
