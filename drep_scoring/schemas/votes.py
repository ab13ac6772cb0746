"""Pydantic schemas for DRep votes and proposal importance.

Two vote shapes reach the rate calculators:
- DRepVote: a raw on-chain vote with optional rationale anchor and inline payload
- VoteRecord: a precomputed record carrying only a has_rationale flag

Both are consumed through the RationaleSource capability so calculators never
probe field shapes themselves.
"""

from typing import Any, Iterable, Mapping, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict, Field

from drep_scoring.schemas.enums import TreasuryTier, VoteChoice
from drep_scoring.utils.text_fields import has_inline_rationale


def make_proposal_key(tx_hash: Optional[str], index: Optional[int]) -> Optional[str]:
    """Build the "<tx_hash>-<index>" key used by importance maps."""
    if not tx_hash:
        return None
    return f"{tx_hash}-{index or 0}"


class DRepVote(BaseModel):
    """A raw DRep vote as synced from chain."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    proposal_tx_hash: str = Field(description="Governance action transaction hash")
    proposal_index: int = Field(0, description="Governance action index within the transaction")
    vote_tx_hash: Optional[str] = Field(None, description="Transaction hash of the vote itself")
    block_time: Optional[int] = Field(None, description="Unix seconds of the block containing the vote")
    epoch_no: Optional[int] = Field(None, description="Epoch the vote was cast in, if known")
    vote: VoteChoice = Field(description="Yes, No or Abstain")
    meta_url: Optional[str] = Field(None, description="Rationale anchor URL")
    meta_hash: Optional[str] = Field(None, description="Rationale anchor content hash")
    meta_json: Optional[dict[str, Any]] = Field(None, description="Inline rationale payload (CIP-100/108 shape)")

    @property
    def proposal_key(self) -> Optional[str]:
        return make_proposal_key(self.proposal_tx_hash, self.proposal_index)


class VoteRecord(BaseModel):
    """Precomputed vote record (dashboard shape) with a has_rationale flag."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    has_rationale: bool = Field(False, alias="hasRationale")
    vote: Optional[VoteChoice] = None
    proposal_tx_hash: Optional[str] = Field(None, alias="proposalTxHash")
    proposal_index: Optional[int] = Field(None, alias="proposalIndex")
    proposal_type: Optional[str] = Field(None, alias="proposalType")
    title: Optional[str] = None

    @property
    def proposal_key(self) -> Optional[str]:
        return make_proposal_key(self.proposal_tx_hash, self.proposal_index)


class ProposalImportance(BaseModel):
    """Importance attributes of a proposal, used to weight rationale credit."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    proposal_type: str = Field(alias="proposalType")
    treasury_tier: Optional[TreasuryTier] = Field(None, alias="treasuryTier")


# =============================================================================
# Rationale capability
# =============================================================================


class RationaleSource(Protocol):
    """Minimal view of a vote needed by the rationale rate calculators."""

    @property
    def proposal_key(self) -> Optional[str]: ...

    def has_rationale(self) -> bool: ...


class RawVoteSource:
    """Adapter: rationale presence read from a raw vote's anchor or payload."""

    __slots__ = ("vote",)

    def __init__(self, vote: DRepVote):
        self.vote = vote

    @property
    def proposal_key(self) -> Optional[str]:
        return self.vote.proposal_key

    def has_rationale(self) -> bool:
        if self.vote.meta_url:
            return True
        return has_inline_rationale(self.vote.meta_json)


class PrecomputedVoteSource:
    """Adapter: passes a precomputed has_rationale flag through."""

    __slots__ = ("record",)

    def __init__(self, record: VoteRecord):
        self.record = record

    @property
    def proposal_key(self) -> Optional[str]:
        return self.record.proposal_key

    def has_rationale(self) -> bool:
        return self.record.has_rationale is True


VoteLike = Union[DRepVote, VoteRecord, Mapping[str, Any]]


def coerce_vote(vote: VoteLike) -> Union[DRepVote, VoteRecord]:
    """Validate a mapping into the matching vote model; models pass through."""
    if isinstance(vote, (DRepVote, VoteRecord)):
        return vote
    if "hasRationale" in vote or "has_rationale" in vote:
        return VoteRecord.model_validate(vote)
    return DRepVote.model_validate(vote)


def as_rationale_source(vote: VoteLike) -> RationaleSource:
    """Wrap either vote shape in its RationaleSource adapter."""
    vote = coerce_vote(vote)
    if isinstance(vote, VoteRecord):
        return PrecomputedVoteSource(vote)
    return RawVoteSource(vote)


def as_rationale_sources(votes: Iterable[VoteLike]) -> list[RationaleSource]:
    return [as_rationale_source(v) for v in votes]
