"""Shared fixtures for DRep scoring tests."""

import sys
from pathlib import Path

import pytest

# Add repo root to path so tests can import drep_scoring without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

from drep_scoring.schemas.votes import DRepVote, VoteRecord  # noqa: E402


@pytest.fixture
def make_vote():
    """Factory for raw DRepVote objects with sensible defaults."""
    counter = {"n": 0}

    def _make(**overrides) -> DRepVote:
        counter["n"] += 1
        defaults = dict(
            proposal_tx_hash=f"tx{counter['n']:04d}",
            proposal_index=0,
            vote_tx_hash=f"vtx{counter['n']:04d}",
            block_time=1700000000,
            vote="Yes",
            meta_url=None,
            meta_hash=None,
            meta_json=None,
        )
        defaults.update(overrides)
        return DRepVote(**defaults)

    return _make


@pytest.fixture
def make_record():
    """Factory for precomputed VoteRecord objects."""

    def _make(has_rationale: bool = False, proposal_type: str = "TreasuryWithdrawals", **overrides) -> VoteRecord:
        return VoteRecord(has_rationale=has_rationale, proposal_type=proposal_type, **overrides)

    return _make


@pytest.fixture
def full_metadata():
    """A complete CIP-119 profile with two working social links (scores 100)."""
    return {
        "givenName": "Alice",
        "objectives": "Build better governance",
        "motivations": "Community service",
        "qualifications": "PhD in CS",
        "bio": "Cardano builder since 2020",
        "references": [
            {"uri": "https://twitter.com/alice", "label": "Twitter"},
            {"uri": "https://github.com/alice", "label": "GitHub"},
        ],
    }
