"""
Cardano chain conversions: lovelace, epochs, treasury tiers, proposal priority.
"""

import math
import re
from collections import Counter
from typing import Iterable, Optional, Union

from drep_scoring.constants import (
    CRITICAL_PROPOSAL_TYPES,
    EPOCH_LENGTH_SECONDS,
    IMPORTANT_PROPOSAL_TYPES,
    LOVELACE_PER_ADA,
    SHELLEY_BASE_EPOCH,
    SHELLEY_GENESIS_TIME,
    TREASURY_TIER_ROUTINE,
    TREASURY_TIER_SIGNIFICANT,
)
from drep_scoring.schemas.enums import ProposalPriority, TreasuryTier

# Leading integer, the way chain APIs' numeric strings are parsed
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def lovelace_to_ada(lovelace: Union[str, int, None]) -> float:
    """
    Convert a lovelace amount to ADA.

    Strings are parsed for a leading integer. Anything without one yields NaN
    so corrupt monetary values stay visible downstream instead of turning
    into 0.

    Examples:
        >>> lovelace_to_ada("1000000")
        1.0
        >>> math.isnan(lovelace_to_ada("abc"))
        True
    """
    if isinstance(lovelace, bool) or lovelace is None:
        return math.nan
    if isinstance(lovelace, int):
        return lovelace / LOVELACE_PER_ADA
    match = _LEADING_INT.match(str(lovelace))
    if not match:
        return math.nan
    return int(match.group(1)) / LOVELACE_PER_ADA


def block_time_to_epoch(block_time: int) -> int:
    """Epoch number for a Unix block time (Shelley era)."""
    return (int(block_time) - SHELLEY_GENESIS_TIME) // EPOCH_LENGTH_SECONDS + SHELLEY_BASE_EPOCH


def vote_epoch(vote) -> Optional[int]:
    """Epoch of a vote: its recorded epoch, else derived from block time."""
    if vote.epoch_no is not None:
        return vote.epoch_no
    if vote.block_time is not None:
        return block_time_to_epoch(vote.block_time)
    return None


def epoch_vote_counts(votes: Iterable) -> tuple[Optional[int], list[int]]:
    """
    Group votes into a dense per-epoch count series.

    Returns:
        (first_epoch, counts) where counts[i] is the number of votes cast in
        epoch first_epoch + i. (None, []) when no vote has a known epoch.
    """
    per_epoch = Counter(e for e in (vote_epoch(v) for v in votes) if e is not None)
    if not per_epoch:
        return None, []
    first, last = min(per_epoch), max(per_epoch)
    return first, [per_epoch.get(epoch, 0) for epoch in range(first, last + 1)]


def treasury_tier(withdrawal_ada: Optional[float]) -> Optional[TreasuryTier]:
    """Classify a treasury withdrawal by size. None for non-treasury proposals."""
    if withdrawal_ada is None or math.isnan(withdrawal_ada):
        return None
    if withdrawal_ada < TREASURY_TIER_ROUTINE:
        return TreasuryTier.ROUTINE
    if withdrawal_ada < TREASURY_TIER_SIGNIFICANT:
        return TreasuryTier.SIGNIFICANT
    return TreasuryTier.MAJOR


def proposal_priority(proposal_type: Optional[str]) -> ProposalPriority:
    if proposal_type in CRITICAL_PROPOSAL_TYPES:
        return ProposalPriority.CRITICAL
    if proposal_type in IMPORTANT_PROPOSAL_TYPES:
        return ProposalPriority.IMPORTANT
    return ProposalPriority.STANDARD
