"""
Reliability analyzer.

Scores how steadily a delegate votes over time from a dense per-epoch vote
count series. Four components feed the 0-100 score:

- streak: consecutive active epochs ending at the last recorded epoch
- recency: epochs since the last active epoch (lower is better)
- longest_gap: longest silent run between two active epochs (lower is better)
- tenure: epochs since the first recorded epoch

When a proposal-availability map is supplied, silent epochs with no open
proposals are skipped: they neither break a streak nor extend a gap. An epoch
with votes always counts as active.
"""

import logging
from typing import Mapping, Optional, Sequence

from drep_scoring.constants import (
    RELIABILITY_GAP_HORIZON,
    RELIABILITY_RECENCY_HORIZON,
    RELIABILITY_STREAK_TARGET,
    RELIABILITY_TENURE_TARGET,
    W_RELY_GAP,
    W_RELY_RECENCY,
    W_RELY_STREAK,
    W_RELY_TENURE,
)
from drep_scoring.schemas.results import ReliabilityResult
from drep_scoring.scorers.rates import clamp_percent, round_half_up

logger = logging.getLogger(__name__)


def _has_proposals(epoch: int, proposal_epochs: Optional[Mapping[int, int]]) -> bool:
    if proposal_epochs is None:
        return True
    return proposal_epochs.get(epoch, 0) > 0


def _streak(counts: Sequence[int], first_epoch: int, proposal_epochs: Optional[Mapping[int, int]]) -> int:
    streak = 0
    for i in range(len(counts) - 1, -1, -1):
        if counts[i] > 0:
            streak += 1
        elif _has_proposals(first_epoch + i, proposal_epochs):
            break
    return streak


def _longest_gap(counts: Sequence[int], first_epoch: int, proposal_epochs: Optional[Mapping[int, int]]) -> int:
    longest = 0
    current = 0
    seen_active = False
    for i, count in enumerate(counts):
        if count > 0:
            if seen_active:
                longest = max(longest, current)
            seen_active = True
            current = 0
        elif seen_active and _has_proposals(first_epoch + i, proposal_epochs):
            current += 1
    return longest


def reliability_components_score(streak: int, recency: int, longest_gap: int, tenure: int) -> int:
    """Weighted 0-100 score from the four reliability components."""
    streak_pts = min(streak / RELIABILITY_STREAK_TARGET, 1.0) * 100
    recency_pts = max(0.0, 1 - recency / RELIABILITY_RECENCY_HORIZON) * 100
    gap_pts = max(0.0, 1 - longest_gap / RELIABILITY_GAP_HORIZON) * 100
    tenure_pts = min(tenure / RELIABILITY_TENURE_TARGET, 1.0) * 100

    total = (
        W_RELY_STREAK * streak_pts
        + W_RELY_RECENCY * recency_pts
        + W_RELY_GAP * gap_pts
        + W_RELY_TENURE * tenure_pts
    )
    return round_half_up(clamp_percent(total))


def calculate_reliability(
    epoch_counts: Sequence[int],
    first_epoch: Optional[int],
    current_epoch: int,
    proposal_epochs: Optional[Mapping[int, int]] = None,
) -> ReliabilityResult:
    """Compute the reliability score and its components.

    Args:
        epoch_counts: Votes per epoch; index i is epoch first_epoch + i
        first_epoch: Epoch of the first entry, None when unknown
        current_epoch: The epoch to measure recency and tenure against
        proposal_epochs: Optional epoch -> open proposal count; epochs absent
            from a supplied map have no proposals

    Returns:
        ReliabilityResult; all zeros for an empty, unanchored or all-zero series
    """
    if not epoch_counts or first_epoch is None:
        return ReliabilityResult()

    counts = [max(0, c) for c in epoch_counts]
    active = [i for i, c in enumerate(counts) if c > 0]
    if not active:
        return ReliabilityResult()

    last_active_epoch = first_epoch + active[-1]
    tenure = max(0, current_epoch - first_epoch)
    recency = max(0, current_epoch - last_active_epoch)
    streak = _streak(counts, first_epoch, proposal_epochs)
    longest_gap = _longest_gap(counts, first_epoch, proposal_epochs)

    score = reliability_components_score(streak, recency, longest_gap, tenure)
    logger.debug(
        f"Reliability score={score} streak={streak} recency={recency} gap={longest_gap} tenure={tenure}"
    )
    return ReliabilityResult(score=score, streak=streak, tenure=tenure, recency=recency, longest_gap=longest_gap)
