"""
Composite DRep Score.

Combines the four pillars into a 0-100 score:

    Effective participation  40%   participation x deliberation modifier
    Rationale                25%   importance-weighted rate, curve-adjusted
    Reliability              20%   streak, recency, gaps, tenure
    Profile completeness     15%   CIP-119 fields + validated social links

Weights come from the weights registry; "v2_legacy" keeps the older
rationale-led split for history comparisons.
"""

import logging
import math
from typing import Any, Mapping, Optional, Sequence, Union

from drep_scoring.constants import (
    PILLAR_NEEDS_WORK_THRESHOLD,
    PILLAR_STRONG_THRESHOLD,
    RATIONALE_EXEMPT_TYPES,
    SIZE_TIER_THRESHOLDS,
)
from drep_scoring.schemas.enums import Pillar, PillarStatus, SizeTier
from drep_scoring.schemas.results import (
    DRepScoreBreakdown,
    DRepScoringInput,
    PillarBreakdown,
    PillarScoreSet,
    PillarSummary,
    ScoreSimulation,
    ScoreSnapshot,
    SimulatedScore,
)
from drep_scoring.scorers.advisory import missing_profile_fields, reliability_hint
from drep_scoring.scorers.deliberation import deliberation_modifier_for
from drep_scoring.scorers.profile import profile_completeness
from drep_scoring.scorers.rates import (
    abstention_penalty,
    apply_rationale_curve,
    clamp_percent,
    effective_participation,
    participation_rate,
    rationale_rate,
    round_half_up,
    vote_distribution,
    weighted_rationale_rate,
)
from drep_scoring.scorers.reliability import calculate_reliability
from drep_scoring.scorers.weights_registry import DEFAULT_WEIGHTS, ScoringWeights, get_weight_profile
from drep_scoring.utils.chain import epoch_vote_counts
from drep_scoring.utils.scoring_audit import Adjustment, ScoreImpact, ScoringAuditLog

logger = logging.getLogger(__name__)

PillarsLike = Union[PillarScoreSet, Mapping[str, Any]]


# =============================================================================
# Composite and classification
# =============================================================================


def composite_score(pillars: PillarsLike, weights: ScoringWeights = DEFAULT_WEIGHTS) -> int:
    """Weighted sum of the pillars, rounded and clamped to 0-100.

    Missing, None or NaN pillar values count as 0.
    """
    if not isinstance(pillars, PillarScoreSet):
        pillars = PillarScoreSet.model_validate(dict(pillars))
    total = sum(pillars.value_for(p) * weights.weight_for(p) for p in Pillar)
    return round_half_up(clamp_percent(total))


def pillar_status(value: Optional[float]) -> PillarStatus:
    """strong >= 80, needs-work 50-79, low < 50."""
    if value is None or math.isnan(value):
        return PillarStatus.LOW
    if value >= PILLAR_STRONG_THRESHOLD:
        return PillarStatus.STRONG
    if value >= PILLAR_NEEDS_WORK_THRESHOLD:
        return PillarStatus.NEEDS_WORK
    return PillarStatus.LOW


def size_tier(total_ada: Optional[float]) -> SizeTier:
    """Voting power band. Unknown or NaN power is treated as Small."""
    if total_ada is None or math.isnan(total_ada):
        return SizeTier.SMALL
    for lower, upper, tier in SIZE_TIER_THRESHOLDS:
        if lower <= total_ada < upper:
            return SizeTier(tier)
    return SizeTier.SMALL


def easiest_win(pillars: Sequence[Union[PillarSummary, Mapping[str, Any]]]) -> Optional[str]:
    """Label of the pillar with the largest point gain.

    Gain is (100 - value) / 100 x max_points; the first pillar wins ties.
    Low pillars get a " (Needs Work)" suffix. None when every pillar is strong.
    """
    summaries = [p if isinstance(p, PillarSummary) else PillarSummary.model_validate(dict(p)) for p in pillars]
    if all(pillar_status(p.value) == PillarStatus.STRONG for p in summaries):
        return None

    best: Optional[PillarSummary] = None
    best_gain = -1.0
    for pillar in summaries:
        gain = (100 - pillar.value) / 100 * pillar.max_points
        if gain > best_gain:
            best, best_gain = pillar, gain

    if pillar_status(best.value) == PillarStatus.LOW:
        return f"{best.label} (Needs Work)"
    return best.label


def build_pillar_breakdown(pillars: PillarScoreSet, weights: ScoringWeights) -> list[PillarBreakdown]:
    breakdown = []
    for pillar in Pillar:
        value = pillars.value_for(pillar)
        weight = weights.weight_for(pillar)
        breakdown.append(
            PillarBreakdown(
                pillar=pillar,
                label=pillar.label,
                value=value,
                max_points=weights.max_points(pillar),
                weight=weight,
                weighted_points=round(value * weight, 2),
                status=pillar_status(value),
            )
        )
    return breakdown


# =============================================================================
# Orchestrator
# =============================================================================


class DRepScorer:
    """Scores one DRep end to end.

    Wires the rate calculators, deliberation modifier, reliability analyzer
    and profile scorer into a DRepScoreBreakdown. Optional audit log records
    every adjustment that moved a pillar away from its raw value.
    """

    def __init__(
        self,
        weights: Union[ScoringWeights, str, None] = None,
        audit_log: Optional[ScoringAuditLog] = None,
    ):
        if isinstance(weights, ScoringWeights):
            self.weights = weights
        else:
            self.weights = get_weight_profile(weights)
        self.audit_log = audit_log

    def evaluate(self, scoring_input: DRepScoringInput) -> DRepScoreBreakdown:
        """Evaluate all pillars and produce the score breakdown."""
        inp = scoring_input
        votes = inp.votes
        distribution = vote_distribution(votes)

        # Participation
        participation = participation_rate(distribution.total, inp.total_proposals)
        modifier = deliberation_modifier_for(distribution)
        eff_participation = effective_participation(participation, modifier)

        # Rationale
        raw_rationale = rationale_rate(votes)
        if inp.importance_map:
            weighted_rationale = weighted_rationale_rate(votes, inp.importance_map)
        else:
            weighted_rationale = raw_rationale
        rationale = apply_rationale_curve(weighted_rationale)

        # Reliability
        first_epoch, counts = self._epoch_series(inp)
        reliability = calculate_reliability(counts, first_epoch, inp.current_epoch, inp.proposal_epochs)

        # Profile
        profile = profile_completeness(inp.metadata, inp.broken_uris)

        pillars = PillarScoreSet(
            effective_participation=eff_participation,
            rationale=rationale,
            consistency=reliability.score,
            profile_completeness=profile,
        )
        score = composite_score(pillars, self.weights)
        pillar_breakdown = build_pillar_breakdown(pillars, self.weights)

        if self.audit_log is not None:
            self._record_adjustments(
                inp, participation, eff_participation, raw_rationale, weighted_rationale, rationale, profile
            )

        has_history = first_epoch is not None and any(c > 0 for c in counts)
        hint = reliability_hint(reliability.streak, reliability.recency) if has_history else "No voting history"

        breakdown = DRepScoreBreakdown(
            drep_id=inp.drep_id,
            score=score,
            weights_profile=self.weights.name,
            pillars=pillar_breakdown,
            participation_rate=participation,
            deliberation_modifier=modifier,
            raw_rationale_rate=raw_rationale,
            weighted_rationale_rate=weighted_rationale,
            distribution=distribution,
            abstention_penalty=abstention_penalty(votes),
            reliability=reliability,
            size_tier=size_tier(inp.voting_power_ada) if inp.voting_power_ada is not None else None,
            easiest_win=easiest_win(pillar_breakdown),
            reliability_hint=hint,
            missing_profile_fields=missing_profile_fields(inp.metadata, inp.broken_uris),
        )
        logger.debug(f"Scored {inp.drep_id}: score={score} profile={self.weights.name}")
        return breakdown

    def _epoch_series(self, inp: DRepScoringInput) -> tuple[Optional[int], list[int]]:
        """Supplied epoch series, or one derived from vote epochs."""
        if inp.epoch_vote_counts is not None:
            return inp.first_epoch, list(inp.epoch_vote_counts)
        return epoch_vote_counts(inp.votes)

    def _record_adjustments(
        self,
        inp: DRepScoringInput,
        participation: int,
        eff_participation: int,
        raw_rationale: int,
        weighted_rationale: int,
        rationale: int,
        profile: int,
    ) -> None:
        w = self.weights
        if eff_participation != participation:
            self.audit_log.log_adjustment(
                drep_id=inp.drep_id,
                pillar=Pillar.EFFECTIVE_PARTICIPATION.value,
                adjustment=Adjustment.DELIBERATION_DISCOUNT,
                value_before=participation,
                value_after=eff_participation,
                points=(eff_participation - participation) * w.effective_participation,
            )

        if inp.importance_map:
            voted_types = [
                inp.importance_map[v.proposal_key].proposal_type
                for v in inp.votes
                if v.proposal_key in inp.importance_map
            ]
            info_votes = sum(1 for t in voted_types if t in RATIONALE_EXEMPT_TYPES)
            if info_votes:
                self.audit_log.log_adjustment(
                    drep_id=inp.drep_id,
                    pillar=Pillar.RATIONALE.value,
                    adjustment=Adjustment.INFO_ACTIONS_EXCLUDED,
                    value_before=raw_rationale,
                    value_after=weighted_rationale,
                    points=(apply_rationale_curve(weighted_rationale) - apply_rationale_curve(raw_rationale))
                    * w.rationale,
                    impact=ScoreImpact.INDIRECT,
                )

        if rationale != weighted_rationale:
            self.audit_log.log_adjustment(
                drep_id=inp.drep_id,
                pillar=Pillar.RATIONALE.value,
                adjustment=Adjustment.RATIONALE_CURVE,
                value_before=weighted_rationale,
                value_after=rationale,
                points=(rationale - weighted_rationale) * w.rationale,
            )

        if inp.broken_uris:
            unbroken = profile_completeness(inp.metadata)
            if unbroken != profile:
                self.audit_log.log_adjustment(
                    drep_id=inp.drep_id,
                    pillar=Pillar.PROFILE_COMPLETENESS.value,
                    adjustment=Adjustment.BROKEN_LINKS_EXCLUDED,
                    value_before=unbroken,
                    value_after=profile,
                    points=(profile - unbroken) * w.profile_completeness,
                )


# =============================================================================
# What-if simulation
# =============================================================================


def _rank(score: int, peer_scores: Sequence[float]) -> int:
    return 1 + sum(1 for s in peer_scores if s > score)


def simulate_score(
    snapshot: ScoreSnapshot,
    total_proposals: int,
    additional_votes: int = 0,
    additional_rationales: int = 0,
    peer_scores: Sequence[float] = (),
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> ScoreSimulation:
    """Recompute the score as if the DRep cast extra votes (and rationales).

    Reliability and profile carry over from the snapshot unchanged. Rank is
    1 + the number of peers scoring strictly higher.
    """
    total_proposals = total_proposals or 1
    modifier = snapshot.deliberation_modifier or 1.0

    def _score_for(total_votes: int, raw_rationale: float) -> SimulatedScore:
        participation = participation_rate(total_votes, total_proposals)
        eff = effective_participation(participation, modifier)
        curved = apply_rationale_curve(raw_rationale)
        score = composite_score(
            PillarScoreSet(
                effective_participation=eff,
                rationale=curved,
                consistency=snapshot.reliability_score,
                profile_completeness=snapshot.profile_completeness,
            ),
            weights,
        )
        return SimulatedScore(
            score=score,
            rank=_rank(score, peer_scores),
            participation=participation,
            effective_participation=eff,
            rationale=curved,
            total_votes=total_votes,
        )

    current = _score_for(snapshot.total_votes, snapshot.rationale_rate)

    sim_total = snapshot.total_votes + max(0, additional_votes)
    current_with_rationale = round_half_up(snapshot.rationale_rate / 100 * snapshot.total_votes)
    if sim_total > 0:
        sim_raw = round_half_up((current_with_rationale + max(0, additional_rationales)) / sim_total * 100)
    else:
        sim_raw = 0
    simulated = _score_for(sim_total, min(100, sim_raw))

    return ScoreSimulation(current=current, simulated=simulated, total_peers=len(peer_scores))
