"""
Batch scoring across many DReps.

Runs DRepScorer.evaluate on a worker pool. A failure for one DRep is logged
and returned as a failed BatchResult; every other DRep is still scored.
"""

from typing import Iterable, Optional, Union

from drep_scoring.schemas.results import BatchResult, DRepScoringInput
from drep_scoring.scorers.composite import DRepScorer
from drep_scoring.scorers.weights_registry import ScoringWeights
from drep_scoring.utils.logger import BatchRunContext, ScoringLogger, get_logger
from drep_scoring.utils.scoring_audit import ScoringAuditLog
from drep_scoring.utils.worker_pool import WorkerPool


def score_batch(
    inputs: Iterable[DRepScoringInput],
    max_workers: Optional[int] = None,
    weights: Union[ScoringWeights, str, None] = None,
    audit_log: Optional[ScoringAuditLog] = None,
    logger: Optional[ScoringLogger] = None,
) -> list[BatchResult]:
    """
    Score many DReps in parallel.

    Args:
        inputs: One DRepScoringInput per DRep
        max_workers: Thread count (default: DREP_SCORING_MAX_WORKERS or 10)
        weights: Weight profile or profile name shared by the whole batch
        audit_log: Optional audit log shared by the batch
        logger: Optional ScoringLogger; defaults to the package logger

    Returns:
        BatchResult per input, in input order
    """
    items = list(inputs)
    logger = logger or get_logger()
    scorer = DRepScorer(weights=weights, audit_log=audit_log)
    pool = WorkerPool(max_workers=max_workers, logger=logger.logger)

    results: list[BatchResult] = []
    with BatchRunContext(logger, num_dreps=len(items)) as ctx:
        outcomes = pool.map(scorer.evaluate, items, desc="DRep scoring", label=lambda i: i.drep_id)
        for success, item, value in outcomes:
            if success:
                ctx.increment_success()
                logger.log_drep_scored(item.drep_id, value.score, scorer.weights.name)
                results.append(BatchResult(drep_id=item.drep_id, success=True, breakdown=value))
            else:
                ctx.increment_failure()
                logger.error("DRep scoring failed", drep_id=item.drep_id, error=repr(value))
                results.append(
                    BatchResult(drep_id=item.drep_id, success=False, error=f"{type(value).__name__}: {value}")
                )
    return results
