"""Tests for batch scoring on the worker pool."""

from drep_scoring.schemas.results import DRepScoringInput
from drep_scoring.scorers.batch import score_batch
from drep_scoring.scorers.composite import DRepScorer
from drep_scoring.scorers.weights_registry import DEFAULT_WEIGHTS
from drep_scoring.utils.logger import ScoringLogger
from drep_scoring.utils.scoring_audit import ScoringAuditLog
from drep_scoring.utils.worker_pool import WorkerPool


def _inputs(make_vote, full_metadata, count: int = 5) -> list[DRepScoringInput]:
    return [
        DRepScoringInput(
            drep_id=f"drep{i}",
            votes=[make_vote(meta_url="https://example.com/r"), make_vote(vote="No")],
            total_proposals=2,
            current_epoch=500,
            epoch_vote_counts=[1] * 10,
            first_epoch=490,
            metadata=full_metadata,
        )
        for i in range(count)
    ]


class TestScoreBatch:
    """score_batch isolates failures and preserves input order."""

    def test_all_succeed_in_order(self, make_vote, full_metadata):
        inputs = _inputs(make_vote, full_metadata)
        results = score_batch(
            inputs, max_workers=3, weights=DEFAULT_WEIGHTS, logger=ScoringLogger(name="tests.batch.ok")
        )
        assert [r.drep_id for r in results] == [i.drep_id for i in inputs]
        assert all(r.success for r in results)
        assert all(r.breakdown.drep_id == r.drep_id for r in results)
        assert len({r.breakdown.score for r in results}) == 1

    def test_failure_is_isolated(self, make_vote, full_metadata, monkeypatch):
        original = DRepScorer.evaluate

        def flaky(self, inp):
            if inp.drep_id == "drep2":
                raise RuntimeError("chain data unavailable")
            return original(self, inp)

        monkeypatch.setattr(DRepScorer, "evaluate", flaky)
        logger = ScoringLogger(name="tests.batch.flaky")
        results = score_batch(_inputs(make_vote, full_metadata), max_workers=2, weights=DEFAULT_WEIGHTS, logger=logger)

        assert [r.success for r in results] == [True, True, False, True, True]
        failed = results[2]
        assert failed.breakdown is None
        assert failed.error == "RuntimeError: chain data unavailable"
        summary = logger.get_error_summary()
        assert summary["total_errors"] == 1
        assert summary["errors"][0]["data"]["drep_id"] == "drep2"

    def test_shared_audit_log(self, make_vote, full_metadata):
        audit_log = ScoringAuditLog()
        score_batch(
            _inputs(make_vote, full_metadata, count=4),
            weights=DEFAULT_WEIGHTS,
            audit_log=audit_log,
            logger=ScoringLogger(name="tests.batch.audit"),
        )
        # Each DRep's 50% rationale rate is lifted by the curve
        assert {e.drep_id for e in audit_log.get_all_entries()} == {"drep0", "drep1", "drep2", "drep3"}

    def test_empty_batch(self):
        assert score_batch([], logger=ScoringLogger(name="tests.batch.empty")) == []


class TestWorkerPool:
    """Per-item exception isolation in the pool itself."""

    def test_map_results_and_stats(self):
        def work(n):
            if n == 3:
                raise ValueError("three")
            return n * n

        pool = WorkerPool(max_workers=4)
        outcomes = pool.map(work, [1, 2, 3, 4], desc="squares")

        assert [(ok, item) for ok, item, _ in outcomes] == [(True, 1), (True, 2), (False, 3), (True, 4)]
        assert outcomes[1][2] == 4
        assert isinstance(outcomes[2][2], ValueError)
        stats = pool.get_stats()
        assert stats["total_submitted"] == 4
        assert stats["total_successful"] == 3
        assert stats["total_failed"] == 1

    def test_empty(self):
        assert WorkerPool(max_workers=2).map(lambda x: x, []) == []

    def test_worker_count_from_env(self, monkeypatch):
        monkeypatch.setenv("DREP_SCORING_MAX_WORKERS", "3")
        assert WorkerPool().max_workers == 3
        monkeypatch.setenv("DREP_SCORING_MAX_WORKERS", "many")
        assert WorkerPool().max_workers == 10
