"""Tests for the scoring audit trail."""

import json
import threading

from drep_scoring.utils.scoring_audit import Adjustment, ScoreImpact, ScoringAuditLog


class TestScoreImpact:
    def test_from_points(self):
        assert ScoreImpact.from_points(6) == ScoreImpact.HIGH
        assert ScoreImpact.from_points(-5) == ScoreImpact.HIGH
        assert ScoreImpact.from_points(2.5) == ScoreImpact.MEDIUM
        assert ScoreImpact.from_points(1.9) == ScoreImpact.LOW
        assert ScoreImpact.from_points(0) == ScoreImpact.LOW


class TestScoringAuditLog:
    """Recording, warnings, summaries and export."""

    def test_log_adjustment(self):
        audit_log = ScoringAuditLog()
        entry = audit_log.log_adjustment(
            drep_id="drep1",
            pillar="rationale",
            adjustment=Adjustment.RATIONALE_CURVE,
            value_before=50,
            value_after=60,
            points=2.5,
        )
        assert entry.score_impact == ScoreImpact.MEDIUM
        assert entry.warning_message is None
        assert len(audit_log) == 1
        assert audit_log.get_warnings() == []

    def test_high_negative_adjustment_warns(self):
        audit_log = ScoringAuditLog()
        entry = audit_log.log_adjustment(
            drep_id="drep1",
            pillar="effective_participation",
            adjustment=Adjustment.DELIBERATION_DISCOUNT,
            value_before=100,
            value_after=70,
            points=-12.0,
        )
        assert entry.score_impact == ScoreImpact.HIGH
        assert "deliberation_discount" in entry.warning_message
        assert audit_log.get_warnings() == [entry]

    def test_high_positive_adjustment_does_not_warn(self):
        audit_log = ScoringAuditLog()
        audit_log.log_adjustment("drep1", "rationale", Adjustment.RATIONALE_CURVE, 20, 30, points=5.0)
        assert audit_log.get_warnings() == []

    def test_explicit_impact_and_warning(self):
        audit_log = ScoringAuditLog()
        entry = audit_log.log_adjustment(
            "drep1",
            "rationale",
            Adjustment.INFO_ACTIONS_EXCLUDED,
            40,
            50,
            points=1.0,
            impact=ScoreImpact.INDIRECT,
            warning="check importance map",
        )
        assert entry.score_impact == ScoreImpact.INDIRECT
        assert audit_log.get_warnings()[0].warning_message == "check importance map"

    def test_summary_for_drep(self):
        audit_log = ScoringAuditLog()
        audit_log.log_adjustment("drep1", "rationale", Adjustment.RATIONALE_CURVE, 50, 60, points=2.5)
        audit_log.log_adjustment(
            "drep1", "profile_completeness", Adjustment.BROKEN_LINKS_EXCLUDED, 100, 95, points=-0.75
        )
        audit_log.log_adjustment("drep2", "rationale", Adjustment.RATIONALE_CURVE, 10, 15, points=1.25)

        summary = audit_log.get_summary_for_drep("drep1")
        assert summary["total_entries"] == 2
        assert summary["net_points"] == 1.75
        assert set(summary["entries_by_adjustment"]) == {"rationale_curve", "broken_links_excluded"}
        json.dumps(summary)

    def test_to_dict_serialises_sets(self):
        audit_log = ScoringAuditLog()
        entry = audit_log.log_adjustment(
            "drep1", "profile_completeness", Adjustment.BROKEN_LINKS_EXCLUDED, frozenset({"a"}), 95
        )
        data = entry.to_dict()
        assert data["value_before"] == ["a"]
        assert data["adjustment"] == "broken_links_excluded"
        json.dumps(data)

    def test_export_to_json(self, tmp_path):
        audit_log = ScoringAuditLog()
        audit_log.log_adjustment("drep1", "rationale", Adjustment.RATIONALE_CURVE, 50, 60, points=2.5)
        path = tmp_path / "nested" / "audit.json"
        audit_log.export_to_json(path)

        data = json.loads(path.read_text())
        assert data["total_entries"] == 1
        assert data["entries"][0]["drep_id"] == "drep1"

    def test_clear(self):
        audit_log = ScoringAuditLog()
        audit_log.log_adjustment("drep1", "rationale", Adjustment.RATIONALE_CURVE, 50, 60, points=-9)
        audit_log.clear()
        assert len(audit_log) == 0
        assert audit_log.get_warnings() == []

    def test_concurrent_logging(self):
        audit_log = ScoringAuditLog()

        def record(i):
            for _ in range(50):
                audit_log.log_adjustment(f"drep{i}", "rationale", Adjustment.RATIONALE_CURVE, 50, 60, points=1)

        threads = [threading.Thread(target=record, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(audit_log) == 400
