"""
Scoring Audit Trail - Records every adjustment that moved a pillar away from its raw value.

Captured adjustments:
- Deliberation discount applied to participation
- Informational (non-binding) votes excluded from rationale credit
- Rationale curve lift
- Broken social links excluded from profile completeness

A log is created per run and passed to the scorer; it is safe to share
across the threads of one batch.
"""

import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


class Adjustment(Enum):
    """Kind of adjustment applied to a pillar."""

    DELIBERATION_DISCOUNT = "deliberation_discount"
    INFO_ACTIONS_EXCLUDED = "info_actions_excluded"
    RATIONALE_CURVE = "rationale_curve"
    BROKEN_LINKS_EXCLUDED = "broken_links_excluded"


class ScoreImpact(Enum):
    """How much an adjustment moved the final score."""

    HIGH = "high"  # 5+ composite points
    MEDIUM = "medium"  # 2-4 composite points
    LOW = "low"  # under 2 composite points
    INDIRECT = "indirect"  # Changes an input, not a pillar value

    @classmethod
    def from_points(cls, points: float) -> "ScoreImpact":
        points = abs(points)
        if points >= 5:
            return cls.HIGH
        if points >= 2:
            return cls.MEDIUM
        return cls.LOW


@dataclass
class ScoringAuditEntry:
    """A single adjustment applied while scoring one DRep."""

    drep_id: str
    pillar: str
    adjustment: Adjustment
    value_before: Any
    value_after: Any
    score_impact: ScoreImpact
    points_affected: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)
    warning_message: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "drep_id": self.drep_id,
            "pillar": self.pillar,
            "adjustment": self.adjustment.value,
            "value_before": self._serialize_value(self.value_before),
            "value_after": self._serialize_value(self.value_after),
            "score_impact": self.score_impact.value,
            "points_affected": round(self.points_affected, 2),
            "timestamp": self.timestamp.isoformat(),
            "warning_message": self.warning_message,
        }

    def _serialize_value(self, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, (str, int, float, bool)):
            return value
        if isinstance(value, (list, tuple, set, frozenset)):
            return [self._serialize_value(v) for v in value]
        if isinstance(value, dict):
            return {k: self._serialize_value(v) for k, v in value.items()}
        return str(value)


class ScoringAuditLog:
    """Collects audit entries for one scoring run.

    Usage:
        audit_log = ScoringAuditLog()
        scorer = DRepScorer(audit_log=audit_log)
        scorer.evaluate(scoring_input)

        audit_log.get_summary_for_drep("drep1abc")
        audit_log.export_to_json("/tmp/scoring_audit.json")
    """

    def __init__(self):
        self._entries: list[ScoringAuditEntry] = []
        self._warnings: list[ScoringAuditEntry] = []
        self._lock = threading.Lock()

    def log_adjustment(
        self,
        drep_id: str,
        pillar: str,
        adjustment: Adjustment,
        value_before: Any,
        value_after: Any,
        points: float = 0.0,
        impact: Optional[ScoreImpact] = None,
        warning: Optional[str] = None,
    ) -> ScoringAuditEntry:
        """Record one adjustment.

        Args:
            drep_id: DRep identifier
            pillar: Pillar affected (e.g., "effective_participation")
            adjustment: Kind of adjustment
            value_before: Value before the adjustment
            value_after: Value after the adjustment
            points: Composite points moved by the adjustment
            impact: Impact level; derived from points when omitted
            warning: Optional warning message

        Returns:
            The created audit entry
        """
        entry = ScoringAuditEntry(
            drep_id=drep_id,
            pillar=pillar,
            adjustment=adjustment,
            value_before=value_before,
            value_after=value_after,
            score_impact=impact or ScoreImpact.from_points(points),
            points_affected=points,
            warning_message=warning,
        )

        # High-impact penalties are surfaced as warnings
        if not warning and entry.score_impact == ScoreImpact.HIGH and points < 0:
            entry.warning_message = (
                f"AUDIT WARNING: DRep {drep_id}: {adjustment.value} moved {pillar} "
                f"from {value_before} to {value_after} ({points:+.1f} points)"
            )

        with self._lock:
            self._entries.append(entry)
            if entry.warning_message:
                self._warnings.append(entry)

        if entry.warning_message:
            logger.warning(entry.warning_message)
        return entry

    def get_warnings(self) -> list[ScoringAuditEntry]:
        with self._lock:
            return self._warnings.copy()

    def get_all_entries(self) -> list[ScoringAuditEntry]:
        with self._lock:
            return self._entries.copy()

    def get_summary_for_drep(self, drep_id: str) -> dict:
        """Get all audit entries for a specific DRep, grouped by adjustment.

        Args:
            drep_id: DRep identifier

        Returns:
            Dictionary with summary and entries for the DRep
        """
        entries = [e for e in self.get_all_entries() if e.drep_id == drep_id]
        warnings = [e for e in entries if e.warning_message]

        by_adjustment: dict[str, list[dict]] = {}
        for entry in entries:
            by_adjustment.setdefault(entry.adjustment.value, []).append(entry.to_dict())

        return {
            "drep_id": drep_id,
            "total_entries": len(entries),
            "warnings_count": len(warnings),
            "net_points": round(sum(e.points_affected for e in entries), 2),
            "entries_by_adjustment": by_adjustment,
            "warnings": [e.to_dict() for e in warnings],
            "all_entries": [e.to_dict() for e in entries],
        }

    def export_to_json(self, filepath: str | Path) -> None:
        """Export audit log to JSON file.

        Args:
            filepath: Path to output JSON file
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        entries = self.get_all_entries()
        warnings = self.get_warnings()
        data = {
            "generated_at": datetime.now().isoformat(),
            "total_entries": len(entries),
            "total_warnings": len(warnings),
            "entries": [e.to_dict() for e in entries],
            "warnings": [e.to_dict() for e in warnings],
        }

        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)

        logger.info(f"Exported {len(entries)} audit entries to {filepath}")

    def clear(self) -> None:
        """Clear all entries (for reuse between runs)."""
        with self._lock:
            self._entries.clear()
            self._warnings.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
