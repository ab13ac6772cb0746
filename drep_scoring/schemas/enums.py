"""Enums shared by the DRep scoring schemas and scorers."""

from enum import Enum


class VoteChoice(str, Enum):
    """On-chain vote choice."""

    YES = "Yes"
    NO = "No"
    ABSTAIN = "Abstain"


class PillarStatus(str, Enum):
    """Health classification for a single 0-100 pillar.

    - STRONG: >= 80
    - NEEDS_WORK: 50-79
    - LOW: < 50
    """

    STRONG = "strong"
    NEEDS_WORK = "needs-work"
    LOW = "low"


class SizeTier(str, Enum):
    """Delegated voting power band (ADA)."""

    SMALL = "Small"  # < 100k
    MEDIUM = "Medium"  # 100k - 5M
    LARGE = "Large"  # 5M - 50M
    WHALE = "Whale"  # >= 50M


class TreasuryTier(str, Enum):
    """Treasury withdrawal size classification."""

    ROUTINE = "routine"  # < 1M ADA
    SIGNIFICANT = "significant"  # 1M - 20M ADA
    MAJOR = "major"  # >= 20M ADA


class ProposalPriority(str, Enum):
    """Governance action priority, derived from the proposal type."""

    CRITICAL = "critical"
    IMPORTANT = "important"
    STANDARD = "standard"

    @property
    def sort_weight(self) -> int:
        """Higher first when ordering votes by importance."""
        return {"critical": 3, "important": 2, "standard": 1}[self.value]


class ValuePreference(str, Enum):
    """Delegator value preference used for alignment scoring."""

    HIGH_PARTICIPATION = "High Participation"
    ACTIVE_RATIONALE_PROVIDER = "Active Rationale Provider"
    TREASURY_CONSERVATIVE = "Treasury Conservative"
    PRO_DEFI = "Pro-DeFi"
    PRO_PRIVACY = "Pro-Privacy"
    PRO_DECENTRALIZATION = "Pro-Decentralization"


class Pillar(str, Enum):
    """The four pillars composing the DRep Score."""

    EFFECTIVE_PARTICIPATION = "effective_participation"
    RATIONALE = "rationale"
    CONSISTENCY = "consistency"
    PROFILE_COMPLETENESS = "profile_completeness"

    @property
    def label(self) -> str:
        """Human-facing pillar label."""
        return {
            "effective_participation": "Participation",
            "rationale": "Rationale",
            "consistency": "Reliability",
            "profile_completeness": "Profile",
        }[self.value]


class RecommendationPriority(str, Enum):
    """Priority of an improvement recommendation."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort order: high first."""
        return {"high": 0, "medium": 1, "low": 2}[self.value]
