"""
Global constants for the DRep Score engine.

Centralizes thresholds, curves and lookup tables used across the scorers
so they can be tuned in one place. Every table here is immutable (tuples,
frozensets, frozen dataclasses) so the scorers stay safe to call from any
number of threads.
"""

# Rationale quality
MIN_RATIONALE_LENGTH = 50  # Minimum characters for a rationale to count as "quality"

# Participation & deliberation
DELIBERATION_MIN_VOTES = 10  # At or below this many votes the modifier is bypassed
# (dominant share lower bound, exclusive) -> multiplier, checked top-down
DELIBERATION_TIERS = (
    (0.95, 0.70),
    (0.90, 0.85),
    (0.85, 0.95),
)

# Abstention penalty: (upper bound on abstain %, exclusive) -> multiplier
ABSTENTION_PENALTY_TIERS = (
    (25.0, 0.5),
    (50.0, 0.75),
)
ABSTENTION_PENALTY_MAX_MULTIPLIER = 1.0

# Rationale curve knots (raw %, adjusted %) - concave early, linear after
RATIONALE_CURVE_KNOTS = (
    (0, 0),
    (20, 30),
    (60, 70),
    (100, 100),
)

# Proposal importance for rationale weighting
CRITICAL_PROPOSAL_TYPES = frozenset(
    {
        "HardForkInitiation",
        "NoConfidence",
        "NewCommittee",
        "NewConstitutionalCommittee",
        "NewConstitution",
        "UpdateConstitution",
    }
)
IMPORTANT_PROPOSAL_TYPES = frozenset({"ParameterChange"})
RATIONALE_EXEMPT_TYPES = frozenset({"InfoAction"})  # Non-binding, weight 0
CRITICAL_RATIONALE_WEIGHT = 3
STANDARD_RATIONALE_WEIGHT = 1
EXEMPT_RATIONALE_WEIGHT = 0

# Reliability (epochs)
RELIABILITY_STREAK_TARGET = 10  # Streak at which the streak component maxes out
RELIABILITY_RECENCY_HORIZON = 10  # Epochs of silence after which recency scores 0
RELIABILITY_GAP_HORIZON = 10  # Gap length at which the gap component scores 0
RELIABILITY_TENURE_TARGET = 20  # Tenure at which the tenure component maxes out
W_RELY_STREAK = 0.35
W_RELY_RECENCY = 0.30
W_RELY_GAP = 0.25
W_RELY_TENURE = 0.10
RELIABILITY_HINT_STALE_EPOCHS = 5  # Recency above this leads the hint
RELIABILITY_HINT_MIN_STREAK = 3

# Profile completeness points (sum to 100 with the top social tier)
PROFILE_FIELD_POINTS = (
    ("name", 15),
    ("objectives", 20),
    ("motivations", 15),
    ("qualifications", 10),
    ("bio", 10),
)
SOCIAL_POINTS_MULTIPLE = 30  # 2+ validated links
SOCIAL_POINTS_SINGLE = 25  # exactly 1 validated link
RECOGNIZED_SOCIAL_DOMAINS = frozenset(
    {
        "twitter.com",
        "x.com",
        "github.com",
        "linkedin.com",
        "youtube.com",
        "medium.com",
        "t.me",
        "discord.gg",
        "discord.com",
        "facebook.com",
        "instagram.com",
        "reddit.com",
    }
)

# Pillar status thresholds
PILLAR_STRONG_THRESHOLD = 80
PILLAR_NEEDS_WORK_THRESHOLD = 50

# Size tiers (ADA delegated): (lower bound inclusive, upper bound exclusive, tier)
SIZE_TIER_THRESHOLDS = (
    (0, 100_000, "Small"),
    (100_000, 5_000_000, "Medium"),
    (5_000_000, 50_000_000, "Large"),
    (50_000_000, float("inf"), "Whale"),
)

# Treasury withdrawal tiers (ADA)
TREASURY_TIER_ROUTINE = 1_000_000  # < 1M ADA
TREASURY_TIER_SIGNIFICANT = 20_000_000  # 1M - 20M ADA

# Chain constants
LOVELACE_PER_ADA = 1_000_000
SHELLEY_GENESIS_TIME = 1596491091  # Unix seconds, first Shelley epoch start
SHELLEY_BASE_EPOCH = 209
EPOCH_LENGTH_SECONDS = 432_000  # 5 days

# Recommendations
RECOMMENDATION_PROFILE_FIELD_POINTS = (
    ("name", 15),
    ("objectives", 20),
    ("motivations", 15),
    ("qualifications", 10),
    ("bio", 10),
    ("social links", 25),
)
RECOMMENDATION_PARTICIPATION_TARGET = 80
RECOMMENDATION_CONSISTENCY_TARGET = 70
RECOMMENDATION_RATIONALE_TARGET = 60

# Batch
DEFAULT_MAX_WORKERS = 10
