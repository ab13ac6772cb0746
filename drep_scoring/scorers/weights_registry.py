"""Weights Registry: named pillar weight profiles for the DRep Score.

Loads weight profiles from config/scoring_weights.yaml. Every profile must
cover the four pillars and sum to 1.0.

Usage:
    from drep_scoring.scorers.weights_registry import get_weight_profile

    weights = get_weight_profile("v2_legacy")
    # weights.rationale == 0.35
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

import yaml

from drep_scoring.config import get_weights_file
from drep_scoring.schemas.enums import Pillar

logger = logging.getLogger(__name__)

PILLAR_KEYS = [p.value for p in Pillar]

DEFAULT_PROFILE_NAME = "default"


@dataclass(frozen=True)
class ScoringWeights:
    """Pillar weights for the composite score. Immutable; sums to 1.0."""

    effective_participation: float = 0.40
    rationale: float = 0.25
    consistency: float = 0.20
    profile_completeness: float = 0.15
    name: str = DEFAULT_PROFILE_NAME
    description: str = ""

    def __post_init__(self):
        _validate_weights(self.name, self.as_dict())

    def as_dict(self) -> dict[str, float]:
        return {key: getattr(self, key) for key in PILLAR_KEYS}

    def weight_for(self, pillar: Pillar) -> float:
        return getattr(self, pillar.value)

    def max_points(self, pillar: Pillar) -> float:
        """Points a pillar can contribute to the 0-100 composite."""
        return self.weight_for(pillar) * 100


# Module-level cache
_registry_cache: Optional[dict] = None


def _validate_weights(profile_name: str, weights: dict[str, float]) -> None:
    """Validate that weights contain the four pillars and sum to 1.0."""
    missing = set(PILLAR_KEYS) - set(weights.keys())
    if missing:
        raise ValueError(f"Weight profile {profile_name} missing pillar keys: {missing}")
    extra = set(weights.keys()) - set(PILLAR_KEYS)
    if extra:
        raise ValueError(f"Weight profile {profile_name} has unexpected keys: {extra}")
    for key, value in weights.items():
        if not isinstance(value, (int, float)) or value < 0:
            raise ValueError(f"Weight profile {profile_name} has invalid weight {key}={value!r}")
    total = sum(weights.values())
    if not math.isclose(total, 1.0, abs_tol=1e-9):
        raise ValueError(f"Weight profile {profile_name} weights sum to {total}, expected 1.0")


DEFAULT_WEIGHTS = ScoringWeights(description="Participation-led default profile")


def _load_registry() -> dict:
    """Load and cache weight profiles from YAML."""
    global _registry_cache
    if _registry_cache is not None:
        return _registry_cache

    config_path = get_weights_file()
    if not config_path.exists():
        logger.warning(f"Scoring weights config not found at {config_path}, using defaults")
        _registry_cache = _build_default_registry()
        return _registry_cache

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    profiles: dict[str, ScoringWeights] = {}
    for name, data in (raw.get("profiles") or {}).items():
        data = data or {}
        weights = data.get("weights") or {}
        _validate_weights(name, weights)
        profiles[name] = ScoringWeights(
            name=name,
            description=data.get("description", ""),
            **{key: float(weights[key]) for key in PILLAR_KEYS},
        )

    default_profile: str = raw.get("default_profile", DEFAULT_PROFILE_NAME)
    if default_profile not in profiles:
        logger.warning(f"Default weight profile '{default_profile}' not defined in {config_path}, using built-in")
        profiles[default_profile] = ScoringWeights(name=default_profile, description="Built-in default")

    _registry_cache = {
        "profiles": profiles,
        "default_profile": default_profile,
    }
    logger.info(f"Loaded {len(profiles)} scoring weight profiles")
    return _registry_cache


def _build_default_registry() -> dict:
    """Fallback: the built-in default profile only."""
    return {
        "profiles": {DEFAULT_PROFILE_NAME: DEFAULT_WEIGHTS},
        "default_profile": DEFAULT_PROFILE_NAME,
    }


def get_weight_profile(name: Optional[str] = None) -> ScoringWeights:
    """Get a named weight profile.

    None selects the configured default; unknown names fall back to it.
    """
    registry = _load_registry()
    default = registry["default_profile"]
    if name is None:
        return registry["profiles"][default]
    weights = registry["profiles"].get(name)
    if weights is None:
        logger.warning(f"Unknown weight profile '{name}', falling back to {default}")
        weights = registry["profiles"][default]
    return weights


def list_profiles() -> list[str]:
    """List all available weight profile names."""
    registry = _load_registry()
    return list(registry["profiles"].keys())


def clear_cache():
    """Clear the registry cache (useful for testing)."""
    global _registry_cache
    _registry_cache = None
