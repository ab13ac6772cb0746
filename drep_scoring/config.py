"""
Central configuration for the DRep Score engine.

Configure via environment variables:
  - DREP_SCORING_CONFIG_DIR (default: <repo>/config) - holds scoring_weights.yaml
  - DREP_SCORING_LOG_LEVEL (default: INFO)
  - DREP_SCORING_MAX_WORKERS (default: 10) - batch scoring thread count
"""

import os
from pathlib import Path

from drep_scoring.constants import DEFAULT_MAX_WORKERS


def get_config_dir() -> Path:
    """
    Get the directory holding scoring configuration files.

    Uses DREP_SCORING_CONFIG_DIR environment variable if set, otherwise defaults
    to the config/ directory at the repository root.

    Returns:
        Path to config directory
    """
    env_path = os.environ.get("DREP_SCORING_CONFIG_DIR")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return Path(__file__).parent.parent / "config"


def get_weights_file() -> Path:
    """Get the weight profile YAML path."""
    return get_config_dir() / "scoring_weights.yaml"


def get_log_level() -> str:
    """Get the configured log level name."""
    return os.environ.get("DREP_SCORING_LOG_LEVEL", "INFO").upper()


def get_max_workers() -> int:
    """Get the default batch worker count, ignoring unparseable values."""
    raw = os.environ.get("DREP_SCORING_MAX_WORKERS")
    if not raw:
        return DEFAULT_MAX_WORKERS
    try:
        return max(1, int(raw))
    except ValueError:
        return DEFAULT_MAX_WORKERS
