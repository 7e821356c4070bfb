"""
Global Configuration and Display Defaults.

Module-level constants cover display caps and the size limits above which
expensive metrics are skipped. Per-project overrides live in
`.depsight/config.yaml` and `DEPSIGHT_*` environment variables.
"""

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

# --- Drill-down display caps ---
# Neighbor/dependent/dependency lists show this many entries before "+N more"
MAX_EXPLANATION_ENTRIES = 5

# Impact chains show this many steps before "chain continues"
MAX_CHAIN_STEPS = 7

# --- Skip notices ---
DEFAULT_SKIP_REASON = "Skipped for performance"
FORCE_FULL_HINT = "Use --force-full-analysis to compute"

# --- Panel layout ---
DEFAULT_VISIBLE_ROWS = 8
MIN_VISIBLE_ROWS = 1

# --- Size limits for expensive metrics (skipped above these unless forced) ---
BETWEENNESS_NODE_LIMIT = 1_000
HITS_EDGE_LIMIT = 20_000
CYCLES_NODE_LIMIT = 2_000

# Soft per-metric time budget; a slower metric is recorded as timed out
METRIC_TIME_BUDGET_SECONDS = 5.0

CONFIG_DIR = ".depsight"
CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    """Tunable analysis and display settings."""
    insights_limit: int = Field(default=50, ge=1)
    top_picks_limit: int = Field(default=10, ge=0)
    max_cycles: int = Field(default=100, ge=0)
    betweenness_node_limit: int = BETWEENNESS_NODE_LIMIT
    hits_edge_limit: int = HITS_EDGE_LIMIT
    cycles_node_limit: int = CYCLES_NODE_LIMIT
    metric_time_budget: float = Field(default=METRIC_TIME_BUDGET_SECONDS, gt=0)
    force_full_analysis: bool = False
    visible_rows: int = Field(default=DEFAULT_VISIBLE_ROWS, ge=MIN_VISIBLE_ROWS)
    show_explanations: bool = True
    show_calculation: bool = True


_ENV_OVERRIDES = {
    "DEPSIGHT_INSIGHTS_LIMIT": "insights_limit",
    "DEPSIGHT_TOP_PICKS_LIMIT": "top_picks_limit",
    "DEPSIGHT_FORCE_FULL_ANALYSIS": "force_full_analysis",
}


def _read_config_file(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring unreadable config {config_path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {config_path}: expected a mapping")
        return {}
    return data


def load_settings(root: str | Path = ".") -> Settings:
    """
    Load settings for the project at `root`.

    Precedence: environment variables, then the config file, then defaults.
    Values that fail validation are dropped with a warning.
    """
    data = _read_config_file(Path(root) / CONFIG_DIR / CONFIG_FILE)

    for env_name, field_name in _ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw is not None and raw != "":
            data[field_name] = raw

    known = {k: v for k, v in data.items() if k in Settings.model_fields}
    try:
        return Settings(**known)
    except ValidationError as e:
        bad_fields = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
        logger.warning(f"Invalid settings ignored: {', '.join(sorted(bad_fields))}")
        return Settings(**{k: v for k, v in known.items() if k not in bad_fields})
