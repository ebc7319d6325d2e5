"""Persistent JSON config helpers.

Stores the simulated fetch latency policy and the id generator floor.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .identity import DEFAULT_FLOOR
from .loading import LatencyPolicy

APP_NAME = "lazytree"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem and serialization errors are ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _nonnegative_float(value: object, default: float) -> float:
    """Accept JSON numbers >= 0; booleans and other types yield ``default``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if value < 0:
        return default
    return float(value)


def load_latency_policy() -> LatencyPolicy:
    """Load the latency policy, keeping defaults for missing or invalid keys."""
    data = load_config()
    defaults = LatencyPolicy()
    return LatencyPolicy(
        cached_delay=_nonnegative_float(data.get("cached_delay"), defaults.cached_delay),
        fetch_delay_min=_nonnegative_float(data.get("fetch_delay_min"), defaults.fetch_delay_min),
        fetch_delay_spread=_nonnegative_float(data.get("fetch_delay_spread"), defaults.fetch_delay_spread),
    )


def save_latency_policy(policy: LatencyPolicy) -> None:
    config = load_config()
    config["cached_delay"] = max(0.0, float(policy.cached_delay))
    config["fetch_delay_min"] = max(0.0, float(policy.fetch_delay_min))
    config["fetch_delay_spread"] = max(0.0, float(policy.fetch_delay_spread))
    save_config(config)


def load_id_floor() -> int:
    """Return the persisted id counter floor; non-integers and negatives fall back to the default."""
    value = load_config().get("id_floor")
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return DEFAULT_FLOOR
    return value


def save_id_floor(floor: int) -> None:
    config = load_config()
    config["id_floor"] = max(0, int(floor))
    save_config(config)
