"""
YAML → config override loader.

Reads user overrides for the goal policy and overload tables from
``~/.routine-forge/config.yaml`` (or ``$ROUTINE_FORGE_HOME/config.yaml``).

Usage:
    from routine_forge.core.engine.config_loader import load_model_config
    cfg = load_model_config()
    strength = cfg.get("goals", {}).get("strength", {})

Expected layout (every key optional, partial entries are merged over the
built-in defaults):

    goals:
      strength:
        reps_range: [4, 6]
    overload:
      beginner:
        lower_body_increment: 10

If the file exists but cannot be parsed, a warning is emitted and the file
is ignored.
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path
from typing import Any

import yaml

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML mapping; warn and return {} if it is unreadable."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"routine-forge: ignoring {path} ({exc})", stacklevel=2)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        warnings.warn(f"routine-forge: ignoring {path} (top level is not a mapping)", stacklevel=2)
        return {}
    return data


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_app_home() -> Path:
    """Return the per-user data directory (``$ROUTINE_FORGE_HOME`` or ~/.routine-forge)."""
    env = os.environ.get("ROUTINE_FORGE_HOME")
    if env:
        return Path(env).expanduser()
    return Path.home() / ".routine-forge"


def get_user_yaml_path(name: str = "config.yaml") -> Path | None:
    """Return the user file *name* inside the app home if it exists, else None."""
    p = get_app_home() / name
    return p if p.exists() else None


def load_model_config(extra: dict[str, Any] | None = None) -> dict[str, Any]:
    """
    Load and merge configuration overrides.

    Load order (later overrides earlier):
    1. User override at ~/.routine-forge/config.yaml
    2. ``extra`` (used by tests and embedding callers)

    Returns:
        Merged dict of config sections.  Empty dict if nothing is configured.
    """
    config: dict[str, Any] = {}

    user = get_user_yaml_path()
    if user is not None:
        config = _deep_merge(config, _load_yaml_file(user))

    if extra:
        config = _deep_merge(config, extra)

    return config
