from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ats_engine.core.config import settings

_SCORING_CONFIG_CACHE: dict[str, Any] | None = None
_DEFAULT_SCORING_CONFIG_PATH = Path(__file__).with_name("scoring.yaml")


def scoring_config_path() -> Path:
    if settings.scoring_config_path:
        return Path(settings.scoring_config_path)
    return _DEFAULT_SCORING_CONFIG_PATH


def get_scoring_config() -> dict[str, Any]:
    """Load scoring constants from the packaged scoring.yaml and cache them."""
    global _SCORING_CONFIG_CACHE

    if _SCORING_CONFIG_CACHE is not None:
        return _SCORING_CONFIG_CACHE

    path = scoring_config_path()
    if not path.exists():
        raise RuntimeError(
            f"Scoring config not found at '{path}'. "
            "Expected file: ats_engine/core/config/scoring.yaml or SCORING_CONFIG_PATH"
        )

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to read scoring config '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in scoring config '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid scoring config '{path}': expected a top-level mapping.")

    _SCORING_CONFIG_CACHE = parsed
    return _SCORING_CONFIG_CACHE


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Get a nested value by dot path, e.g. 'semantic.weights.skills'."""
    if not path:
        return default

    current: Any = get_scoring_config()
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


def get_scoring_float(path: str, default: float) -> float:
    value = get_scoring_value(path, default)
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def get_scoring_int(path: str, default: int) -> int:
    value = get_scoring_value(path, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def clear_scoring_config_cache() -> None:
    global _SCORING_CONFIG_CACHE
    _SCORING_CONFIG_CACHE = None
