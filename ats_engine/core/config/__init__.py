from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    rate_limit: str
    rate_limit_enabled: bool
    ai_provider: str
    openai_api_key: str | None
    openai_base_url: str | None
    ai_model: str
    ai_embedding_model: str
    ai_timeout_s: float
    ai_max_retries: int
    ai_retry_initial_s: float
    ai_retry_max_s: float
    scoring_config_path: str | None


def load_settings() -> Settings:
    return Settings(
        log_level=(_get_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        sentry_dsn=_get_env("SENTRY_DSN"),
        rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
        rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
        ai_provider=(_get_env("AI_PROVIDER", "openai") or "openai").lower(),
        openai_api_key=_get_env("OPENAI_API_KEY"),
        openai_base_url=_get_env("OPENAI_BASE_URL"),
        ai_model=_get_env("AI_MODEL", "gpt-4o-mini") or "gpt-4o-mini",
        ai_embedding_model=_get_env("AI_EMBEDDING_MODEL", "text-embedding-3-small") or "text-embedding-3-small",
        ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 30.0),
        ai_max_retries=_get_env_int("AI_MAX_RETRIES", 3),
        ai_retry_initial_s=_get_env_float("AI_RETRY_INITIAL_S", 1.0),
        ai_retry_max_s=_get_env_float("AI_RETRY_MAX_S", 10.0),
        scoring_config_path=_get_env("SCORING_CONFIG_PATH"),
    )


settings = load_settings()

if settings.ai_provider not in {"openai", "local"}:
    raise RuntimeError("AI_PROVIDER must be either 'openai' or 'local'.")

__all__ = ["Settings", "load_settings", "settings"]
