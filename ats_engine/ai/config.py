from __future__ import annotations

from dataclasses import dataclass

from ats_engine.core.config import settings


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    embedding_model: str
    api_key: str | None
    base_url: str | None
    timeout_s: float
    max_retries: int
    retry_initial_s: float
    retry_max_s: float


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def load_ai_config() -> AIConfig:
    api_key = settings.openai_api_key
    if api_key and _looks_like_placeholder(api_key):
        api_key = None
    return AIConfig(
        provider=settings.ai_provider,
        model=settings.ai_model,
        embedding_model=settings.ai_embedding_model,
        api_key=api_key,
        base_url=settings.openai_base_url,
        timeout_s=settings.ai_timeout_s,
        max_retries=settings.ai_max_retries,
        retry_initial_s=settings.ai_retry_initial_s,
        retry_max_s=settings.ai_retry_max_s,
    )


def has_credential(cfg: AIConfig) -> bool:
    """The offline provider needs no key; remote providers do."""
    if cfg.provider == "local":
        return True
    return bool(cfg.api_key)
