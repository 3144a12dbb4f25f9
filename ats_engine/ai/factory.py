from __future__ import annotations

from ats_engine.ai.config import AIConfig, load_ai_config
from ats_engine.ai.providers.local_provider import LocalProvider
from ats_engine.ai.providers.openai_provider import OpenAIProvider
from ats_engine.ai.types import AIClient


def get_ai_client(cfg: AIConfig | None = None) -> AIClient:
    cfg = cfg or load_ai_config()

    if cfg.provider == "openai":
        return OpenAIProvider(
            model=cfg.model,
            embedding_model=cfg.embedding_model,
            api_key=cfg.api_key,
            base_url=cfg.base_url,
            timeout_s=cfg.timeout_s,
            max_retries=cfg.max_retries,
            retry_initial_s=cfg.retry_initial_s,
            retry_max_s=cfg.retry_max_s,
        )

    if cfg.provider == "local":
        return LocalProvider()

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
