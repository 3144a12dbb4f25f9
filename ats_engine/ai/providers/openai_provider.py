from __future__ import annotations

import logging

from openai import AsyncOpenAI

from ats_engine.ai.errors import LLMError, classify_openai_error
from ats_engine.ai.retry import call_with_retry

logger = logging.getLogger(__name__)


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        embedding_model: str,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout_s: float = 30.0,
        max_retries: int = 3,
        retry_initial_s: float = 1.0,
        retry_max_s: float = 10.0,
        temperature: float = 0.3,
        max_output_tokens: int = 2048,
    ):
        key = (api_key or "").strip()
        if not key:
            raise LLMError("OPENAI_API_KEY is missing", code="missing_api_key")

        self._model = model
        self._embedding_model = embedding_model
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens
        self._max_retries = max_retries
        self._retry_initial_s = retry_initial_s
        self._retry_max_s = retry_max_s
        # Retries are owned by tenacity so only transient failures are retried.
        self._client = AsyncOpenAI(api_key=key, base_url=base_url or None, timeout=timeout_s, max_retries=0)

    async def _with_retry(self, func):
        return await call_with_retry(
            func,
            max_retries=self._max_retries,
            initial_s=self._retry_initial_s,
            max_s=self._retry_max_s,
        )

    async def embed(self, text: str) -> list[float]:
        async def _once() -> list[float]:
            try:
                response = await self._client.embeddings.create(model=self._embedding_model, input=text)
            except Exception as exc:  # noqa: BLE001 - translated into the LLMError taxonomy
                raise classify_openai_error(exc) from exc
            if not response.data:
                raise LLMError("Empty embedding response", code="malformed_response")
            return list(response.data[0].embedding)

        return await self._with_retry(_once)

    async def generate_json(self, prompt: str) -> str:
        async def _once() -> str:
            try:
                response = await self._client.chat.completions.create(
                    model=self._model,
                    messages=[{"role": "user", "content": prompt}],
                    temperature=self._temperature,
                    max_tokens=self._max_output_tokens,
                    response_format={"type": "json_object"},
                )
            except Exception as exc:  # noqa: BLE001 - translated into the LLMError taxonomy
                raise classify_openai_error(exc) from exc
            if not response.choices:
                raise LLMError("Empty completion response", code="malformed_response")
            choice = response.choices[0]
            if choice.finish_reason == "content_filter":
                raise LLMError("Response blocked by safety filter", code="safety_blocked")
            content = choice.message.content or ""
            if not content.strip():
                raise LLMError("Empty completion response", code="malformed_response")
            if choice.finish_reason == "length":
                logger.info("openai_completion_truncated model=%s chars=%s", self._model, len(content))
            return content

        return await self._with_retry(_once)
