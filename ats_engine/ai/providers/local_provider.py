from __future__ import annotations

import hashlib
import math
import re

from ats_engine.ai.errors import LLMError

_TOKEN_PATTERN = re.compile(r"[a-z0-9\+#]+")


class LocalProvider:
    """Offline provider: hashed bag-of-tokens embeddings and no text generation."""

    def __init__(self, dimension: int = 256) -> None:
        if dimension <= 0:
            raise ValueError("dimension must be greater than 0")
        self.dimension = dimension

    async def embed(self, text: str) -> list[float]:
        return self.embed_sync(text)

    def embed_sync(self, text: str) -> list[float]:
        vector = [0.0] * self.dimension
        for token in _TOKEN_PATTERN.findall(text.lower()):
            digest = hashlib.sha256(token.encode("utf-8")).hexdigest()
            vector[int(digest[:8], 16) % self.dimension] += 1.0

        norm = math.sqrt(sum(value * value for value in vector))
        if norm <= 0:
            return vector
        return [value / norm for value in vector]

    async def generate_json(self, prompt: str) -> str:
        raise LLMError("The local provider does not generate text", code="provider_error")
