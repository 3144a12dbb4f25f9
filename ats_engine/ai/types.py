from __future__ import annotations

from typing import Protocol


class EmbeddingClient(Protocol):
    async def embed(self, text: str) -> list[float]: ...


class GenerationClient(Protocol):
    async def generate_json(self, prompt: str) -> str: ...


class AIClient(EmbeddingClient, GenerationClient, Protocol):
    """Embedding plus JSON generation; what the semantic analyzer consumes."""
