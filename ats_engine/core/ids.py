from __future__ import annotations

import itertools
import uuid
from typing import Protocol


class IdFactory(Protocol):
    def new_id(self) -> str: ...


class UuidIdFactory:
    def new_id(self) -> str:
        return uuid.uuid4().hex


class SequentialIdFactory:
    """Deterministic ids (`ko-1`, `ko-2`, ...) for reproducible output."""

    def __init__(self, prefix: str = "ko") -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)

    def new_id(self) -> str:
        return f"{self._prefix}-{next(self._counter)}"


default_id_factory: IdFactory = UuidIdFactory()
