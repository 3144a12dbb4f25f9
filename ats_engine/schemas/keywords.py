from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .findings import Finding


class KeywordSet(BaseModel):
    """Ranked job keywords: `critical` and `optional` never overlap, `all` is the full ranking."""

    model_config = ConfigDict(frozen=True)

    critical: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    all: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_partition(self) -> "KeywordSet":
        overlap = {item.lower() for item in self.critical} & {item.lower() for item in self.optional}
        if overlap:
            raise ValueError(f"critical and optional keywords overlap: {sorted(overlap)}")
        return self

    @property
    def is_empty(self) -> bool:
        return not self.critical and not self.optional


class CoverageResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    grade: str
    found_keywords: tuple[str, ...] = ()
    missing_keywords: tuple[str, ...] = ()
    bonus_keywords: tuple[str, ...] = ()
    findings: tuple[Finding, ...] = ()
