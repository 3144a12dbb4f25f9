from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .findings import Finding


class RecruiterSearchBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    keyword_match: float = Field(ge=0, le=100)
    title_alignment: float = Field(ge=0, le=100)
    skills_coverage: float = Field(ge=0, le=100)
    industry_terms: float = Field(ge=0, le=100)


class RecruiterSearchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    breakdown: RecruiterSearchBreakdown
    suggestions: tuple[str, ...] = ()
    matched_keywords: tuple[str, ...] = ()
    missing_keywords: tuple[str, ...] = ()
    matched_titles: tuple[str, ...] = ()
    target_title: str | None = None
    industry: str | None = None
    findings: tuple[Finding, ...] = ()
