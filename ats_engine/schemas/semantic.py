from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .findings import Finding

MatchSource = Literal["synonym", "model"]


class SubScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    explanation: str
    highlights: tuple[str, ...] = ()


class SemanticSubScores(BaseModel):
    model_config = ConfigDict(frozen=True)

    skills: SubScore
    experience: SubScore
    domain: SubScore
    role: SubScore


class QualitativeAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    strengths: tuple[str, ...] = ()
    gaps: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    summary: str = ""


class SemanticKeywordMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    jd_keyword: str
    resume_match: str
    confidence: float = Field(ge=0.0, le=1.0)
    explanation: str
    source: MatchSource = "model"


class SemanticMatchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    success: bool
    label: str
    sub_scores: SemanticSubScores
    analysis: QualitativeAnalysis
    keyword_matches: tuple[SemanticKeywordMatch, ...] = ()
    error_code: str | None = None
    error: str | None = None
    findings: tuple[Finding, ...] = ()


class RewriteSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    original: str
    rewritten: str
    keywords_incorporated: tuple[str, ...] = ()
    rationale: str = ""


class RewriteResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    suggestions: tuple[RewriteSuggestion, ...] = ()
    error_code: str | None = None
    error: str | None = None
