from __future__ import annotations

from pydantic import BaseModel, Field

from .guidance import GuidanceItem
from .keywords import CoverageResult, KeywordSet
from .knockouts import AnyKnockoutItem, KnockoutRiskResult
from .resume import FileType, ParseHealthResult, PdfLayoutSignals, ResumeArtifact
from .search import RecruiterSearchResult
from .semantic import SemanticMatchResult
from .vendor import VendorDetectionResult

MAX_TEXT_CHARS = 50000
MAX_URL_CHARS = 2048


class KeywordsRequest(BaseModel):
    job_description_text: str = Field(min_length=1, max_length=MAX_TEXT_CHARS)


class CoverageRequest(BaseModel):
    resume_text: str = Field(default="", max_length=MAX_TEXT_CHARS)
    job_description_text: str | None = Field(default=None, max_length=MAX_TEXT_CHARS)
    keywords: KeywordSet | None = None


class KnockoutsRequest(BaseModel):
    job_description_text: str = Field(min_length=1, max_length=MAX_TEXT_CHARS)
    resume_text: str | None = Field(default=None, max_length=MAX_TEXT_CHARS)


class KnockoutsResponse(BaseModel):
    items: list[AnyKnockoutItem]


class KnockoutRiskRequest(BaseModel):
    items: list[AnyKnockoutItem] = Field(default_factory=list, max_length=200)


class RecruiterSearchRequest(BaseModel):
    resume_text: str = Field(default="", max_length=MAX_TEXT_CHARS)
    job_description_text: str = Field(min_length=1, max_length=MAX_TEXT_CHARS)


class SemanticMatchRequest(BaseModel):
    resume_text: str = Field(min_length=1, max_length=MAX_TEXT_CHARS)
    job_description_text: str = Field(min_length=1, max_length=MAX_TEXT_CHARS)
    has_consented: bool = False


class VendorDetectionRequest(BaseModel):
    url: str = Field(min_length=1, max_length=MAX_URL_CHARS)


class RewriteRequest(BaseModel):
    bullet_text: str = Field(min_length=1, max_length=2000)
    bullet_section: str = Field(default="Experience", max_length=100)
    resume_text: str = Field(default="", max_length=MAX_TEXT_CHARS)
    job_description_text: str = Field(min_length=1, max_length=MAX_TEXT_CHARS)
    missing_keywords: list[str] | None = Field(default=None, max_length=50)
    has_consented: bool = False


class AnalyzeRequest(BaseModel):
    resume_text: str = Field(default="", max_length=MAX_TEXT_CHARS)
    job_description_text: str | None = Field(default=None, max_length=MAX_TEXT_CHARS)
    job_url: str | None = Field(default=None, max_length=MAX_URL_CHARS)
    file_type: FileType = "txt"
    extraction_warnings: list[str] = Field(default_factory=list, max_length=50)
    pdf_signals: PdfLayoutSignals | None = None
    has_consented: bool = False

    def to_artifact(self) -> ResumeArtifact:
        return ResumeArtifact(
            text=self.resume_text,
            file_type=self.file_type,
            extraction_warnings=tuple(self.extraction_warnings),
            pdf_signals=self.pdf_signals,
        )


class AnalyzeResponse(BaseModel):
    parse_health: ParseHealthResult
    keywords: KeywordSet | None = None
    coverage: CoverageResult | None = None
    knockouts: list[AnyKnockoutItem] = Field(default_factory=list)
    knockout_risk: KnockoutRiskResult | None = None
    recruiter_search: RecruiterSearchResult | None = None
    semantic_match: SemanticMatchResult | None = None
    ats_vendor: VendorDetectionResult | None = None
    guidance: list[GuidanceItem] = Field(default_factory=list)
