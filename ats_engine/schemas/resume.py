from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .findings import Finding

SignalLevel = Literal["low", "medium", "high"]
FileType = Literal["pdf", "docx", "txt"]


class PdfLayoutSignals(BaseModel):
    model_config = ConfigDict(frozen=True)

    estimated_columns: Literal[1, 2, 3] = 1
    column_merge_risk: SignalLevel = "low"
    text_density: SignalLevel = "high"
    header_contact_risk: SignalLevel = "low"


class ResumeArtifact(BaseModel):
    """Plain text plus layout hints from the upstream document extractor."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    file_type: FileType = "txt"
    extraction_warnings: tuple[str, ...] = ()
    pdf_signals: PdfLayoutSignals | None = None


class Scores(BaseModel):
    model_config = ConfigDict(frozen=True)

    parse_health: int = Field(ge=0, le=100)
    layout_score: int = Field(ge=0, le=100)
    contact_score: int = Field(ge=0, le=100)
    section_score: int = Field(ge=0, le=100)


class ParseHealthResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    scores: Scores
    findings: tuple[Finding, ...] = ()
