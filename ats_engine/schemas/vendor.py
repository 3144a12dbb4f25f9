from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

VendorType = Literal["sorter", "processor"]
DetectionConfidence = Literal["high", "medium", "low"]
ScoreName = Literal["parse_health", "knockout_risk", "semantic_match", "recruiter_search"]


class VendorGuidance(BaseModel):
    model_config = ConfigDict(frozen=True)

    focus: tuple[ScoreName, ...]
    explanation: str


class ATSVendor(BaseModel):
    """An applicant tracking system or job board with its own application flow.

    Sorters rank candidates automatically; processors leave ranking to a
    recruiter's search and manual review.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: VendorType
    description: str
    guidance: VendorGuidance
    ai_addon: str | None = None


class VendorDetectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    detected: bool
    confidence: DetectionConfidence
    vendor: ATSVendor | None = None
    matched_pattern: str | None = None
    company: str | None = None
    guidance: VendorGuidance
    relevant_scores: tuple[ScoreName, ...]
