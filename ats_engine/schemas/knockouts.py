from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .findings import Finding

KnockoutCategory = Literal["authorization", "location", "schedule", "license", "degree", "physical", "other"]
Confidence = Literal["high", "medium", "low"]
RiskLevel = Literal["low", "medium", "high"]
EducationLevel = Literal["high_school", "associate", "bachelor", "master", "phd"]
LocationType = Literal["remote", "hybrid", "onsite"]

KNOCKOUT_CATEGORY_ORDER: tuple[str, ...] = (
    "authorization",
    "degree",
    "license",
    "location",
    "schedule",
    "physical",
    "other",
)

KNOCKOUT_CATEGORY_LABELS: dict[str, str] = {
    "authorization": "Work Authorization",
    "location": "Location/Commute",
    "schedule": "Schedule/Availability",
    "license": "License/Certification",
    "degree": "Education",
    "physical": "Physical Requirements",
    "other": "Other Requirements",
}


def knockout_category_label(category: str) -> str:
    return KNOCKOUT_CATEGORY_LABELS.get(category, KNOCKOUT_CATEGORY_LABELS["other"])


class _KnockoutFields(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    category: KnockoutCategory
    evidence: str
    user_confirmed: bool | None = None

    def with_confirmation(self, confirmed: bool | None):
        """Return a copy recording the user's answer; the original stays untouched."""
        return self.model_copy(update={"user_confirmed": confirmed})


class KnockoutItem(_KnockoutFields):
    kind: Literal["base"] = "base"


class AutoAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    likely: bool
    confidence: Confidence
    reason: str


class EnhancedKnockoutItem(_KnockoutFields):
    kind: Literal["enhanced"] = "enhanced"
    auto_assessment: AutoAssessment | None = None
    resume_evidence: str | None = None

    @classmethod
    def from_item(
        cls,
        item: KnockoutItem,
        *,
        auto_assessment: AutoAssessment | None = None,
        resume_evidence: str | None = None,
    ) -> "EnhancedKnockoutItem":
        return cls(
            id=item.id,
            label=item.label,
            category=item.category,
            evidence=item.evidence,
            user_confirmed=item.user_confirmed,
            auto_assessment=auto_assessment,
            resume_evidence=resume_evidence,
        )


AnyKnockoutItem = Annotated[Union[KnockoutItem, EnhancedKnockoutItem], Field(discriminator="kind")]


class ExperienceRequirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    years: int = Field(ge=1, le=30)
    field: str | None = None


class EducationRequirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: EducationLevel
    required: bool = True
    field: str | None = None


class LocationRequirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: LocationType
    location: str | None = None
    days_in_office: int | None = None


class ResumeProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    estimated_years: int = 0
    education_level: EducationLevel | None = None
    work_authorization: bool | None = None
    has_clearance: bool = False
    certifications: tuple[str, ...] = ()
    location: str | None = None


class KnockoutRiskResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    risk: RiskLevel
    label: str
    explanation: str
    confirmed: tuple[AnyKnockoutItem, ...] = ()
    blockers: tuple[AnyKnockoutItem, ...] = ()
    unclear: tuple[AnyKnockoutItem, ...] = ()
    findings: tuple[Finding, ...] = ()
