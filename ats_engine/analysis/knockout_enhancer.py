from __future__ import annotations

import logging
from typing import Iterable

from ats_engine.core.config.scoring import get_scoring_int
from ats_engine.core.ids import IdFactory, default_id_factory
from ats_engine.schemas.knockouts import (
    AutoAssessment,
    EnhancedKnockoutItem,
    KnockoutItem,
    LocationRequirement,
    ResumeProfile,
)

from .requirements import (
    extract_education_requirement,
    extract_experience_requirement,
    extract_location_requirement,
)
from .resume_profile import (
    build_resume_profile,
    extract_resume_location,
    format_education_level,
    meets_education_requirement,
)

logger = logging.getLogger(__name__)

_MANUAL_REVIEW = AutoAssessment(likely=False, confidence="low", reason="Please review this requirement manually")


def check_location_match(resume_text: str, requirement: LocationRequirement) -> AutoAssessment:
    if requirement.type == "remote":
        return AutoAssessment(likely=True, confidence="high", reason="Role is fully remote")

    resume_location = extract_resume_location(resume_text)

    if requirement.type == "hybrid":
        if resume_location:
            return AutoAssessment(
                likely=True,
                confidence="medium",
                reason=f"Hybrid role - candidate appears to be in {resume_location}",
            )
        return AutoAssessment(
            likely=False,
            confidence="low",
            reason="Hybrid role - unable to determine candidate location",
        )

    if requirement.location and resume_location:
        wanted = requirement.location.lower()
        found = resume_location.lower()
        matches = wanted in found or found in wanted
        return AutoAssessment(
            likely=matches,
            confidence="medium" if matches else "low",
            reason=(
                f"Location appears to match ({resume_location})"
                if matches
                else f"Location may not match - job in {requirement.location}, candidate in {resume_location}"
            ),
        )

    return AutoAssessment(likely=False, confidence="low", reason="On-site role - unable to verify location match")


def _assess_authorization(item: KnockoutItem, profile: ResumeProfile) -> AutoAssessment:
    if "clearance" in item.label.lower():
        return AutoAssessment(
            likely=profile.has_clearance,
            confidence="high" if profile.has_clearance else "medium",
            reason=(
                "Resume indicates active security clearance"
                if profile.has_clearance
                else "No security clearance mentioned in resume"
            ),
        )
    if profile.work_authorization is True:
        reason = "Resume indicates work authorization"
    elif profile.work_authorization is False:
        reason = "Resume may indicate visa status requiring sponsorship"
    else:
        reason = "Work authorization status not found in resume"
    return AutoAssessment(
        likely=profile.work_authorization is True,
        confidence="medium" if profile.work_authorization is not None else "low",
        reason=reason,
    )


def _assess_degree(job_text: str, profile: ResumeProfile) -> tuple[AutoAssessment | None, str | None]:
    requirement = extract_education_requirement(job_text)
    if requirement is None:
        return None, None
    level = profile.education_level
    meets = meets_education_requirement(level, requirement.level)
    if level is None:
        reason = "Education level not clearly identified in resume"
    elif meets:
        reason = f"Resume shows {format_education_level(level)} degree"
    else:
        reason = (
            f"Resume shows {format_education_level(level)}, "
            f"job requires {format_education_level(requirement.level)}"
        )
    assessment = AutoAssessment(
        likely=meets or not requirement.required,
        confidence="high" if level else "low",
        reason=reason,
    )
    return assessment, format_education_level(level) if level else None


def _assess_license(item: KnockoutItem, profile: ResumeProfile) -> tuple[AutoAssessment, str | None]:
    label = item.label.lower()
    label_head = label.split(" ")[0]
    has_certification = any(
        cert.lower() in label or label_head in cert.lower() for cert in profile.certifications
    )
    listed = ", ".join(profile.certifications)
    assessment = AutoAssessment(
        likely=has_certification,
        confidence="high" if has_certification else "medium",
        reason=(
            f"Matching certification found: {listed}"
            if has_certification
            else "Required certification not found in resume"
        ),
    )
    return assessment, listed or None


def enhance_knockouts(
    knockouts: Iterable[KnockoutItem],
    resume_text: str,
    job_text: str,
    *,
    profile: ResumeProfile | None = None,
) -> list[EnhancedKnockoutItem]:
    """Attach a resume-based likelihood estimate to each detected knockout."""
    profile = profile or build_resume_profile(resume_text)
    location_requirement = extract_location_requirement(job_text)
    enhanced: list[EnhancedKnockoutItem] = []

    for item in knockouts:
        assessment: AutoAssessment | None
        evidence: str | None = None
        if item.category == "authorization":
            assessment = _assess_authorization(item, profile)
        elif item.category == "degree":
            assessment, evidence = _assess_degree(job_text, profile)
        elif item.category == "license":
            assessment, evidence = _assess_license(item, profile)
        elif item.category == "location":
            assessment = (
                check_location_match(resume_text, location_requirement) if location_requirement else None
            )
        else:
            assessment = _MANUAL_REVIEW
        enhanced.append(EnhancedKnockoutItem.from_item(item, auto_assessment=assessment, resume_evidence=evidence))

    return enhanced


def detect_experience_knockout(
    resume_text: str,
    job_text: str,
    *,
    suppression_gap_years: int | None = None,
    overlap_discount: float | None = None,
    current_year: int | None = None,
    id_factory: IdFactory | None = None,
) -> EnhancedKnockoutItem | None:
    """Flag a years-of-experience shortfall, ignoring gaps within the suppression window."""
    requirement = extract_experience_requirement(job_text)
    if requirement is None:
        return None

    if suppression_gap_years is None:
        suppression_gap_years = get_scoring_int("knockouts.experience.suppression_gap_years", 2)
    profile = build_resume_profile(resume_text, overlap_discount=overlap_discount, current_year=current_year)
    resume_years = profile.estimated_years
    gap = requirement.years - resume_years
    if gap <= suppression_gap_years:
        logger.debug(
            "experience_knockout_suppressed required=%s estimated=%s", requirement.years, resume_years
        )
        return None

    label = f"{requirement.years}+ years of experience required"
    return EnhancedKnockoutItem(
        id=(id_factory or default_id_factory).new_id(),
        label=label,
        category="other",
        evidence=(
            f"{requirement.years}+ years of experience in {requirement.field}" if requirement.field else label
        ),
        auto_assessment=AutoAssessment(
            likely=False,
            confidence="medium",
            reason=f"Resume shows approximately {resume_years} years ({gap} years short of requirement)",
        ),
        resume_evidence=f"~{resume_years} years experience detected",
    )
