from __future__ import annotations

import re

from ats_engine.core.config.scoring import get_scoring_int
from ats_engine.schemas.knockouts import EducationRequirement, ExperienceRequirement, LocationRequirement

_EXPERIENCE_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"(\d+)\+?\s*(?:years?|yrs?)(?:\s+of)?\s+(?:relevant\s+)?(?:professional\s+)?experience",
        r"minimum\s+(?:of\s+)?(\d+)\s*(?:years?|yrs?)",
        r"at\s+least\s+(\d+)\s*(?:years?|yrs?)",
        r"(\d+)\s*[-–]\s*\d+\s*(?:years?|yrs?)(?:\s+of)?\s+experience",
        r"experienced\s*\((\d+)\+?\s*(?:years?|yrs?)\)",
        r"(\d+)\s*(?:years?|yrs?)['’]\s*experience",
    )
)
_EXPERIENCE_FIELD = re.compile(r"experience\s+(?:in|with)\s+([a-z\s,]+?)(?:\.|,|\band\b|\bor\b|$)", re.IGNORECASE)

# Ordered strongest first; the first hit wins.
_EDUCATION_PATTERNS: tuple[tuple[re.Pattern[str], str, bool], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), level, required)
    for pattern, level, required in (
        (r"ph\.?d\.?\s+(required|in|preferred)", "phd", True),
        (r"doctorate\s+(required|degree)", "phd", True),
        (r"master'?s?\s+(degree\s+)?(required|in)", "master", True),
        (r"ms/ma\s+(required|minimum)", "master", True),
        (r"\bmba\s+required", "master", True),
        (r"graduate\s+degree\s+required", "master", True),
        (r"bachelor'?s?\s+(degree\s+)?(required|in)", "bachelor", True),
        (r"bs/ba\s+(required|minimum)", "bachelor", True),
        (r"undergraduate\s+degree\s+required", "bachelor", True),
        (r"4[- ]year\s+degree\s+required", "bachelor", True),
        (r"associate'?s?\s+(degree\s+)?(required|in)", "associate", True),
        (r"2[- ]year\s+degree\s+required", "associate", True),
        (r"high\s+school\s+(diploma|ged)\s+required", "high_school", True),
        (r"degree\s+(?:or\s+)?equivalent\s+experience", "bachelor", False),
    )
)
_EDUCATION_FIELD = re.compile(
    r"(?:\bin|degree\s+in)\s+(computer science|engineering|business|mathematics|science|related field|[a-z\s]+?)"
    r"(?:\s+or|\s+preferred|\.|,|$)",
    re.IGNORECASE,
)

_REMOTE_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\b(fully|completely)\s+remote\b",
        r"100%\s+remote\b",
        r"\bremote[- ]only\b",
        r"\bwork\s+from\s+(home|anywhere)\b",
    )
)
_HYBRID_DAYS = (
    re.compile(r"hybrid\s*[(:]?\s*(\d+)\s*days?", re.IGNORECASE),
    re.compile(r"(\d+)\s*days?\s+(?:per\s+week\s+)?(?:in[- ]?office|on[- ]?site)", re.IGNORECASE),
)
_HYBRID_WORD = re.compile(r"\bhybrid\b", re.IGNORECASE)
_ONSITE_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\b(on[- ]?site|in[- ]?office|in[- ]?person)\s+(only|required|position)\b",
        r"\bmust\s+(work\s+)?on[- ]?site\b",
        r"100%\s+on[- ]?site\b",
    )
)
# Case-sensitive on purpose: place names are capitalized.
_ONSITE_LOCATION = re.compile(r"(?:located\s+in|based\s+in|office\s+in)\s+([A-Z][a-z]+(?:,?\s+[A-Z]{2})?)")


def extract_experience_requirement(job_text: str) -> ExperienceRequirement | None:
    """Minimum years of experience asked for, sanity-capped to a configured range."""
    if not job_text:
        return None
    low = get_scoring_int("knockouts.experience.min_required_years", 1)
    high = get_scoring_int("knockouts.experience.max_required_years", 30)
    for pattern in _EXPERIENCE_PATTERNS:
        match = pattern.search(job_text)
        if match is None:
            continue
        years = int(match.group(1))
        if not low <= years <= high:
            continue
        window = job_text[max(0, match.start() - 50) : match.end() + 100]
        field_match = _EXPERIENCE_FIELD.search(window)
        field = field_match.group(1).strip() if field_match else None
        return ExperienceRequirement(years=years, field=field or None)
    return None


def extract_education_requirement(job_text: str) -> EducationRequirement | None:
    if not job_text:
        return None
    for pattern, level, required in _EDUCATION_PATTERNS:
        match = pattern.search(job_text)
        if match is None:
            continue
        field_match = _EDUCATION_FIELD.search(job_text[match.start() : match.start() + 150])
        field = field_match.group(1).strip() if field_match else None
        return EducationRequirement(level=level, required=required, field=field or None)
    return None


def extract_location_requirement(job_text: str) -> LocationRequirement | None:
    if not job_text:
        return None

    if any(pattern.search(job_text) for pattern in _REMOTE_PATTERNS):
        return LocationRequirement(type="remote")

    days_match = None
    for pattern in _HYBRID_DAYS:
        days_match = pattern.search(job_text)
        if days_match:
            break
    if days_match or _HYBRID_WORD.search(job_text):
        return LocationRequirement(
            type="hybrid",
            days_in_office=int(days_match.group(1)) if days_match else None,
        )

    if any(pattern.search(job_text) for pattern in _ONSITE_PATTERNS):
        location = _ONSITE_LOCATION.search(job_text)
        return LocationRequirement(type="onsite", location=location.group(1) if location else None)

    return None
