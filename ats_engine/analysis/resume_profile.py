from __future__ import annotations

import re
from datetime import date
from typing import Callable

from ats_engine.core.config.scoring import get_scoring_float, get_scoring_int
from ats_engine.schemas.knockouts import EducationLevel, ResumeProfile

from .common import round_half_up

EDUCATION_RANK: dict[str, int] = {
    "high_school": 1,
    "associate": 2,
    "bachelor": 3,
    "master": 4,
    "phd": 5,
}

EDUCATION_DISPLAY: dict[str, str] = {
    "high_school": "High School",
    "associate": "Associate's",
    "bachelor": "Bachelor's",
    "master": "Master's",
    "phd": "PhD",
}

_MONTH = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?"
_MONTH_RANGE = re.compile(
    rf"{_MONTH}\s*(\d{{4}})\s*[-–—]\s*(?:{_MONTH}\s*(\d{{4}})|present|current|now)",
    re.IGNORECASE,
)
_YEAR_RANGE = re.compile(r"\b(20\d{2}|19\d{2})\s*[-–—]\s*(20\d{2}|present|current|now)\b", re.IGNORECASE)

_EDUCATION_LEVELS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("phd", re.compile(r"\bph\.?d\b|\bdoctorate\b|\bdoctor of\b", re.IGNORECASE)),
    (
        "master",
        re.compile(
            r"\bmaster'?s?\s+(degree|of|in)\b|\bm\.?s\.?\s+in\b|\bm\.?a\.?\s+in\b|\bm\.?b\.?a\b",
            re.IGNORECASE,
        ),
    ),
    (
        "bachelor",
        re.compile(
            r"\bbachelor'?s?\s+(degree|of|in)\b|\bb\.?s\.?\s+in\b|\bb\.?a\.?\s+in\b|\bb\.?sc\b|\bundergraduate\b",
            re.IGNORECASE,
        ),
    ),
    (
        "associate",
        re.compile(r"\bassociate'?s?\s+(degree|of|in)\b|\ba\.s\.\s+in\b|\ba\.a\.\s+in\b", re.IGNORECASE),
    ),
    ("high_school", re.compile(r"\bhigh school\b|\bged\b|\bdiploma\b", re.IGNORECASE)),
)

_AUTHORIZATION_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\b(us|u\.s\.)\s+citizen\b",
        r"\bamerican\s+citizen\b",
        r"\bauthorized\s+to\s+work\b",
        r"\bpermanent\s+resident\b",
        r"\bgreen\s+card\b",
    )
)
_VISA_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\b(h-?1b|f-?1|l-?1)\b",
        r"\b(opt|cpt|tn)\s+(visa|status)\b",
        r"\bstem\s+opt\b",
        r"\brequires?\s+sponsorship\b",
        r"\bvisa\s+holder\b",
    )
)
_CLEARANCE_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\b(secret|top secret|ts/sci|sci)\s+clearance\b",
        r"\bactive\s+clearance\b",
        r"\bclearance:\s*(secret|ts|sci)",
        r"\bholds?\s+(a\s+)?(secret|ts|sci)\b",
    )
)

_CERTIFICATION_PATTERNS: tuple[tuple[re.Pattern[str], Callable[[str], str]], ...] = (
    (re.compile(r"\b(cissp|cism|cisa)\b|\bsecurity\+|\bsec\+", re.IGNORECASE), lambda found: found.upper()),
    (re.compile(r"\baws\s+(certified|solutions architect|developer|sysops)", re.IGNORECASE), lambda _: "AWS Certified"),
    (re.compile(r"\bazure\s+(certified|administrator|developer)", re.IGNORECASE), lambda _: "Azure Certified"),
    (re.compile(r"\b(gcp|google cloud)\s+certified", re.IGNORECASE), lambda _: "GCP Certified"),
    (re.compile(r"\bpmp\b", re.IGNORECASE), lambda _: "PMP"),
    (re.compile(r"\bscrum\s+master\b", re.IGNORECASE), lambda _: "Scrum Master"),
    (re.compile(r"\bcsm\b", re.IGNORECASE), lambda _: "CSM"),
    (re.compile(r"\bcpa\b", re.IGNORECASE), lambda _: "CPA"),
    (re.compile(r"\bcfa\b", re.IGNORECASE), lambda _: "CFA"),
    (re.compile(r"\b(rn|registered nurse)\b", re.IGNORECASE), lambda _: "RN"),
    (re.compile(r"\bbar\s+(admission|admitted)", re.IGNORECASE), lambda _: "Bar Admission"),
    (re.compile(r"\bpe\s+(license|licensed)", re.IGNORECASE), lambda _: "PE License"),
)

_LOCATION_PATTERNS = (
    re.compile(r"\b([A-Z][a-z]+,?\s*[A-Z]{2})\b"),
    re.compile(r"\blocated\s+in\s+([A-Z][a-z]+)", re.IGNORECASE),
    re.compile(r"\b([A-Z][a-z]+)\s+metro\s+area\b", re.IGNORECASE),
)


def _span_years(start_year: int, end_year: int, current_year: int) -> int | None:
    earliest = get_scoring_int("knockouts.experience.earliest_start_year", 1980)
    max_span = get_scoring_int("knockouts.experience.max_span_years", 40)
    if not earliest <= start_year <= current_year:
        return None
    years = end_year - start_year
    if 0 <= years <= max_span:
        return years
    return None


def estimate_resume_years(
    resume_text: str,
    *,
    overlap_discount: float | None = None,
    current_year: int | None = None,
) -> int:
    """Rough years of experience from date ranges.

    Month-year ranges are read first; bare year ranges that do not overlap
    them in the text are added on top. The raw total is discounted to allow
    for concurrent roles.
    """
    if not resume_text:
        return 0
    if overlap_discount is None:
        overlap_discount = get_scoring_float("knockouts.experience.overlap_discount", 0.7)
    this_year = current_year or date.today().year

    total_years = 0
    claimed: list[tuple[int, int]] = []
    for match in _MONTH_RANGE.finditer(resume_text):
        start_year = int(match.group(1))
        end_year = int(match.group(2)) if match.group(2) else this_year
        years = _span_years(start_year, end_year, this_year)
        if years is not None:
            total_years += years
            claimed.append(match.span())

    for match in _YEAR_RANGE.finditer(resume_text):
        if any(match.start() < end and start < match.end() for start, end in claimed):
            continue
        start_year = int(match.group(1))
        end_raw = match.group(2)
        end_year = int(end_raw) if end_raw.isdigit() else this_year
        years = _span_years(start_year, end_year, this_year)
        if years is not None:
            total_years += years

    return round_half_up(total_years * overlap_discount)


def detect_education_level(resume_text: str) -> EducationLevel | None:
    for level, pattern in _EDUCATION_LEVELS:
        if pattern.search(resume_text or ""):
            return level  # type: ignore[return-value]
    return None


def meets_education_requirement(resume_level: str | None, required_level: str) -> bool:
    if not resume_level:
        return False
    return EDUCATION_RANK[resume_level] >= EDUCATION_RANK[required_level]


def format_education_level(level: str) -> str:
    return EDUCATION_DISPLAY.get(level, level)


def detect_work_authorization(resume_text: str) -> tuple[bool | None, bool]:
    """Return (authorization signal, clearance flag).

    Any visa or sponsorship mention turns the authorization signal False,
    even when a citizenship phrase is also present.
    """
    text = resume_text or ""
    authorized: bool | None = None
    if any(pattern.search(text) for pattern in _AUTHORIZATION_PATTERNS):
        authorized = True
    if any(pattern.search(text) for pattern in _VISA_PATTERNS):
        authorized = False
    has_clearance = any(pattern.search(text) for pattern in _CLEARANCE_PATTERNS)
    return authorized, has_clearance


def extract_certifications(resume_text: str) -> list[str]:
    certifications: list[str] = []
    for pattern, name in _CERTIFICATION_PATTERNS:
        for match in pattern.finditer(resume_text or ""):
            certification = name(match.group(0))
            if certification not in certifications:
                certifications.append(certification)
    return certifications


def extract_resume_location(resume_text: str) -> str | None:
    for pattern in _LOCATION_PATTERNS:
        match = pattern.search(resume_text or "")
        if match:
            return match.group(1)
    return None


def build_resume_profile(
    resume_text: str,
    *,
    overlap_discount: float | None = None,
    current_year: int | None = None,
) -> ResumeProfile:
    authorized, has_clearance = detect_work_authorization(resume_text)
    return ResumeProfile(
        estimated_years=estimate_resume_years(
            resume_text, overlap_discount=overlap_discount, current_year=current_year
        ),
        education_level=detect_education_level(resume_text),
        work_authorization=authorized,
        has_clearance=has_clearance,
        certifications=tuple(extract_certifications(resume_text)),
        location=extract_resume_location(resume_text),
    )
