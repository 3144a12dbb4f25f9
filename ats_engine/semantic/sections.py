from __future__ import annotations

import re
from dataclasses import dataclass

from ats_engine.core.config.scoring import get_scoring_int


def _lazy(*sources: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(source, re.IGNORECASE | re.DOTALL) for source in sources)


JD_REQUIREMENTS = _lazy(
    r"requirements?:?\s*(.*?)(?=responsibilities|qualifications|about|benefits|$)",
    r"what you(?:'ll)? need:?\s*(.*?)(?=what you|about|$)",
    r"must have:?\s*(.*?)(?=nice to have|responsibilities|$)",
)
JD_RESPONSIBILITIES = _lazy(
    r"responsibilities:?\s*(.*?)(?=requirements|qualifications|about|$)",
    r"what you(?:'ll)? do:?\s*(.*?)(?=what you|requirements|$)",
    r"duties:?\s*(.*?)(?=requirements|qualifications|$)",
)
JD_QUALIFICATIONS = _lazy(
    r"qualifications?:?\s*(.*?)(?=responsibilities|requirements|about|$)",
    r"preferred:?\s*(.*?)(?=requirements|about|$)",
)
JD_ABOUT = _lazy(
    r"about (?:the )?(?:role|position|job):?\s*(.*?)(?=requirements|responsibilities|$)",
    r"overview:?\s*(.*?)(?=requirements|responsibilities|$)",
)

RESUME_SKILLS = _lazy(
    r"skills?:?\s*(.*?)(?=experience|education|projects|$)",
    r"technical skills?:?\s*(.*?)(?=experience|education|$)",
    r"core competenc(?:y|ies):?\s*(.*?)(?=experience|education|$)",
)
RESUME_EXPERIENCE = _lazy(
    r"(?:work )?experience:?\s*(.*?)(?=education|skills|projects|$)",
    r"employment(?: history)?:?\s*(.*?)(?=education|skills|$)",
    r"professional experience:?\s*(.*?)(?=education|skills|$)",
)
RESUME_EDUCATION = _lazy(
    r"education:?\s*(.*?)(?=experience|skills|projects|$)",
    r"academic background:?\s*(.*?)(?=experience|skills|$)",
)


@dataclass(frozen=True)
class JobSections:
    requirements: str
    responsibilities: str
    qualifications: str
    about: str
    full: str


@dataclass(frozen=True)
class ResumeSections:
    skills: str
    experience: str
    education: str
    full: str


def first_section(text: str, patterns: tuple[re.Pattern[str], ...]) -> str:
    """Body of the first matching header; matchers are tried in order."""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1).strip()
    return ""


def split_job_sections(job_text: str) -> JobSections:
    fallback = job_text[: get_scoring_int("semantic.section_fallback_chars", 2000)]
    return JobSections(
        requirements=first_section(job_text, JD_REQUIREMENTS) or fallback,
        responsibilities=first_section(job_text, JD_RESPONSIBILITIES) or fallback,
        qualifications=first_section(job_text, JD_QUALIFICATIONS),
        about=first_section(job_text, JD_ABOUT),
        full=job_text,
    )


def split_resume_sections(resume_text: str) -> ResumeSections:
    fallback = resume_text[: get_scoring_int("semantic.section_fallback_chars", 2000)]
    return ResumeSections(
        skills=first_section(resume_text, RESUME_SKILLS) or fallback,
        experience=first_section(resume_text, RESUME_EXPERIENCE) or fallback,
        education=first_section(resume_text, RESUME_EDUCATION),
        full=resume_text,
    )
