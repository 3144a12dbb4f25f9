from __future__ import annotations

import re

from ats_engine.core.config.scoring import get_scoring_float, get_scoring_int
from ats_engine.schemas.findings import Finding
from ats_engine.schemas.keywords import KeywordSet
from ats_engine.schemas.search import RecruiterSearchBreakdown, RecruiterSearchResult
from ats_engine.taxonomy import SkillTaxonomy, get_default_taxonomy
from ats_engine.taxonomy.tables import INDUSTRY_TERMS, SENIORITY_LEVELS, TITLE_SYNONYMS

from .common import clamp, contains_term, normalize_job_text, round_half_up
from .matching import RECRUITER_MATCH, keyword_in_text, partition_keywords

_TITLE_FALLBACK = re.compile(
    r"^([a-z\s/\-]+(?:engineer|developer|manager|designer|analyst|specialist|lead|director))",
    re.IGNORECASE,
)


def _weights() -> dict[str, float]:
    return {
        "keyword_match": get_scoring_float("recruiter_search.weights.keyword_match", 0.40),
        "title_alignment": get_scoring_float("recruiter_search.weights.title_alignment", 0.25),
        "skills_coverage": get_scoring_float("recruiter_search.weights.skills_coverage", 0.25),
        "industry_terms": get_scoring_float("recruiter_search.weights.industry_terms", 0.10),
    }


def extract_job_title(job_text: str) -> str | None:
    """Canonical target title from the posting's first three lines."""
    opening = " ".join((job_text or "").splitlines()[:3]).lower().strip()
    if not opening:
        return None
    for canonical, synonyms in TITLE_SYNONYMS.items():
        if contains_term(opening, canonical):
            return canonical
        if any(contains_term(opening, synonym) for synonym in synonyms):
            return canonical
    match = _TITLE_FALLBACK.match(opening)
    if match:
        return match.group(1).strip()
    return None


def title_variations(title: str) -> list[str]:
    lowered = title.lower()
    variations = [lowered]
    variations.extend(TITLE_SYNONYMS.get(lowered, ()))
    for canonical, synonyms in TITLE_SYNONYMS.items():
        if lowered in synonyms:
            variations.append(canonical)
            variations.extend(synonyms)
    return list(dict.fromkeys(variations))


def extract_seniority(text: str) -> str | None:
    for level in SENIORITY_LEVELS:
        if contains_term(text, level):
            return level
    return None


def detect_industry(job_text: str) -> str | None:
    """Industry with the most term hits, provided it reaches the configured minimum."""
    text = normalize_job_text(job_text)
    best: str | None = None
    best_count = 0
    for industry, terms in INDUSTRY_TERMS.items():
        count = sum(1 for term in terms if contains_term(text, term))
        if count > best_count:
            best, best_count = industry, count
    minimum = get_scoring_int("recruiter_search.industry_min_jd_matches", 2)
    return best if best_count >= minimum else None


def _keyword_match_score(resume: str, keywords: KeywordSet) -> float:
    if not keywords.critical:
        return 100.0
    found_critical, _ = partition_keywords(resume, keywords.critical, RECRUITER_MATCH)
    found_optional, _ = partition_keywords(resume, keywords.optional, RECRUITER_MATCH)
    critical_score = len(found_critical) / len(keywords.critical) * 100
    bonus_max = get_scoring_float("recruiter_search.optional_bonus_max", 10)
    optional_bonus = len(found_optional) / len(keywords.optional) * bonus_max if keywords.optional else 0.0
    return min(100.0, critical_score + optional_bonus)


def _title_alignment(resume: str, job_text: str, target_title: str | None) -> tuple[float, list[str]]:
    neutral = get_scoring_float("recruiter_search.neutral_score", 50)
    if not target_title:
        return neutral, []

    synonym_score = get_scoring_float("recruiter_search.synonym_title_score", 80)
    best = 0.0
    matched: list[str] = []
    for title in title_variations(target_title):
        if not contains_term(resume, title):
            continue
        matched.append(title)
        best = max(best, 100.0 if title == target_title.lower() else synonym_score)

    job_level = extract_seniority(normalize_job_text(job_text))
    resume_level = extract_seniority(resume)
    bonus = 0.0
    if job_level and resume_level:
        if job_level == resume_level:
            bonus = get_scoring_float("recruiter_search.seniority_bonus.exact", 10)
        elif abs(SENIORITY_LEVELS.index(job_level) - SENIORITY_LEVELS.index(resume_level)) <= 1:
            bonus = get_scoring_float("recruiter_search.seniority_bonus.adjacent", 5)
    return min(100.0, best + bonus), matched


def _skills_coverage(resume: str, keywords: KeywordSet, taxonomy: SkillTaxonomy) -> float:
    max_length = get_scoring_int("recruiter_search.max_skill_length", 20)
    skills = [
        keyword
        for keyword in (*keywords.critical, *keywords.optional)
        if (len(keyword) <= max_length and " " not in keyword) or taxonomy.is_known_skill(keyword)
    ]
    if not skills:
        return get_scoring_float("recruiter_search.neutral_score", 50)
    found = sum(1 for skill in skills if keyword_in_text(resume, skill, RECRUITER_MATCH))
    return found / len(skills) * 100


def _industry_terms(resume: str, industry: str | None) -> float:
    terms = INDUSTRY_TERMS.get(industry or "", ())
    if not terms:
        return get_scoring_float("recruiter_search.neutral_score", 50)
    saturation = get_scoring_int("recruiter_search.industry_saturation", 3)
    found = sum(1 for term in terms if contains_term(resume, term))
    return min(100.0, found / min(saturation, len(terms)) * 100)


def _suggestions(breakdown: RecruiterSearchBreakdown, missing: list[str], industry: str | None) -> list[str]:
    candidates: list[tuple[float, str]] = []
    if breakdown.keyword_match < 60 and missing:
        candidates.append(
            (breakdown.keyword_match, f"Add these keywords if applicable: {', '.join(missing[:3])}")
        )
    if breakdown.title_alignment < 50:
        candidates.append(
            (
                breakdown.title_alignment,
                "Include the target job title or similar titles in your experience section",
            )
        )
    if breakdown.skills_coverage < 60:
        candidates.append(
            (
                breakdown.skills_coverage,
                "Ensure your skills section lists specific technologies mentioned in the job posting",
            )
        )
    if industry and breakdown.industry_terms < 50:
        candidates.append(
            (breakdown.industry_terms, f"Mention {industry} domain terms you have worked with")
        )
    if not candidates:
        return ["Your resume has good keyword coverage for recruiter searches"]
    candidates.sort(key=lambda item: item[0])
    return [text for _score, text in candidates]


def calculate_recruiter_search(
    resume_text: str,
    job_text: str,
    keywords: KeywordSet,
    *,
    taxonomy: SkillTaxonomy | None = None,
) -> RecruiterSearchResult:
    """Estimate how findable the resume is under a recruiter's manual keyword search."""
    taxonomy = taxonomy or get_default_taxonomy()
    resume = normalize_job_text(resume_text)
    target_title = extract_job_title(job_text)
    industry = detect_industry(job_text)

    title_score, matched_titles = _title_alignment(resume, job_text, target_title)
    breakdown = RecruiterSearchBreakdown(
        keyword_match=_keyword_match_score(resume, keywords),
        title_alignment=title_score,
        skills_coverage=_skills_coverage(resume, keywords, taxonomy),
        industry_terms=_industry_terms(resume, industry),
    )

    weights = _weights()
    weighted = (
        breakdown.keyword_match * weights["keyword_match"]
        + breakdown.title_alignment * weights["title_alignment"]
        + breakdown.skills_coverage * weights["skills_coverage"]
        + breakdown.industry_terms * weights["industry_terms"]
    )
    score = round_half_up(clamp(weighted))

    matched, _ = partition_keywords(resume, (*keywords.critical, *keywords.optional), RECRUITER_MATCH)
    _, missing = partition_keywords(resume, keywords.critical, RECRUITER_MATCH)

    findings: list[Finding] = []
    if target_title is None:
        findings.append(
            Finding(
                id="search-title-unknown",
                category="search",
                severity="info",
                title="Target Title Not Detected",
                description="No recognizable job title was found in the opening lines of the posting.",
                impact="Title alignment was scored as neutral.",
            )
        )
    if industry is None:
        findings.append(
            Finding(
                id="search-industry-unknown",
                category="search",
                severity="info",
                title="No Dominant Industry Detected",
                description="The posting does not use enough vocabulary from a single industry to identify one.",
                impact="Industry terms were scored as neutral.",
            )
        )
    if score < 50:
        findings.append(
            Finding(
                id="search-visibility-low",
                category="search",
                severity="high",
                title="Low Recruiter Search Visibility",
                description=f"Estimated recruiter search score is {score}%.",
                impact="Recruiters filtering by keywords and titles may not find your resume.",
                suggestion="Use the posting's exact job title and technology names where they apply to you.",
            )
        )

    return RecruiterSearchResult(
        score=score,
        breakdown=breakdown,
        suggestions=tuple(_suggestions(breakdown, missing, industry)),
        matched_keywords=tuple(matched),
        missing_keywords=tuple(missing),
        matched_titles=tuple(matched_titles),
        target_title=target_title,
        industry=industry,
        findings=tuple(findings),
    )
