from __future__ import annotations

import asyncio
import logging
import re

from ats_engine.ai.errors import LLMError
from ats_engine.ai.types import AIClient, GenerationClient
from ats_engine.analysis.common import clamp, contains_term, normalize_for_matching, round_half_up
from ats_engine.analysis.matching import COVERAGE_MATCH, partition_keywords
from ats_engine.analysis.resume_profile import estimate_resume_years
from ats_engine.core.config.scoring import get_scoring_float, get_scoring_int
from ats_engine.schemas.findings import Finding
from ats_engine.schemas.keywords import KeywordSet
from ats_engine.schemas.semantic import (
    QualitativeAnalysis,
    SemanticKeywordMatch,
    SemanticMatchResult,
    SemanticSubScores,
    SubScore,
)
from ats_engine.taxonomy.tables import HIGHLIGHT_TECH_SKILLS, ROLE_TERMS, SECTOR_TERMS

from .analysis_parser import DEFAULT_ANALYSIS, overloaded_analysis, parse_qualitative_analysis
from .embeddings import cosine_similarity, similarity_to_score
from .keyword_matches import find_keyword_matches
from .prompts import build_analysis_prompt
from .sections import JobSections, ResumeSections, split_job_sections, split_resume_sections

logger = logging.getLogger(__name__)

_REQUIRED_YEARS = re.compile(r"(\d+)\+?\s*(?:years?|yrs?)\s*(?:of)?\s*(?:experience|exp)?", re.IGNORECASE)

_EXPLANATIONS: dict[str, tuple[str, str, str, str]] = {
    "skills": (
        "Strong skills alignment with job requirements",
        "Good skills match with some gaps",
        "Moderate skills overlap",
        "Limited skills alignment detected",
    ),
    "experience": (
        "Experience closely matches role requirements",
        "Relevant experience with some differences",
        "Some transferable experience",
        "Experience may require significant adaptation",
    ),
    "domain": (
        "Strong industry and domain alignment",
        "Good domain relevance",
        "Partial domain overlap",
        "Different industry background",
    ),
    "role": (
        "Role responsibilities align well",
        "Good fit for core responsibilities",
        "Some responsibilities match",
        "Role may be a significant transition",
    ),
}

_HIGHLIGHTS: dict[str, tuple[str, str]] = {
    "skills": ("Technical skills well-aligned with requirements", "Consider highlighting more relevant skills"),
    "experience": ("Experience level appears appropriate for role", "Experience may need emphasis on transferable skills"),
    "domain": ("Industry background aligns with role", "Consider emphasizing relevant domain experience"),
    "role": ("Previous roles similar to target position", "Highlight accomplishments relevant to this role type"),
}


def semantic_label(score: int) -> str:
    if score >= 80:
        return "Excellent Match"
    if score >= 65:
        return "Strong Match"
    if score >= 50:
        return "Good Match"
    if score >= 35:
        return "Moderate Match"
    return "Limited Match"


def _explanation(dimension: str, score: int) -> str:
    strong, good, partial, weak = _EXPLANATIONS[dimension]
    if score >= 80:
        return strong
    if score >= 60:
        return good
    if score >= 40:
        return partial
    return weak


def _highlights(dimension: str, score: int, resume: str, requirements: str) -> tuple[str, ...]:
    highlights: list[str] = []
    if dimension == "skills":
        shared = [skill for skill in HIGHLIGHT_TECH_SKILLS if contains_term(resume, skill) and contains_term(requirements, skill)]
        if shared:
            highlights.append(f"Matching skills: {', '.join(shared[:5])}")
    positive, negative = _HIGHLIGHTS[dimension]
    if score >= 70:
        highlights.append(positive)
    elif score < 50:
        highlights.append(negative)
    return tuple(highlights)


def years_signal(resume_text: str, job_text: str) -> int:
    required = max((int(match.group(1)) for match in _REQUIRED_YEARS.finditer(job_text)), default=0)
    if required == 0:
        return 80
    estimated = estimate_resume_years(resume_text)
    if estimated >= required:
        return 100
    if estimated >= required * 0.75:
        return 80
    if estimated >= required * 0.5:
        return 60
    return 40


def industry_signal(resume: str, job: str) -> int:
    """Shared sector vocabulary; 70 when the posting names no sector."""
    job_sectors = [term for term in SECTOR_TERMS if contains_term(job, term)]
    if not job_sectors:
        return 70
    shared = [term for term in job_sectors if contains_term(resume, term)]
    return round_half_up(50 + len(shared) / len(job_sectors) * 50)


def title_signal(resume: str, job: str) -> int:
    opening = job[:300]
    job_titles = [term for term in ROLE_TERMS if contains_term(opening, term)]
    if not job_titles:
        return 60
    shared = [term for term in job_titles if contains_term(resume, term)]
    return round_half_up(40 + len(shared) / len(job_titles) * 60)


def _error_result(message: str, code: str, *, finding: Finding | None = None) -> SemanticMatchResult:
    failed = SubScore(score=0, explanation="Analysis failed")
    if finding is None:
        finding = Finding(
            id="semantic-unavailable",
            category="semantic",
            severity="info",
            title="Semantic Match Unavailable",
            description=message,
            impact="Conceptual fit between your resume and the job could not be estimated.",
        )
    return SemanticMatchResult(
        score=0,
        success=False,
        label=semantic_label(0),
        sub_scores=SemanticSubScores(skills=failed, experience=failed, domain=failed, role=failed),
        analysis=QualitativeAnalysis(summary=message),
        error_code=code,
        error=message,
        findings=(finding,),
    )


def _empty_input_result(resume_text: str) -> SemanticMatchResult:
    missing = "resume" if not resume_text.strip() else "job description"
    message = f"The {missing} is empty"
    return _error_result(
        message,
        "empty_input",
        finding=Finding(
            id="semantic-empty-input",
            category="semantic",
            severity="info",
            title="Nothing To Compare",
            description=f"{message}, so no semantic comparison was made.",
            impact="Conceptual fit between your resume and the job could not be estimated.",
            suggestion=f"Provide the {missing} text to get a semantic match score.",
        ),
    )


async def _qualitative_analysis(client: GenerationClient, resume_text: str, job_text: str) -> QualitativeAnalysis:
    try:
        raw = await client.generate_json(build_analysis_prompt(resume_text, job_text))
    except LLMError as exc:
        logger.info("qualitative_analysis_failed code=%s", exc.code)
        if exc.code == "model_overloaded":
            return overloaded_analysis()
        return DEFAULT_ANALYSIS
    return parse_qualitative_analysis(raw)


def _section_pairs(resume_sections: ResumeSections, job_sections: JobSections) -> dict[str, tuple[str, str]]:
    domain_fallback = job_sections.full[: get_scoring_int("semantic.domain_fallback_chars", 1000)]
    return {
        "overall": (resume_sections.full, job_sections.full),
        "skills": (resume_sections.skills, job_sections.requirements),
        "experience": (resume_sections.experience, job_sections.responsibilities),
        "domain": (resume_sections.full, job_sections.about or domain_fallback),
        "role": (resume_sections.full, job_sections.responsibilities),
    }


async def _pair_scores(client: AIClient, pairs: dict[str, tuple[str, str]]) -> dict[str, float]:
    unique_texts = list(dict.fromkeys(text for pair in pairs.values() for text in pair))
    vectors = await asyncio.gather(*(client.embed(text) for text in unique_texts))
    by_text = dict(zip(unique_texts, vectors))
    return {
        name: similarity_to_score(cosine_similarity(by_text[left], by_text[right]))
        for name, (left, right) in pairs.items()
    }


def _missing_critical(resume_text: str, keywords: KeywordSet | None) -> list[str]:
    if keywords is None or not keywords.critical:
        return []
    _found, missing = partition_keywords(normalize_for_matching(resume_text), keywords.critical, COVERAGE_MATCH)
    return missing


def _summary_finding(score: int, label: str) -> Finding:
    if score >= 50:
        return Finding(
            id="semantic-match-summary",
            category="semantic",
            severity="info",
            title=label,
            description=f"Conceptual match score of {score}%.",
            impact="Your experience reads as relevant to this role beyond exact keyword matches.",
        )
    return Finding(
        id="semantic-match-summary",
        category="semantic",
        severity="medium",
        title=label,
        description=f"Conceptual match score of {score}%.",
        impact="Recruiters may not see how your background relates to this role.",
        suggestion="Rewrite experience bullets to mirror the responsibilities in the posting.",
    )


async def calculate_semantic_match(
    resume_text: str,
    job_text: str,
    *,
    client: AIClient | None,
    has_consented: bool,
    keywords: KeywordSet | None = None,
) -> SemanticMatchResult:
    """Embedding-blended fit score with a qualitative write-up.

    Missing consent or credential returns an error result before any call is
    made, and blank input returns an empty_input result without calling the
    provider. An embedding failure returns a zeroed error result; a failed
    qualitative call only degrades the write-up.
    """
    if not has_consented:
        return _error_result("User consent required for AI features", "consent_required")
    if client is None:
        return _error_result("API key not configured", "missing_api_key")
    if not resume_text.strip() or not job_text.strip():
        return _empty_input_result(resume_text)

    resume_sections = split_resume_sections(resume_text)
    job_sections = split_job_sections(job_text)
    pairs = _section_pairs(resume_sections, job_sections)
    missing = _missing_critical(resume_text, keywords)

    similarity, analysis, keyword_matches = await asyncio.gather(
        _pair_scores(client, pairs),
        _qualitative_analysis(client, resume_text, job_text),
        find_keyword_matches(resume_text, job_text, missing, client=client),
        return_exceptions=True,
    )
    if isinstance(similarity, LLMError):
        logger.warning("semantic_match_failed code=%s", similarity.code)
        return _error_result(str(similarity), similarity.code)
    for outcome in (similarity, analysis, keyword_matches):
        if isinstance(outcome, BaseException):
            raise outcome

    resume = normalize_for_matching(resume_text)
    job = normalize_for_matching(job_text)
    requirements = normalize_for_matching(job_sections.requirements)

    exp_weight = get_scoring_float("semantic.experience_embedding_weight", 0.7)
    domain_weight = get_scoring_float("semantic.domain_embedding_weight", 0.6)
    role_weight = get_scoring_float("semantic.role_embedding_weight", 0.6)
    raw_scores = {
        "skills": similarity["skills"],
        "experience": similarity["experience"] * exp_weight + years_signal(resume_text, job_text) * (1 - exp_weight),
        "domain": similarity["domain"] * domain_weight + industry_signal(resume, job) * (1 - domain_weight),
        "role": similarity["role"] * role_weight + title_signal(resume, job) * (1 - role_weight),
    }

    sub_scores: dict[str, SubScore] = {}
    for name, raw in raw_scores.items():
        score = round_half_up(clamp(raw))
        sub_scores[name] = SubScore(
            score=score,
            explanation=_explanation(name, score),
            highlights=_highlights(name, score, resume, requirements),
        )

    weighted = sum(
        sub_scores[name].score * get_scoring_float(f"semantic.weights.{name}", default)
        for name, default in (("skills", 0.35), ("experience", 0.25), ("domain", 0.25), ("role", 0.15))
    )
    section_weight = get_scoring_float("semantic.blend.section_weight", 0.7)
    overall_weight = get_scoring_float("semantic.blend.overall_weight", 0.3)
    score = round_half_up(clamp(weighted * section_weight + similarity["overall"] * overall_weight))
    label = semantic_label(score)

    matches: list[SemanticKeywordMatch] = keyword_matches
    logger.info("semantic_match_scored score=%s keyword_matches=%s", score, len(matches))
    return SemanticMatchResult(
        score=score,
        success=True,
        label=label,
        sub_scores=SemanticSubScores(**sub_scores),
        analysis=analysis,
        keyword_matches=tuple(matches),
        findings=(_summary_finding(score, label),),
    )
