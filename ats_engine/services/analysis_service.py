from __future__ import annotations

import logging
from collections.abc import Sequence

from ats_engine.ai.config import has_credential, load_ai_config
from ats_engine.ai.errors import LLMError
from ats_engine.ai.factory import get_ai_client
from ats_engine.ai.types import AIClient
from ats_engine.analysis.coverage import calculate_coverage
from ats_engine.analysis.guidance import GuidanceInput, generate_guidance
from ats_engine.analysis.keywords import extract_keywords
from ats_engine.analysis.knockout_enhancer import detect_experience_knockout, enhance_knockouts
from ats_engine.analysis.knockout_risk import calculate_knockout_risk
from ats_engine.analysis.knockouts import detect_knockouts
from ats_engine.analysis.parse_health import calculate_parse_health
from ats_engine.analysis.recruiter_search import calculate_recruiter_search
from ats_engine.analysis.vendor_detection import detect_ats_vendor
from ats_engine.core.ids import IdFactory
from ats_engine.schemas.api import AnalyzeRequest, AnalyzeResponse
from ats_engine.schemas.keywords import CoverageResult, KeywordSet
from ats_engine.schemas.knockouts import AnyKnockoutItem, KnockoutRiskResult
from ats_engine.schemas.resume import ParseHealthResult, ResumeArtifact
from ats_engine.schemas.search import RecruiterSearchResult
from ats_engine.schemas.semantic import RewriteResult, SemanticMatchResult
from ats_engine.schemas.vendor import VendorDetectionResult
from ats_engine.semantic.match import calculate_semantic_match
from ats_engine.semantic.rewrites import suggest_rewrites

logger = logging.getLogger(__name__)


def run_keywords(job_text: str) -> KeywordSet:
    return extract_keywords(job_text)


def run_coverage(resume_text: str, *, job_text: str | None = None, keywords: KeywordSet | None = None) -> CoverageResult:
    if keywords is None:
        keywords = extract_keywords(job_text or "")
    return calculate_coverage(resume_text, keywords)


def run_knockouts(
    job_text: str,
    resume_text: str | None = None,
    *,
    id_factory: IdFactory | None = None,
) -> list[AnyKnockoutItem]:
    """Detected knockouts; enhanced against the resume when one is supplied."""
    detected = detect_knockouts(job_text, id_factory=id_factory)
    if not resume_text:
        return list(detected)

    items: list[AnyKnockoutItem] = list(enhance_knockouts(detected, resume_text, job_text))
    experience = detect_experience_knockout(resume_text, job_text, id_factory=id_factory)
    if experience is not None:
        items.append(experience)
    return items


def run_knockout_risk(items: Sequence[AnyKnockoutItem]) -> KnockoutRiskResult:
    return calculate_knockout_risk(items)


def run_recruiter_search(resume_text: str, job_text: str, *, keywords: KeywordSet | None = None) -> RecruiterSearchResult:
    return calculate_recruiter_search(resume_text, job_text, keywords or extract_keywords(job_text))


def run_parse_health(artifact: ResumeArtifact) -> ParseHealthResult:
    return calculate_parse_health(artifact)


def run_vendor_detection(url: str | None) -> VendorDetectionResult:
    return detect_ats_vendor(url)


def configured_ai_client() -> AIClient | None:
    cfg = load_ai_config()
    if not has_credential(cfg):
        return None
    try:
        return get_ai_client(cfg)
    except LLMError as exc:
        logger.warning("ai_client_unavailable code=%s", exc.code)
        return None


async def run_semantic_match(
    resume_text: str,
    job_text: str,
    *,
    has_consented: bool,
    keywords: KeywordSet | None = None,
    client: AIClient | None = None,
) -> SemanticMatchResult:
    if client is None and has_consented:
        client = configured_ai_client()
    return await calculate_semantic_match(
        resume_text,
        job_text,
        client=client,
        has_consented=has_consented,
        keywords=keywords,
    )


async def run_rewrite_suggestions(
    bullet: str,
    *,
    resume_text: str,
    job_text: str,
    has_consented: bool,
    missing_keywords: Sequence[str] | None = None,
    section: str = "Experience",
    client: AIClient | None = None,
) -> RewriteResult:
    """Rewrites for one bullet; missing keywords default to the uncovered critical keywords."""
    if missing_keywords is None:
        missing_keywords = calculate_coverage(resume_text, extract_keywords(job_text)).missing_keywords
    if client is None and has_consented:
        client = configured_ai_client()
    return await suggest_rewrites(
        bullet,
        resume_text=resume_text,
        job_text=job_text,
        missing_keywords=missing_keywords,
        client=client,
        has_consented=has_consented,
        section=section,
    )


async def run_full_analysis(payload: AnalyzeRequest, *, client: AIClient | None = None) -> AnalyzeResponse:
    parse_health = run_parse_health(payload.to_artifact())
    ats_vendor = detect_ats_vendor(payload.job_url) if payload.job_url else None
    job_text = (payload.job_description_text or "").strip()
    has_api_key = client is not None or has_credential(load_ai_config())

    if not job_text:
        guidance = generate_guidance(
            GuidanceInput(
                parse_health=parse_health.scores.parse_health,
                has_job_description=False,
                has_api_key=has_api_key,
            )
        )
        return AnalyzeResponse(parse_health=parse_health, ats_vendor=ats_vendor, guidance=guidance)

    keywords = extract_keywords(job_text)
    coverage = calculate_coverage(payload.resume_text, keywords)
    knockouts = run_knockouts(job_text, payload.resume_text)
    knockout_risk = calculate_knockout_risk(knockouts)
    recruiter = calculate_recruiter_search(payload.resume_text, job_text, keywords)

    semantic: SemanticMatchResult | None = None
    if payload.has_consented and payload.resume_text.strip():
        semantic = await run_semantic_match(
            payload.resume_text,
            job_text,
            has_consented=True,
            keywords=keywords,
            client=client,
        )

    guidance = generate_guidance(
        GuidanceInput(
            parse_health=parse_health.scores.parse_health,
            has_job_description=True,
            has_api_key=has_api_key,
            knockout_risk=knockout_risk.risk,
            knockout_count=len(knockouts),
            keyword_coverage=coverage.score,
            semantic_match=semantic.score if semantic is not None and semantic.success else None,
            recruiter_search=recruiter.score,
        )
    )
    logger.info(
        "analysis_completed parse_health=%s coverage=%s knockouts=%s risk=%s",
        parse_health.scores.parse_health,
        coverage.score,
        len(knockouts),
        knockout_risk.risk,
    )
    return AnalyzeResponse(
        parse_health=parse_health,
        keywords=keywords,
        coverage=coverage,
        knockouts=knockouts,
        knockout_risk=knockout_risk,
        recruiter_search=recruiter,
        semantic_match=semantic,
        ats_vendor=ats_vendor,
        guidance=guidance,
    )
