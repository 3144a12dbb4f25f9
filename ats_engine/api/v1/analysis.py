from fastapi import APIRouter, Request

from ats_engine.core.rate_limit import rate_limit
from ats_engine.schemas.api import (
    AnalyzeRequest,
    AnalyzeResponse,
    CoverageRequest,
    KeywordsRequest,
    KnockoutRiskRequest,
    KnockoutsRequest,
    KnockoutsResponse,
    RecruiterSearchRequest,
    RewriteRequest,
    SemanticMatchRequest,
    VendorDetectionRequest,
)
from ats_engine.schemas.keywords import CoverageResult, KeywordSet
from ats_engine.schemas.knockouts import KnockoutRiskResult
from ats_engine.schemas.resume import ParseHealthResult, ResumeArtifact
from ats_engine.schemas.search import RecruiterSearchResult
from ats_engine.schemas.semantic import RewriteResult, SemanticMatchResult
from ats_engine.schemas.vendor import VendorDetectionResult
from ats_engine.services import analysis_service

router = APIRouter()


@router.post("/keywords", response_model=KeywordSet)
@rate_limit()
async def keywords(request: Request, payload: KeywordsRequest):
    return analysis_service.run_keywords(payload.job_description_text)


@router.post("/coverage", response_model=CoverageResult)
@rate_limit()
async def coverage(request: Request, payload: CoverageRequest):
    return analysis_service.run_coverage(
        payload.resume_text,
        job_text=payload.job_description_text,
        keywords=payload.keywords,
    )


@router.post("/knockouts", response_model=KnockoutsResponse)
@rate_limit()
async def knockouts(request: Request, payload: KnockoutsRequest):
    items = analysis_service.run_knockouts(payload.job_description_text, payload.resume_text)
    return KnockoutsResponse(items=items)


@router.post("/knockouts/risk", response_model=KnockoutRiskResult)
@rate_limit()
async def knockout_risk(request: Request, payload: KnockoutRiskRequest):
    return analysis_service.run_knockout_risk(payload.items)


@router.post("/recruiter-search", response_model=RecruiterSearchResult)
@rate_limit()
async def recruiter_search(request: Request, payload: RecruiterSearchRequest):
    return analysis_service.run_recruiter_search(payload.resume_text, payload.job_description_text)


@router.post("/parse-health", response_model=ParseHealthResult)
@rate_limit()
async def parse_health(request: Request, payload: ResumeArtifact):
    return analysis_service.run_parse_health(payload)


@router.post("/semantic-match", response_model=SemanticMatchResult)
@rate_limit()
async def semantic_match(request: Request, payload: SemanticMatchRequest):
    return await analysis_service.run_semantic_match(
        payload.resume_text,
        payload.job_description_text,
        has_consented=payload.has_consented,
    )


@router.post("/ats-vendor", response_model=VendorDetectionResult)
@rate_limit()
async def ats_vendor(request: Request, payload: VendorDetectionRequest):
    return analysis_service.run_vendor_detection(payload.url)


@router.post("/rewrite-suggestions", response_model=RewriteResult)
@rate_limit()
async def rewrite_suggestions(request: Request, payload: RewriteRequest):
    return await analysis_service.run_rewrite_suggestions(
        payload.bullet_text,
        resume_text=payload.resume_text,
        job_text=payload.job_description_text,
        has_consented=payload.has_consented,
        missing_keywords=payload.missing_keywords,
        section=payload.bullet_section,
    )


@router.post("/analyze", response_model=AnalyzeResponse)
@rate_limit()
async def analyze(request: Request, payload: AnalyzeRequest):
    return await analysis_service.run_full_analysis(payload)
