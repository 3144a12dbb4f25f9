from __future__ import annotations

import logging
from collections.abc import Sequence

from ats_engine.ai.errors import LLMError
from ats_engine.ai.types import GenerationClient
from ats_engine.schemas.semantic import RewriteResult

from .analysis_parser import parse_rewrite_suggestions
from .prompts import build_rewrite_prompt

logger = logging.getLogger(__name__)


async def suggest_rewrites(
    bullet: str,
    *,
    resume_text: str,
    job_text: str,
    missing_keywords: Sequence[str],
    client: GenerationClient | None,
    has_consented: bool,
    section: str = "Experience",
) -> RewriteResult:
    """Ask the generation model for truthful rewrites of one bullet that work in missing keywords."""
    if not has_consented:
        return RewriteResult(success=False, error_code="consent_required", error="User consent required for AI features")
    if client is None:
        return RewriteResult(success=False, error_code="missing_api_key", error="API key not configured")
    if not bullet.strip():
        return RewriteResult(success=False, error_code="empty_input", error="No bullet text to rewrite")

    prompt = build_rewrite_prompt(
        bullet,
        resume_text=resume_text,
        job_text=job_text,
        missing_keywords=missing_keywords,
        section=section,
    )
    try:
        raw = await client.generate_json(prompt)
    except LLMError as exc:
        logger.warning("rewrite_generation_failed code=%s", exc.code)
        return RewriteResult(success=False, error_code=exc.code, error=str(exc))

    suggestions = parse_rewrite_suggestions(raw, bullet.strip())
    if not suggestions:
        logger.info("rewrite_suggestions_empty chars=%s", len(raw or ""))
    return RewriteResult(success=True, suggestions=tuple(suggestions))
