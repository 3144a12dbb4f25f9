from __future__ import annotations

import logging
from collections.abc import Sequence

from ats_engine.ai.errors import LLMError
from ats_engine.ai.types import GenerationClient
from ats_engine.analysis.common import contains_term, normalize_for_matching
from ats_engine.core.config.scoring import get_scoring_float, get_scoring_int
from ats_engine.schemas.semantic import SemanticKeywordMatch
from ats_engine.taxonomy.tables import CONCEPT_SYNONYMS

from .analysis_parser import parse_keyword_matches
from .prompts import build_keyword_match_prompt

logger = logging.getLogger(__name__)


def _local_match(resume: str, keyword: str, confidence: float) -> SemanticKeywordMatch | None:
    lowered = keyword.strip().lower()

    for related in CONCEPT_SYNONYMS.get(lowered, ()):
        if contains_term(resume, related):
            return SemanticKeywordMatch(
                jd_keyword=keyword,
                resume_match=related,
                confidence=confidence,
                explanation=f'"{related}" is commonly used interchangeably with "{keyword}"',
                source="synonym",
            )

    for base, related_terms in CONCEPT_SYNONYMS.items():
        if lowered in related_terms and contains_term(resume, base):
            return SemanticKeywordMatch(
                jd_keyword=keyword,
                resume_match=base,
                confidence=confidence,
                explanation=f'"{base}" is commonly used interchangeably with "{keyword}"',
                source="synonym",
            )
    return None


def find_local_keyword_matches(resume_text: str, missing_keywords: Sequence[str]) -> list[SemanticKeywordMatch]:
    resume = normalize_for_matching(resume_text)
    confidence = get_scoring_float("semantic.local_synonym_confidence", 0.75)
    matches = []
    for keyword in missing_keywords:
        match = _local_match(resume, keyword, confidence)
        if match is not None:
            matches.append(match)
    return matches


async def find_keyword_matches(
    resume_text: str,
    job_text: str,
    missing_keywords: Sequence[str],
    *,
    client: GenerationClient | None = None,
) -> list[SemanticKeywordMatch]:
    """Local synonym matches, extended with model suggestions when a client is available."""
    local = find_local_keyword_matches(resume_text, missing_keywords)
    if client is None or not missing_keywords:
        return local

    try:
        raw = await client.generate_json(build_keyword_match_prompt(resume_text, job_text, missing_keywords))
    except LLMError as exc:
        logger.info("keyword_match_generation_failed code=%s", exc.code)
        return local

    matched = {match.jd_keyword.lower() for match in local}
    merged = list(local)
    model_kept = 0
    max_results = get_scoring_int("semantic.keyword_match_max_results", 10)
    for match in parse_keyword_matches(raw):
        if match.jd_keyword.lower() in matched or model_kept >= max_results:
            continue
        matched.add(match.jd_keyword.lower())
        merged.append(match)
        model_kept += 1
    return merged
