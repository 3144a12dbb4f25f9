from __future__ import annotations

import logging
import math

from ats_engine.core.config.scoring import get_scoring_float, get_scoring_int
from ats_engine.schemas.keywords import KeywordSet
from ats_engine.taxonomy import SkillTaxonomy, get_default_taxonomy
from ats_engine.taxonomy.tables import (
    CERTIFICATIONS,
    COMPOUND_SKILLS,
    REQUIREMENT_INDICATORS,
    SOFT_SKILLS,
    TECH_SKILLS,
    TOOLS,
)

from .common import count_term, normalize_job_text, term_pattern

logger = logging.getLogger(__name__)

# Scan order matters: a term first seen in an earlier dictionary keeps its
# position when scores tie.
_DICTIONARIES: tuple[tuple[str, tuple[str, ...], float], ...] = (
    ("tools", TOOLS, 10.0),
    ("compound", COMPOUND_SKILLS, 8.0),
    ("tech", TECH_SKILLS, 7.0),
    ("soft", SOFT_SKILLS, 5.0),
    ("certifications", CERTIFICATIONS, 9.0),
)


def _scan_dictionary(text: str, terms: tuple[str, ...], base_score: float, scores: dict[str, float]) -> None:
    for term in terms:
        frequency = count_term(text, term)
        if frequency <= 0:
            continue
        score = base_score * (1 + math.log(frequency))
        scores[term] = max(scores.get(term, 0.0), score)


def _requirement_zones(lowered: str, window: int) -> list[tuple[int, int]]:
    zones: list[tuple[int, int]] = []
    for indicator in REQUIREMENT_INDICATORS:
        position = lowered.find(indicator)
        while position != -1:
            zones.append((position, position + window))
            position = lowered.find(indicator, position + 1)
    return zones


def _boost_requirement_keywords(normalized: str, scores: dict[str, float]) -> None:
    """Boost keywords whose first whole-term occurrence sits inside a requirement zone."""
    window = get_scoring_int("keywords.requirement_zone_chars", 200)
    boost = get_scoring_float("keywords.requirement_boost", 1.5)
    zones = _requirement_zones(normalized, window)
    if not zones:
        return
    for keyword, score in scores.items():
        first = term_pattern(keyword).search(normalized)
        if first is None:
            continue
        position = first.start()
        if any(start <= position <= end for start, end in zones):
            scores[keyword] = score * boost


def _rank_and_deduplicate(scores: dict[str, float]) -> list[str]:
    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    kept: list[str] = []
    for keyword, _score in ranked:
        if any(keyword in existing and keyword != existing for existing in kept):
            continue
        kept = [existing for existing in kept if not (existing in keyword and existing != keyword)]
        kept.append(keyword)
    return kept


def extract_keywords(job_text: str, *, taxonomy: SkillTaxonomy | None = None) -> KeywordSet:
    """Mine a job posting into ranked, canonically capitalized keywords."""
    if not job_text or not job_text.strip():
        return KeywordSet()

    taxonomy = taxonomy or get_default_taxonomy()
    normalized = normalize_job_text(job_text)
    scores: dict[str, float] = {}
    for name, terms, default_base in _DICTIONARIES:
        base = get_scoring_float(f"keywords.base_scores.{name}", default_base)
        _scan_dictionary(normalized, terms, base, scores)

    _boost_requirement_keywords(normalized, scores)

    ranked: list[str] = []
    seen_display: set[str] = set()
    for keyword in _rank_and_deduplicate(scores):
        display = taxonomy.display_name(keyword)
        if display.lower() in seen_display:
            continue
        seen_display.add(display.lower())
        ranked.append(display)

    critical_count = get_scoring_int("keywords.critical_count", 15)
    optional_count = get_scoring_int("keywords.optional_count", 15)
    critical = tuple(ranked[:critical_count])
    optional = tuple(ranked[critical_count : critical_count + optional_count])

    logger.debug(
        "keywords_extracted total=%s critical=%s optional=%s",
        len(ranked),
        len(critical),
        len(optional),
    )
    return KeywordSet(critical=critical, optional=optional, all=tuple(ranked))
