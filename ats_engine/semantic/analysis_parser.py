"""Tolerant parsing of JSON produced by a text-generation model.

Model output is expected, not guaranteed, to be valid JSON. Parsing tries a
direct load, then the outermost object or array span, then a repair of truncated
output that closes any open string, array or object.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from ats_engine.core.config.scoring import get_scoring_float, get_scoring_int
from ats_engine.schemas.semantic import QualitativeAnalysis, RewriteSuggestion, SemanticKeywordMatch

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
_OPENERS = {"{": "}", "[": "]"}

DEFAULT_ANALYSIS = QualitativeAnalysis(
    strengths=("Resume submitted for analysis",),
    gaps=("AI analysis requires a working provider connection",),
    recommendations=("Check that the AI provider is configured correctly",),
    summary="Unable to generate a detailed analysis. Check the AI provider configuration.",
)
OVERLOADED_SUMMARY = "The AI model is currently overloaded. Please try again in a few moments."

ANALYSIS_LIMITS: dict[str, int] = {"strengths": 5, "gaps": 4, "recommendations": 3}


def _loads_object(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, ValueError):
        return None


def _opener_positions(text: str) -> list[int]:
    """Positions of the first `{` and first `[`, earliest first."""
    return sorted(position for position in (text.find(opener) for opener in _OPENERS) if position >= 0)


def repair_truncated_json(text: str, start: int | None = None) -> Any:
    if start is None:
        positions = _opener_positions(text)
        if not positions:
            return None
        start = positions[0]
    body = text[start:]

    closers: list[str] = []
    in_string = False
    escaped = False
    last_comma: tuple[int, tuple[str, ...]] | None = None
    for index, char in enumerate(body):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in "{[":
            closers.append("}" if char == "{" else "]")
        elif char in "}]":
            if not closers:
                return None
            closers.pop()
            if not closers:
                return _loads_object(body[: index + 1])
        elif char == ",":
            last_comma = (index, tuple(closers))

    candidates = []
    tail = body.rstrip()
    if escaped:
        tail = tail[:-1]
    if in_string:
        tail += '"'
    candidates.append(tail + "".join(reversed(closers)))
    if last_comma is not None:
        cut, open_at_cut = last_comma
        candidates.append(body[:cut] + "".join(reversed(open_at_cut)))

    for candidate in candidates:
        parsed = _loads_object(candidate)
        if parsed is not None:
            return parsed
    return None


def parse_json_payload(text: str | None) -> Any:
    if not text or not text.strip():
        return None
    cleaned = _FENCE.sub("", text.strip())

    parsed = _loads_object(cleaned)
    if parsed is not None:
        return parsed

    for start in _opener_positions(cleaned):
        end = cleaned.rfind(_OPENERS[cleaned[start]])
        if end > start:
            parsed = _loads_object(cleaned[start : end + 1])
            if parsed is not None:
                return parsed
        parsed = repair_truncated_json(cleaned, start)
        if parsed is not None:
            logger.info("json_payload_repaired chars=%s", len(cleaned))
            return parsed
    return None


def _string_items(value: Any, limit: int) -> tuple[str, ...] | None:
    if not isinstance(value, list):
        return None
    items = [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return tuple(items[:limit])


def parse_qualitative_analysis(text: str | None) -> QualitativeAnalysis:
    payload = parse_json_payload(text)
    if not isinstance(payload, dict):
        logger.info("qualitative_analysis_unparseable chars=%s", len(text or ""))
        return DEFAULT_ANALYSIS

    fields: dict[str, Any] = {}
    for name, limit in ANALYSIS_LIMITS.items():
        items = _string_items(payload.get(name), limit)
        fields[name] = items if items is not None else getattr(DEFAULT_ANALYSIS, name)
    summary = payload.get("summary")
    fields["summary"] = summary.strip() if isinstance(summary, str) and summary.strip() else DEFAULT_ANALYSIS.summary
    return QualitativeAnalysis(**fields)


def overloaded_analysis() -> QualitativeAnalysis:
    return DEFAULT_ANALYSIS.model_copy(update={"summary": OVERLOADED_SUMMARY})


def parse_keyword_matches(text: str | None) -> list[SemanticKeywordMatch]:
    payload = parse_json_payload(text)
    if isinstance(payload, dict):
        raw = payload.get("semanticMatches")
    else:
        raw = payload
    if not isinstance(raw, list):
        return []

    min_confidence = get_scoring_float("semantic.keyword_match_min_confidence", 0.7)
    max_results = get_scoring_int("semantic.keyword_match_max_results", 10)

    matches: list[SemanticKeywordMatch] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        keyword = entry.get("jdKeyword")
        resume_match = entry.get("resumeMatch")
        confidence = entry.get("confidence")
        if not isinstance(keyword, str) or not isinstance(resume_match, str):
            continue
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            continue
        if not min_confidence <= confidence <= 1.0:
            continue
        explanation = entry.get("explanation")
        matches.append(
            SemanticKeywordMatch(
                jd_keyword=keyword,
                resume_match=resume_match,
                confidence=float(confidence),
                explanation=explanation if isinstance(explanation, str) else "",
                source="model",
            )
        )
        if len(matches) >= max_results:
            break
    return matches


def parse_rewrite_suggestions(text: str | None, original: str) -> list[RewriteSuggestion]:
    """Well-formed rewrites only; a missing `original` falls back to the bullet that was sent."""
    payload = parse_json_payload(text)
    raw = payload.get("rewriteSuggestions") if isinstance(payload, dict) else payload
    if not isinstance(raw, list):
        return []

    max_suggestions = get_scoring_int("semantic.rewrite_max_suggestions", 3)
    suggestions: list[RewriteSuggestion] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        rewritten = entry.get("rewritten")
        incorporated = entry.get("keywordsIncorporated")
        if not isinstance(rewritten, str) or not rewritten.strip() or not isinstance(incorporated, list):
            continue
        source = entry.get("original")
        rationale = entry.get("rationale")
        suggestions.append(
            RewriteSuggestion(
                original=source.strip() if isinstance(source, str) and source.strip() else original,
                rewritten=rewritten.strip(),
                keywords_incorporated=tuple(item for item in incorporated if isinstance(item, str)),
                rationale=rationale if isinstance(rationale, str) else "",
            )
        )
        if len(suggestions) >= max_suggestions:
            break
    return suggestions
