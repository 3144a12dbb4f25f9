from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable

from ats_engine.core.config.scoring import get_scoring_int
from ats_engine.core.ids import IdFactory, default_id_factory
from ats_engine.schemas.knockouts import KNOCKOUT_CATEGORY_ORDER, KnockoutCategory, KnockoutItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KnockoutPatternGroup:
    category: KnockoutCategory
    patterns: tuple[re.Pattern[str], ...]
    label: Callable[[str], str]


def _compile(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(pattern, re.IGNORECASE) for pattern in patterns)


def _has(pattern: str, text: str) -> bool:
    return re.search(pattern, text, re.IGNORECASE) is not None


def _authorization_label(match: str) -> str:
    if _has(r"clearance", match):
        return "Security clearance required"
    if _has(r"sponsor", match):
        return "No visa sponsorship available"
    return "US work authorization required"


def _location_label(match: str) -> str:
    if _has(r"relocation", match):
        return "Relocation not provided"
    if _has(r"hybrid", match) or _has(r"\d+ days?", match):
        return "Hybrid work - in-office days required"
    if _has(r"local|reside|live|located", match):
        return "Must be local to area"
    return "On-site work required"


def _schedule_label(match: str) -> str:
    if _has(r"travel", match):
        percent = re.search(r"(\d+)%", match)
        return f"Travel required ({percent.group(1)}%)" if percent else "Travel required"
    if _has(r"immediately|asap", match):
        return "Immediate start required"
    if _has(r"nights|weekends|evenings", match):
        return "Non-standard hours required"
    if _has(r"on[- ]?call", match):
        return "On-call availability required"
    return "Schedule flexibility required"


def _physical_label(match: str) -> str:
    if _has(r"driv", match):
        return "Valid driver's license required"
    if _has(r"lift", match):
        weight = re.search(r"(\d+)", match)
        return f"Physical requirement: lift {weight.group(1)} lbs" if weight else "Physical lifting required"
    if _has(r"stand", match):
        return "Extended standing required"
    return "Physical requirements apply"


def _license_label(match: str) -> str:
    if _has(r"\bcpa\b", match):
        return "CPA certification required"
    if _has(r"\brn\b|nursing|nurse", match):
        return "Nursing license required"
    if _has(r"\bbar\b|attorney|lawyer", match):
        return "Bar admission required"
    if _has(r"pmp|project management professional", match):
        return "PMP certification required"
    if _has(r"security\+", match):
        return "Security+ certification required"
    if _has(r"cissp", match):
        return "CISSP certification required"
    if _has(r"\baws\b", match):
        return "AWS certification required"
    return "Professional certification required"


def _degree_label(match: str) -> str:
    if _has(r"phd|doctorate", match):
        return "PhD/Doctorate required"
    if _has(r"mba", match):
        return "MBA required"
    if _has(r"master|ms/ma|graduate", match):
        return "Master's degree required"
    return "Bachelor's degree required"


KNOCKOUT_PATTERNS: tuple[KnockoutPatternGroup, ...] = (
    KnockoutPatternGroup(
        category="authorization",
        patterns=_compile(
            r"must be (legally )?authorized to work",
            r"authorized to work in the (u\.?s\.?|united states)",
            r"u\.?s\.? citizen(ship)? (required|only)",
            r"(citizen|green card|permanent resident) (required|only)",
            r"must be a (u\.?s\.? )?citizen",
            r"no (visa )?sponsorship",
            r"sponsorship (is )?not available",
            r"unable to (provide|offer) (visa )?sponsorship",
            r"cannot sponsor",
            r"security clearance required",
            r"active (security )?clearance required",
            r"must (have|hold|possess) (an? )?(active )?(security )?clearance",
            r"ts/sci (clearance )?(required|must have)",
            r"secret clearance (required|must have)",
        ),
        label=_authorization_label,
    ),
    KnockoutPatternGroup(
        category="location",
        patterns=_compile(
            r"must (be able to )?(work |come )?on[- ]?site",
            r"on[- ]?site (only|required|position)",
            r"100% on[- ]?site",
            r"in[- ]?office required",
            r"must be local to",
            r"must (reside|live|be located) in",
            r"local candidates (only|preferred)",
            r"relocation (is )?(not (provided|available|offered)|will not be)",
            r"no relocation (assistance|package)",
            r"hybrid.{1,20}days?.{1,10}(in[- ]?office|on[- ]?site)",
            r"\d+ days? (per week )?(in[- ]?office|on[- ]?site)",
        ),
        label=_location_label,
    ),
    KnockoutPatternGroup(
        category="schedule",
        patterns=_compile(
            r"available (to )?(start )?(immediately|within \d+ (days?|weeks?))",
            r"start (date|immediately|asap)",
            r"available (nights|weekends|evenings)",
            r"must (be )?available (for )?(nights|weekends|evenings)",
            r"willing to work (overtime|weekends|nights|evenings)",
            r"on[- ]?call (required|availability)",
            r"flexible (hours|schedule) required",
            r"travel.{1,20}(\d+%|percent)",
            r"up to \d+% travel",
            r"extensive travel",
            r"willing to travel",
        ),
        label=_schedule_label,
    ),
    KnockoutPatternGroup(
        category="physical",
        patterns=_compile(
            r"lift.{1,20}(\d+).{1,10}(lbs?|pounds?)",
            r"able to lift",
            r"stand for (extended|long) periods",
            r"standing (for )?\d+ hours",
            r"valid driver('s)? license required",
            r"must have (a )?valid driver('s)? license",
            r"clean driving record",
            r"physical demands",
        ),
        label=_physical_label,
    ),
    KnockoutPatternGroup(
        category="license",
        patterns=_compile(
            r"cpa (required|license|certification)",
            r"(\brn|registered nurse) license required",
            r"nursing license required",
            r"bar admission required",
            r"licensed (attorney|lawyer)",
            r"(pmp|project management professional) (certification )?(required|preferred)",
            r"security\+ (certification )?(required|preferred)",
            r"cissp (certification )?(required|preferred)",
            r"aws certified",
            r"(certification|certified) required",
            r"professional (license|certification) required",
            r"state license required",
        ),
        label=_license_label,
    ),
    KnockoutPatternGroup(
        category="degree",
        patterns=_compile(
            r"bachelor('s)? (degree )?(required|in)",
            r"bs/ba (required|minimum)",
            r"undergraduate degree required",
            r"master('s)? (degree )?(required|in)",
            r"ms/ma (required|minimum)",
            r"graduate degree required",
            r"mba required",
            r"phd (required|preferred)",
            r"doctorate (required|preferred)",
            r"minimum.{1,20}(bachelor|master|phd|doctorate)",
            r"\d+ years?.{1,20}degree",
        ),
        label=_degree_label,
    ),
)


def evidence_snippet(text: str, start: int, end: int, context: int | None = None) -> str:
    """Cut the matched span plus surrounding context, marking truncation with '...'."""
    if context is None:
        context = get_scoring_int("knockouts.evidence_context_chars", 30)
    left = max(0, start - context)
    right = min(len(text), end + context)
    snippet = text[left:right].strip()
    if left > 0:
        snippet = "..." + snippet
    if right < len(text):
        snippet = snippet + "..."
    return snippet


def _normalize_quotes(text: str) -> str:
    return text.replace("’", "'").replace("‘", "'")


def detect_knockouts(job_text: str, *, id_factory: IdFactory | None = None) -> list[KnockoutItem]:
    if not job_text or not job_text.strip():
        return []

    ids = id_factory or default_id_factory
    text = _normalize_quotes(job_text)
    items: list[KnockoutItem] = []
    seen_labels: set[str] = set()

    for group in KNOCKOUT_PATTERNS:
        for pattern in group.patterns:
            match = pattern.search(text)
            if match is None:
                continue
            label = group.label(match.group(0))
            if label in seen_labels:
                continue
            seen_labels.add(label)
            items.append(
                KnockoutItem(
                    id=ids.new_id(),
                    label=label,
                    category=group.category,
                    evidence=evidence_snippet(text, match.start(), match.end()),
                )
            )

    items.sort(key=lambda item: KNOCKOUT_CATEGORY_ORDER.index(item.category))
    logger.debug("knockouts_detected count=%s", len(items))
    return items
