from __future__ import annotations

import math
import re
from functools import lru_cache

_WHITESPACE = re.compile(r"\s+")
_MATCHING_NOISE = re.compile(r"[^a-z0-9\s\-/+#.]")


def normalize_job_text(text: str) -> str:
    """Lowercase and unify quotes, dashes and whitespace."""
    lowered = (text or "").lower()
    lowered = lowered.replace("‘", "'").replace("’", "'")
    lowered = lowered.replace("“", '"').replace("”", '"')
    lowered = lowered.replace("–", "-").replace("—", "-")
    return _WHITESPACE.sub(" ", lowered).strip()


def normalize_for_matching(text: str) -> str:
    lowered = _MATCHING_NOISE.sub(" ", (text or "").lower())
    return _WHITESPACE.sub(" ", lowered).strip()


@lru_cache(maxsize=4096)
def term_pattern(term: str) -> re.Pattern[str]:
    """Whole-term pattern; works for terms that start or end with symbols (c++, .net)."""
    return re.compile(rf"(?<![a-z0-9]){re.escape(term.lower())}(?![a-z0-9])", re.IGNORECASE)


def contains_term(text: str, term: str) -> bool:
    if not term:
        return False
    return term_pattern(term).search(text) is not None


def count_term(text: str, term: str) -> int:
    if not term:
        return 0
    return len(term_pattern(term).findall(text))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))
