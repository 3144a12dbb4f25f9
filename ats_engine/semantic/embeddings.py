from __future__ import annotations

import math
from collections.abc import Sequence


def cosine_similarity(left: Sequence[float], right: Sequence[float]) -> float:
    """Cosine of the angle between two vectors; 0.0 when undefined."""
    if not left or len(left) != len(right):
        return 0.0
    norms = math.hypot(*left) * math.hypot(*right)
    if norms == 0:
        return 0.0
    return math.fsum(a * b for a, b in zip(left, right)) / norms


def similarity_to_score(similarity: float) -> float:
    """Map a cosine value in [-1, 1] onto [0, 100]."""
    bounded = max(-1.0, min(1.0, similarity))
    return (bounded + 1.0) / 2.0 * 100.0
