from .match import calculate_semantic_match, semantic_label
from .rewrites import suggest_rewrites

__all__ = ["calculate_semantic_match", "semantic_label", "suggest_rewrites"]
