from functools import lru_cache

from .local_taxonomy import LocalTaxonomy
from .provider import SkillTaxonomy


@lru_cache(maxsize=1)
def get_default_taxonomy() -> LocalTaxonomy:
    return LocalTaxonomy()


def get_synonyms(term: str) -> list[str]:
    return get_default_taxonomy().synonyms_for(term)


__all__ = ["LocalTaxonomy", "SkillTaxonomy", "get_default_taxonomy", "get_synonyms"]
