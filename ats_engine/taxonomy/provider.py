from __future__ import annotations

from typing import Protocol


class SkillTaxonomy(Protocol):
    def synonyms_for(self, term: str) -> list[str]:
        """Return the canonical term followed by its synonyms, or just the lowered term."""

    def display_name(self, term: str) -> str:
        """Return the display capitalization for a keyword."""

    def is_known_skill(self, term: str) -> bool:
        """Return True when the term is a recognised multi-word or core skill."""
