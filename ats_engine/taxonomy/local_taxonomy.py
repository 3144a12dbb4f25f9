from __future__ import annotations

import json
from pathlib import Path

from .provider import SkillTaxonomy
from .tables import DISPLAY_NAMES, KNOWN_SKILLS


class LocalTaxonomy(SkillTaxonomy):
    def __init__(self, synonyms_path: str | Path | None = None) -> None:
        path = Path(synonyms_path) if synonyms_path else Path(__file__).with_name("synonyms.json")
        self._synonyms = self._load_synonyms(path)
        self._known_skills = frozenset(KNOWN_SKILLS)

    @staticmethod
    def _load_synonyms(path: Path) -> dict[str, tuple[str, ...]]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        return {
            str(key).strip().lower(): tuple(str(item).strip().lower() for item in values)
            for key, values in raw.items()
        }

    @property
    def synonym_table(self) -> dict[str, tuple[str, ...]]:
        return dict(self._synonyms)

    def synonyms_for(self, term: str) -> list[str]:
        lowered = term.strip().lower()
        if lowered in self._synonyms:
            return [lowered, *self._synonyms[lowered]]
        for canonical, synonyms in self._synonyms.items():
            if lowered in synonyms:
                return [canonical, *synonyms]
        return [lowered]

    def display_name(self, term: str) -> str:
        lowered = term.lower()
        if lowered in DISPLAY_NAMES:
            return DISPLAY_NAMES[lowered]
        words = []
        for word in term.split(" "):
            special = DISPLAY_NAMES.get(word.lower())
            words.append(special if special else word[:1].upper() + word[1:].lower())
        return " ".join(words)

    def is_known_skill(self, term: str) -> bool:
        return term.strip().lower() in self._known_skills
