from __future__ import annotations

from dataclasses import dataclass

from ats_engine.taxonomy import SkillTaxonomy, get_default_taxonomy

from .common import contains_term


@dataclass(frozen=True)
class MatchOptions:
    """Knobs that differ between the coverage and recruiter-search matchers."""

    use_synonyms: bool = True
    verb_forms: bool = True
    join_spaces: bool = True
    js_forms: bool = False
    short_term_max: int = 4


COVERAGE_MATCH = MatchOptions(use_synonyms=True, verb_forms=True, join_spaces=True, js_forms=False)
RECRUITER_MATCH = MatchOptions(use_synonyms=False, verb_forms=False, join_spaces=False, js_forms=True)


def keyword_variations(keyword: str, options: MatchOptions = COVERAGE_MATCH) -> list[str]:
    variations: list[str] = []

    if keyword.endswith("s"):
        variations.append(keyword[:-1])
    else:
        variations.append(keyword + "s")

    if options.verb_forms:
        if keyword.endswith("ing"):
            stem = keyword[:-3]
            variations.extend([stem, stem + "e", stem + "ed"])
        if keyword.endswith("ed"):
            variations.extend([keyword[:-2], keyword[:-1], keyword[:-2] + "ing"])

    if "-" in keyword:
        variations.append(keyword.replace("-", " "))
        variations.append(keyword.replace("-", ""))

    if " " in keyword:
        variations.append(keyword.replace(" ", "-"))
        if options.join_spaces:
            variations.append(keyword.replace(" ", ""))

    if options.js_forms and ".js" in keyword:
        variations.append(keyword.replace(".js", "js", 1))
        variations.append(keyword.replace(".js", "", 1))

    seen: set[str] = set()
    unique: list[str] = []
    for item in variations:
        item = item.strip()
        if item and item != keyword and item not in seen:
            seen.add(item)
            unique.append(item)
    return unique


def _occurs(text: str, term: str, options: MatchOptions) -> bool:
    if len(term) <= options.short_term_max:
        return contains_term(text, term)
    return term in text


def keyword_in_text(
    text: str,
    keyword: str,
    options: MatchOptions = COVERAGE_MATCH,
    *,
    taxonomy: SkillTaxonomy | None = None,
) -> bool:
    """Check a keyword against already-normalized text.

    Terms up to `short_term_max` characters only count as whole terms, so
    "go" never matches inside "google".
    """
    normalized = keyword.lower().strip()
    if not normalized:
        return False

    if _occurs(text, normalized, options):
        return True

    candidates: list[str] = []
    if options.use_synonyms:
        candidates.extend((taxonomy or get_default_taxonomy()).synonyms_for(normalized))
    candidates.extend(keyword_variations(normalized, options))

    for candidate in candidates:
        if candidate and candidate != normalized and _occurs(text, candidate, options):
            return True
    return False


def partition_keywords(
    text: str,
    keywords: tuple[str, ...] | list[str],
    options: MatchOptions = COVERAGE_MATCH,
    *,
    taxonomy: SkillTaxonomy | None = None,
) -> tuple[list[str], list[str]]:
    found: list[str] = []
    missing: list[str] = []
    for keyword in keywords:
        if keyword_in_text(text, keyword, options, taxonomy=taxonomy):
            found.append(keyword)
        else:
            missing.append(keyword)
    return found, missing
