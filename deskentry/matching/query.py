"""
Free-text query scoring for launcher-style search.

The returned value is between 0.0 and 1.0 (higher means more similar).
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from rapidfuzz.distance import JaroWinkler

from ..i18n.resolver import match_locale
from ..i18n.translator import default_translator
from ..models.entry import DESKTOP_ENTRY_GROUP, DesktopEntry

# (field name, is separated by ";")
SEARCH_FIELDS: Tuple[Tuple[str, bool], ...] = (
    ("Name", False),
    ("GenericName", False),
    ("Comment", False),
    ("Categories", True),
    ("Keywords", True),
)

SUBSTRING_BONUS = 0.1
SUBSTRING_FLOOR = 0.61
SUBSTRING_CEILING = 0.99


def _add_value(haystack: List[str], value: str, is_multiple: bool) -> None:
    if is_multiple:
        haystack.extend(part.lower() for part in value.split(";") if part)
    elif value:
        haystack.append(value.lower())


def build_haystack(
    entry: DesktopEntry,
    locales: Sequence[str],
    extra_haystack: Iterable[str] = (),
    translator=None,
) -> List[str]:
    """Lower-cased strings a query is compared against."""
    haystack = [value.lower() for value in extra_haystack]
    group = entry.group(DESKTOP_ENTRY_GROUP)
    if group is None:
        return haystack

    if translator is None:
        translator = default_translator()

    for key, is_multiple in SEARCH_FIELDS:
        field = group.field(key)
        if field is None:
            continue

        _add_value(haystack, field.default_value, is_multiple)

        at_least_one_locale = False
        for locale in locales:
            value = match_locale(field, locale)
            if value is not None:
                _add_value(haystack, value, is_multiple)
                at_least_one_locale = True

        if not at_least_one_locale and entry.translation_domain and translator is not None:
            translated = translator.translate(entry.translation_domain, field.default_value)
            _add_value(haystack, translated, False)

    return haystack


def _score_value(query: str, tokens: List[str], value: str) -> float:
    score = JaroWinkler.similarity(query, value)
    if any(token in value for token in tokens):
        # containment always lands in the reserved upper band
        bonus = min(max(score + SUBSTRING_BONUS, SUBSTRING_FLOOR), SUBSTRING_CEILING)
        score = max(score, bonus)
    return score


def query_score(
    query: str,
    entry: DesktopEntry,
    locales: Sequence[str] = (),
    extra_haystack: Iterable[str] = (),
    translator=None,
) -> float:
    """
    Similarity of `query` to `entry` over Name, GenericName, Comment,
    Categories and Keywords in every preferred locale, plus `extra_haystack`.
    """
    normalized = query.lower().strip()
    if not normalized:
        return 0.0
    tokens = normalized.split()

    haystack = build_haystack(entry, locales, extra_haystack, translator)
    return max((_score_value(normalized, tokens, value) for value in haystack), default=0.0)


def rank_entries(
    query: str,
    entries: Iterable[DesktopEntry],
    locales: Sequence[str] = (),
    min_score: float = 0.0,
    limit: Optional[int] = None,
) -> List[Tuple[float, DesktopEntry]]:
    """(score, entry) pairs above `min_score`, best first; stable for ties."""
    scored = [(query_score(query, entry, locales), entry) for entry in entries]
    ranked = sorted((pair for pair in scored if pair[0] > min_score), key=lambda pair: pair[0], reverse=True)
    return ranked[:limit] if limit is not None else ranked
