"""
Locale fallback for localized fields.

Search order for each preferred locale: exact tag, then the language
prefix before '_' (``fr_FR`` → ``fr``). When nothing matches, the default
value goes through the translation hook (if the entry has a domain), else
it is returned as is.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional

if TYPE_CHECKING:
    from ..models.entry import EntryField
    from .translator import Translator


def language_prefix(locale: str) -> Optional[str]:
    """``fr_FR.UTF-8`` → ``fr``; None when the tag has no '_'."""
    pos = locale.find("_")
    return locale[:pos] if pos != -1 else None


def match_locale(field: "EntryField", locale: str) -> Optional[str]:
    """Localized value for one locale tag, trying its language prefix second."""
    value = field.localized_values.get(locale)
    if value is not None:
        return value
    prefix = language_prefix(locale)
    if prefix is not None:
        return field.localized_values.get(prefix)
    return None


def resolve(
    translation_domain: Optional[str],
    field: Optional["EntryField"],
    locales: Iterable[str],
    translator: Optional["Translator"] = None,
) -> Optional[str]:
    if field is None:
        return None

    for locale in locales:
        value = match_locale(field, locale)
        if value is not None:
            return value

    if translation_domain and translator is not None:
        return translator.translate(translation_domain, field.default_value)
    return field.default_value


def resolve_list(
    translation_domain: Optional[str],
    field: Optional["EntryField"],
    locales: Iterable[str],
    translator: Optional["Translator"] = None,
    trim: bool = False,
) -> Optional[List[str]]:
    """
    Same search as `resolve`, split on ';'.

    ``"a;b;"`` gives ``["a", "b", ""]``; pass trim=True to drop trailing
    empty segments.
    """
    value = resolve(translation_domain, field, locales, translator)
    if value is None:
        return None
    parts = value.split(";")
    if trim:
        while parts and parts[-1] == "":
            parts.pop()
    return parts
