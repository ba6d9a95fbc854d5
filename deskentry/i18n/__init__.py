"""
i18n — locale fallback and translation hooks.

    from deskentry.i18n import resolve, get_languages_from_env

    resolve(entry.translation_domain, field, get_languages_from_env())
"""

from .env import get_languages_from_env
from .resolver import language_prefix, match_locale, resolve, resolve_list
from .translator import GettextTranslator, NullTranslator, Translator, default_translator

__all__ = [
    "get_languages_from_env",
    "language_prefix",
    "match_locale",
    "resolve",
    "resolve_list",
    "GettextTranslator",
    "NullTranslator",
    "Translator",
    "default_translator",
]
