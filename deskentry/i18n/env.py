"""Preferred locales read from the process environment."""
from __future__ import annotations

import os
from typing import List, Mapping, Optional

_LOCALE_VARS = ("LC_ALL", "LC_MESSAGES", "LANG")
_IGNORED = {"", "C", "POSIX"}


def get_languages_from_env(env: Optional[Mapping[str, str]] = None) -> List[str]:
    """
    Ordered, de-duplicated locale tags from LC_ALL, LC_MESSAGES, LANG and
    the colon-separated LANGUAGE list. ``C`` and ``POSIX`` are skipped.
    """
    env = os.environ if env is None else env
    found: List[str] = []

    for var in _LOCALE_VARS:
        value = env.get(var, "")
        if value not in _IGNORED and value not in found:
            found.append(value)

    for value in env.get("LANGUAGE", "").split(":"):
        if value not in _IGNORED and value not in found:
            found.append(value)

    return found
