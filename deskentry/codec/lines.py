"""Classification of a single desktop entry line."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .errors import InvalidKeyError


@dataclass(frozen=True)
class Blank:
    """Empty line, comment, or a line carrying no header and no '='."""


@dataclass(frozen=True)
class GroupHeader:
    name: str


@dataclass(frozen=True)
class KeyValue:
    key: str        # right-trimmed, may still carry a [locale] suffix
    raw_value: str  # still escaped


Line = Union[Blank, GroupHeader, KeyValue]

BLANK = Blank()


def classify_line(line: str) -> Line:
    """
    Classify one line that the caller already trimmed.

    The group name runs up to the *last* ']' so names such as
    ``[Desktop Action [beta]]`` survive. A header with no closing bracket
    is ignored.
    """
    if not line or line.startswith("#"):
        return BLANK

    if line.startswith("["):
        end = line.rfind("]")
        if end <= 0:
            return BLANK
        return GroupHeader(line[1:end])

    key, sep, raw_value = line.partition("=")
    if not sep:
        return BLANK

    key = key.rstrip()
    if not key:
        raise InvalidKeyError(f"empty key in line {line!r}")
    return KeyValue(key, raw_value)


def split_locale(key: str):
    """
    Split ``Name[fr_FR]`` into ``("Name", "fr_FR")``.

    Returns ``(key, None)`` for a plain key. A locale holding another
    bracket (``Name[fr]]``) raises InvalidKeyError.
    """
    if key.endswith("]"):
        start = key.find("[")
        if start != -1:
            locale = key[start + 1:-1]
            if "[" in locale or "]" in locale:
                raise InvalidKeyError(f"malformed locale in key {key!r}")
            return key[:start].rstrip(), locale
    return key, None
