"""
Value escaping for the desktop entry format.

Only five escape sequences exist: \\s, \\n, \\t, \\r and \\\\.
"""
from __future__ import annotations

from typing import Dict

from .errors import InvalidValueError

_UNESCAPES: Dict[str, str] = {
    "s": " ",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
}

_ESCAPES: Dict[str, str] = {
    "\\": "\\\\",
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


def unescape(raw: str) -> str:
    """
    Decode the raw text found after ``=``.

    One leading space is dropped (``Key = Value``). Every backslash must be
    followed by one of ``s n t r \\``; anything else raises InvalidValueError.
    """
    if raw.startswith(" "):
        raw = raw[1:]

    if "\\" not in raw:
        return raw

    out = []
    last = 0
    i = raw.find("\\")
    while i != -1:
        if i + 1 >= len(raw):
            raise InvalidValueError(f"trailing backslash in {raw!r}")
        replacement = _UNESCAPES.get(raw[i + 1])
        if replacement is None:
            raise InvalidValueError(f"unknown escape \\{raw[i + 1]} in {raw!r}")
        out.append(raw[last:i])
        out.append(replacement)
        last = i + 2
        i = raw.find("\\", last)

    out.append(raw[last:])
    return "".join(out)


def escape(value: str) -> str:
    """Inverse of `unescape`, used when rendering an entry back to text."""
    escaped = "".join(_ESCAPES.get(ch, ch) for ch in value)
    # Lines are trimmed on decode, so edge spaces must survive as \s
    if escaped.startswith(" "):
        escaped = "\\s" + escaped[1:]
    if escaped.endswith(" "):
        escaped = escaped[:-1] + "\\s"
    return escaped
