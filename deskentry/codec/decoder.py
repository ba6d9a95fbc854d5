"""
Entry Decoder — turns desktop entry text into a `DesktopEntry`.

Usage:
    entry = decode("/usr/share/applications/org.gnome.Nautilus.desktop", text,
                   locales_filter=["fr_FR"])
    entry = decode_from_path(path)

Localized keys (``Name[fr]=…``) attach to the pending key of the same name.
Files in the wild sometimes put the localized variant *before* its default;
those lines wait in an unknown-key queue that is drained when the group
closes.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, NamedTuple, Optional, Set, Union

from ..config import settings
from ..models.entry import DesktopEntry, EntryField, Group
from .errors import (
    AppIDError,
    DuplicateGroupError,
    EntryIOError,
    KeyDoesNotExistError,
    KeyValueWithoutAGroupError,
)
from .lines import GroupHeader, KeyValue, classify_line, split_locale
from .values import unescape

logger = logging.getLogger(__name__)

PathLike = Union[str, bytes, "os.PathLike[str]"]

DESKTOP_SUFFIX = ".desktop"
APPLICATIONS_SEGMENT = "/applications/"
GETTEXT_DOMAIN_KEY = "X-Ubuntu-Gettext-Domain"


# ─────────────────────────── Helpers ───────────────────────────

def get_app_id(path: PathLike) -> str:
    """
    Identifier of the entry stored at `path`.

    /usr/share/applications/kde4/kate.desktop → kde4-kate
    /tmp/org.gnome.Nautilus.desktop           → org.gnome.Nautilus
    """
    text = os.fsdecode(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise AppIDError(f"path is not valid UTF-8: {text!r}") from exc

    if not text.endswith(DESKTOP_SUFFIX):
        raise AppIDError(f"path does not end with {DESKTOP_SUFFIX}: {text!r}")
    stripped = text[: -len(DESKTOP_SUFFIX)]

    _, sep, below = stripped.rpartition(APPLICATIONS_SEGMENT)
    if sep:
        app_id = below.replace("/", "-")
    else:
        app_id = stripped.rsplit("/", 1)[-1]

    if not app_id:
        raise AppIDError(f"path does not contain a valid app ID: {text!r}")
    return app_id


def expand_locales(locales: Iterable[str]) -> Set[str]:
    """Add the language prefix of every tag: ['fr_FR'] → {'fr_FR', 'fr'}."""
    expanded: Set[str] = set()
    for locale in locales:
        expanded.add(locale)
        pos = locale.find("_")
        if pos != -1:
            expanded.add(locale[:pos])
    return expanded


class _PendingKey:
    __slots__ = ("name", "default_value", "locales")

    def __init__(self, name: str, default_value: str):
        self.name = name
        self.default_value = default_value
        self.locales: Dict[str, str] = {}


class _UnknownKey(NamedTuple):
    key: str
    locale: str
    value: str


# ─────────────────────────── Decoder ───────────────────────────

class _Decoder:
    """Line-by-line state machine; one instance per document."""

    def __init__(self, locales_filter: Optional[Set[str]], strict: bool):
        self.locales_filter = locales_filter
        self.strict = strict
        self.groups: Dict[str, Dict[str, EntryField]] = {}
        self.group_name: Optional[str] = None
        self.group_fields: Dict[str, EntryField] = {}
        self.pending: Optional[_PendingKey] = None
        self.unknown_keys: List[_UnknownKey] = []
        self.translation_domain: Optional[str] = None

    def feed(self, line: str) -> None:
        parsed = classify_line(line.strip())

        if isinstance(parsed, GroupHeader):
            self._close_group()
            self.group_name = parsed.name
            self.group_fields = {}
        elif isinstance(parsed, KeyValue):
            self._key_value(parsed.key, unescape(parsed.raw_value))

    def finish(self) -> Dict[str, Group]:
        self._close_group()
        return {
            name: Group(name=name, fields=dict(sorted(fields.items())))
            for name, fields in sorted(self.groups.items())
        }

    def _key_value(self, key: str, value: str) -> None:
        key_name, locale = split_locale(key)

        if locale is not None:
            if self.locales_filter is not None and not self._accepts(locale):
                return
            if self.pending is not None and self.pending.name == key_name:
                self.pending.locales[locale] = value
            else:
                self.unknown_keys.append(_UnknownKey(key_name, locale, value))
            return

        if key == GETTEXT_DOMAIN_KEY:
            self.translation_domain = value
            return

        self._flush_key()
        self.pending = _PendingKey(key, value)

    def _accepts(self, locale: str) -> bool:
        if locale in self.locales_filter:
            return True
        pos = locale.find("_")
        return pos != -1 and locale[:pos] in self.locales_filter

    def _flush_key(self) -> None:
        if self.pending is None:
            return
        if self.group_name is None:
            raise KeyValueWithoutAGroupError(f"key '{self.pending.name}' appears before any group")
        self.group_fields[self.pending.name] = EntryField(
            default_value=self.pending.default_value,
            localized_values=dict(sorted(self.pending.locales.items())),
        )
        self.pending = None

    def _drain_unknown_keys(self) -> None:
        for unknown in self.unknown_keys:
            field = self.group_fields.get(unknown.key)
            if field is None and self.group_name is not None:
                field = self.groups.get(self.group_name, {}).get(unknown.key)
            if field is None:
                raise KeyDoesNotExistError(
                    f"localized key '{unknown.key}[{unknown.locale}]' has no default value"
                )
            field.localized_values[unknown.locale] = unknown.value
            field.localized_values = dict(sorted(field.localized_values.items()))
        self.unknown_keys.clear()

    def _close_group(self) -> None:
        self._flush_key()
        self._drain_unknown_keys()
        if self.group_name is None:
            return

        existing = self.groups.get(self.group_name)
        if existing is None:
            self.groups[self.group_name] = self.group_fields
        elif self.strict:
            raise DuplicateGroupError(f"group '{self.group_name}' appears more than once")
        else:
            logger.debug("[Decoder] merging repeated group '%s'", self.group_name)
            existing.update(self.group_fields)

        self.group_name = None
        self.group_fields = {}


# ─────────────────────────── Public API ───────────────────────────

def decode(
    path: PathLike,
    text: str,
    locales_filter: Optional[Iterable[str]] = None,
    strict: Optional[bool] = None,
) -> DesktopEntry:
    """
    Decode `text` read from `path`.

    Args:
        path: Source path; the identifier is derived from it.
        text: Document contents.
        locales_filter: Keep only localized values for these locales (and
            their language prefixes). None keeps every locale.
        strict: Reject repeated group headers instead of merging them.
            Defaults to settings.strict_groups.

    Raises:
        DecodeError subclasses for malformed documents.
    """
    app_id = get_app_id(path)
    decoder = _Decoder(
        expand_locales(locales_filter) if locales_filter is not None else None,
        settings.strict_groups if strict is None else strict,
    )

    for line in text.split("\n"):
        decoder.feed(line)
    groups = decoder.finish()

    return DesktopEntry(
        identifier=app_id,
        groups=groups,
        path=os.fsdecode(path),
        translation_domain=decoder.translation_domain,
    )


def decode_from_path(
    path: PathLike,
    locales_filter: Optional[Iterable[str]] = None,
    strict: Optional[bool] = None,
) -> DesktopEntry:
    """Read a UTF-8 file and `decode` it."""
    try:
        text = Path(os.fsdecode(path)).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise EntryIOError(f"cannot read {os.fsdecode(path)}: {exc}") from exc
    return decode(path, text, locales_filter, strict)
