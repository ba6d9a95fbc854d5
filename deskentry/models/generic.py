"""
Readers for files that share the desktop entry grammar but not its
conventions: thumbnailer definitions and mimeapps.list.

Duplicate keys keep the last value and a repeated group header replaces
the earlier group. Lines outside a group are ignored and localized keys
are stored verbatim (``Name[fr]``).
"""
from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import Field

from . import EntryModel
from ..codec.errors import EntryIOError
from ..codec.lines import GroupHeader, KeyValue, classify_line
from ..codec.values import unescape

THUMBNAILER_GROUP = "Thumbnailer Entry"

_MIME_RE = re.compile(r"^[A-Za-z0-9][\w.+-]*/[A-Za-z0-9][\w.+-]*$")


class GenericEntry(EntryModel):
    path: str = ""
    groups: Dict[str, Dict[str, str]] = Field(default_factory=dict)

    @classmethod
    def from_text(cls, path, text: str):
        groups: Dict[str, Dict[str, str]] = {}
        current: Optional[Dict[str, str]] = None

        for line in text.split("\n"):
            parsed = classify_line(line.strip())
            if isinstance(parsed, GroupHeader):
                current = groups[parsed.name] = {}
            elif isinstance(parsed, KeyValue) and current is not None:
                current[parsed.key] = unescape(parsed.raw_value)

        return cls(path=os.fsdecode(path), groups=groups)

    @classmethod
    def from_path(cls, path):
        try:
            text = Path(os.fsdecode(path)).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise EntryIOError(f"cannot read {os.fsdecode(path)}: {exc}") from exc
        return cls.from_text(path, text)

    def group(self, name: str) -> Optional[Dict[str, str]]:
        return self.groups.get(name)

    def entry(self, group: str, key: str) -> Optional[str]:
        values = self.groups.get(group)
        return values.get(key) if values is not None else None


def _split_terminated(value: str) -> List[str]:
    return [part for part in value.split(";") if part]


class Thumbnailer(GenericEntry):
    """A ``*.thumbnailer`` definition."""

    def thumbnailer_entry(self, key: str) -> Optional[str]:
        return self.entry(THUMBNAILER_GROUP, key)

    def exec(self) -> Optional[str]:
        return self.thumbnailer_entry("Exec")

    def try_exec(self) -> Optional[str]:
        return self.thumbnailer_entry("TryExec")

    def mime_types(self) -> Optional[List[str]]:
        value = self.thumbnailer_entry("MimeType")
        return _split_terminated(value) if value is not None else None


class MimeApps(GenericEntry):
    """A ``mimeapps.list`` file; keys are MIME types, values desktop file names."""

    def _associations(self, group: str) -> List[Tuple[str, List[str]]]:
        found = []
        for mime, value in (self.groups.get(group) or {}).items():
            if not _MIME_RE.match(mime):
                continue  # malformed MIME identifier
            found.append((mime, _split_terminated(value)))
        return found

    def default_applications(self) -> List[Tuple[str, List[str]]]:
        return self._associations("Default Applications")

    def added_associations(self) -> List[Tuple[str, List[str]]]:
        return self._associations("Added Associations")

    def removed_associations(self) -> List[Tuple[str, List[str]]]:
        return self._associations("Removed Associations")
