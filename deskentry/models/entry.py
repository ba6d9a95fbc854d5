"""
Desktop entry data model.

    entry = decode("/usr/share/applications/org.gnome.Nautilus.desktop", text)
    entry.get("name", ["fr_FR"])           # → "Fichiers"
    entry.get("terminal")                  # → False
    entry.action_entry("new-window", "Exec")

Every accessor goes through `DesktopEntry.get`, driven by `ENTRY_FIELDS`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, NamedTuple, Optional, Sequence, Union

from pydantic import Field

from . import EntryModel
from ..codec.values import escape
from ..i18n.resolver import resolve, resolve_list
from ..i18n.translator import default_translator

if TYPE_CHECKING:
    from ..i18n.translator import Translator

DESKTOP_ENTRY_GROUP = "Desktop Entry"
ACTION_GROUP_PREFIX = "Desktop Action "


class EntryField(EntryModel):
    """One key: its default value plus per-locale overrides."""
    default_value: str = ""
    localized_values: Dict[str, str] = Field(default_factory=dict)


class Group(EntryModel):
    name: str
    fields: Dict[str, EntryField] = Field(default_factory=dict)

    def field(self, key: str) -> Optional[EntryField]:
        return self.fields.get(key)

    def entry(self, key: str) -> Optional[str]:
        """Default (unlocalized) value of `key`, if present."""
        found = self.fields.get(key)
        return found.default_value if found is not None else None


class FieldSpec(NamedTuple):
    key: str
    kind: str  # "text" | "localized" | "bool" | "list" | "terminated_list" | "localized_list"


# accessor name -> (key in [Desktop Entry], how the value is read)
ENTRY_FIELDS: Dict[str, FieldSpec] = {
    "type": FieldSpec("Type", "text"),
    "version": FieldSpec("Version", "text"),
    "name": FieldSpec("Name", "localized"),
    "generic_name": FieldSpec("GenericName", "localized"),
    "full_name": FieldSpec("X-GNOME-FullName", "localized"),
    "comment": FieldSpec("Comment", "localized"),
    "icon": FieldSpec("Icon", "text"),
    "exec": FieldSpec("Exec", "text"),
    "try_exec": FieldSpec("TryExec", "text"),
    "working_directory": FieldSpec("Path", "text"),
    "url": FieldSpec("URL", "text"),
    "startup_wm_class": FieldSpec("StartupWMClass", "text"),
    "flatpak": FieldSpec("X-Flatpak", "text"),
    "no_display": FieldSpec("NoDisplay", "bool"),
    "hidden": FieldSpec("Hidden", "bool"),
    "terminal": FieldSpec("Terminal", "bool"),
    "startup_notify": FieldSpec("StartupNotify", "bool"),
    "dbus_activatable": FieldSpec("DBusActivatable", "bool"),
    "prefers_non_default_gpu": FieldSpec("PrefersNonDefaultGPU", "bool"),
    "single_main_window": FieldSpec("SingleMainWindow", "bool"),
    "categories": FieldSpec("Categories", "list"),
    "implements": FieldSpec("Implements", "list"),
    "only_show_in": FieldSpec("OnlyShowIn", "list"),
    "not_show_in": FieldSpec("NotShowIn", "list"),
    "actions": FieldSpec("Actions", "list"),
    "mime_type": FieldSpec("MimeType", "terminated_list"),
    "keywords": FieldSpec("Keywords", "localized_list"),
}

EntryValue = Union[None, bool, str, List[str]]


def _split_terminated(value: str) -> List[str]:
    """Split on ';' dropping the empty segment after a final ';'."""
    parts = value.split(";")
    if parts and parts[-1] == "":
        parts.pop()
    return parts


class DesktopEntry(EntryModel):
    identifier: str = Field(min_length=1)
    groups: Dict[str, Group] = Field(default_factory=dict)
    path: str = ""
    translation_domain: Optional[str] = None

    # ─────────────────────────────────────────────────────────────────────────
    #  Builders
    # ─────────────────────────────────────────────────────────────────────────
    @classmethod
    def from_identifier(cls, identifier: str) -> "DesktopEntry":
        """New entry whose Name is the last dot-separated part of `identifier`."""
        entry = cls(identifier=identifier)
        entry.set_desktop_entry("Name", identifier.rsplit(".", 1)[-1])
        return entry

    def set_desktop_entry(self, key: str, value: str, locale: Optional[str] = None) -> None:
        """
        Write a field in [Desktop Entry], creating the group if needed.

        Without a locale the previous value and all its locales are replaced.
        """
        group = self.groups.get(DESKTOP_ENTRY_GROUP)
        if group is None:
            group = Group(name=DESKTOP_ENTRY_GROUP)
            self.groups[DESKTOP_ENTRY_GROUP] = group
            self.groups = dict(sorted(self.groups.items()))

        if locale is None:
            group.fields[key] = EntryField(default_value=value)
        else:
            group.fields.setdefault(key, EntryField()).localized_values[locale] = value

    # ─────────────────────────────────────────────────────────────────────────
    #  Raw access
    # ─────────────────────────────────────────────────────────────────────────
    def group(self, name: str) -> Optional[Group]:
        return self.groups.get(name)

    def desktop_entry(self, key: str) -> Optional[str]:
        group = self.groups.get(DESKTOP_ENTRY_GROUP)
        return group.entry(key) if group is not None else None

    def desktop_entry_localized(
        self,
        key: str,
        locales: Sequence[str] = (),
        translator: Optional["Translator"] = None,
    ) -> Optional[str]:
        return self._localized(self.groups.get(DESKTOP_ENTRY_GROUP), key, locales, translator)

    def action_entry(self, action: str, key: str) -> Optional[str]:
        """
        Field of a ``[Desktop Action <action>]`` group.

        entry.action_entry("new-window", "Name") reads
            [Desktop Action new-window]
            Name=Open a New Window
        """
        group = self.groups.get(ACTION_GROUP_PREFIX + action)
        return group.entry(key) if group is not None else None

    def action_entry_localized(
        self,
        action: str,
        key: str,
        locales: Sequence[str] = (),
        translator: Optional["Translator"] = None,
    ) -> Optional[str]:
        return self._localized(self.groups.get(ACTION_GROUP_PREFIX + action), key, locales, translator)

    def _localized(self, group, key, locales, translator) -> Optional[str]:
        field = group.field(key) if group is not None else None
        return resolve(self.translation_domain, field, locales, translator or default_translator())

    # ─────────────────────────────────────────────────────────────────────────
    #  Generic accessor
    # ─────────────────────────────────────────────────────────────────────────
    def get(
        self,
        accessor: str,
        locales: Sequence[str] = (),
        translator: Optional["Translator"] = None,
    ) -> EntryValue:
        """
        Read a well-known [Desktop Entry] field by accessor name.

        Booleans are False when absent; other kinds return None when absent.
        Raises KeyError for an accessor not listed in ENTRY_FIELDS.
        """
        spec = ENTRY_FIELDS[accessor]

        if spec.kind == "localized":
            return self.desktop_entry_localized(spec.key, locales, translator)

        if spec.kind == "localized_list":
            group = self.groups.get(DESKTOP_ENTRY_GROUP)
            field = group.field(spec.key) if group is not None else None
            return resolve_list(
                self.translation_domain, field, locales, translator or default_translator()
            )

        value = self.desktop_entry(spec.key)
        if spec.kind == "bool":
            return value == "true"
        if value is None:
            return None
        if spec.kind == "list":
            return value.split(";")
        if spec.kind == "terminated_list":
            return _split_terminated(value)
        return value

    def full_name(self, locales: Sequence[str] = (), translator: Optional["Translator"] = None) -> Optional[str]:
        """X-GNOME-FullName when set and non-empty, else Name."""
        full = self.get("full_name", locales, translator)
        if full:
            return full
        return self.get("name", locales, translator)

    def action_ids(self) -> List[str]:
        """Action ids declared in Actions=, without empty segments."""
        return [a for a in (self.get("actions") or []) if a]

    # ─────────────────────────────────────────────────────────────────────────
    #  Identity checks (ASCII case-insensitive)
    # ─────────────────────────────────────────────────────────────────────────
    def matches_wm_class(self, wm_class: str) -> bool:
        """Entries with a matching StartupWMClass should be preferred."""
        value = self.desktop_entry("StartupWMClass")
        return value is not None and value.lower() == wm_class.lower()

    def matches_id(self, app_id: str) -> bool:
        """Match by identifier, by file stem, or by the last part of `app_id`."""
        wanted = app_id.lower()
        if wanted == self.identifier.lower():
            return True
        if not self.path:
            return False
        stem = self.path.rsplit("/", 1)[-1]
        if stem.endswith(".desktop"):
            stem = stem[: -len(".desktop")]
        stem = stem.lower()
        return stem == wanted or stem == wanted.rsplit(".", 1)[-1]

    def matches_name(self, name: str) -> bool:
        """Match by untranslated Name; only meaningful after id matching failed."""
        value = self.desktop_entry("Name")
        return value is not None and value.lower() == name.lower()

    # ─────────────────────────────────────────────────────────────────────────
    #  Rendering
    # ─────────────────────────────────────────────────────────────────────────
    def render(self) -> str:
        """Serialize back to the line format, groups/keys/locales sorted."""
        lines: List[str] = []
        names = sorted(self.groups)
        domain_group = DESKTOP_ENTRY_GROUP if DESKTOP_ENTRY_GROUP in self.groups else next(iter(names), None)
        for group_name in names:
            group = self.groups[group_name]
            lines.append(f"[{group_name}]")
            if group_name == domain_group and self.translation_domain is not None:
                lines.append(f"X-Ubuntu-Gettext-Domain={escape(self.translation_domain)}")
            for key in sorted(group.fields):
                field = group.fields[key]
                lines.append(f"{key}={escape(field.default_value)}")
                for locale in sorted(field.localized_values):
                    lines.append(f"{key}[{locale}]={escape(field.localized_values[locale])}")
            lines.append("")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()
