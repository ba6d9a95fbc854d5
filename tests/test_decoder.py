import unittest
from pathlib import Path

from deskentry.codec.decoder import decode, decode_from_path, expand_locales, get_app_id
from deskentry.codec.errors import (
    AppIDError,
    DuplicateGroupError,
    EntryIOError,
    InvalidKeyError,
    InvalidValueError,
    KeyDoesNotExistError,
    KeyValueWithoutAGroupError,
)

ENTRIES = Path(__file__).parent / "entries"
FIREFOX = ENTRIES / "org.mozilla.firefox.desktop"
NAUTILUS = ENTRIES / "org.gnome.Nautilus.desktop"


class TestAppId(unittest.TestCase):
    def test_file_stem(self):
        self.assertEqual(get_app_id("/tmp/org.gnome.Nautilus.desktop"), "org.gnome.Nautilus")

    def test_applications_subdirectory(self):
        self.assertEqual(get_app_id("/usr/share/applications/kde4/kate.desktop"), "kde4-kate")

    def test_last_applications_segment_wins(self):
        self.assertEqual(
            get_app_id("/home/u/applications/x/.local/share/applications/a/b.desktop"),
            "a-b",
        )

    def test_missing_suffix(self):
        with self.assertRaises(AppIDError):
            get_app_id("/tmp/readme.txt")

    def test_empty_identifier(self):
        with self.assertRaises(AppIDError):
            get_app_id("/usr/share/applications/.desktop")

    def test_path_object(self):
        self.assertEqual(get_app_id(Path("/tmp/foo.desktop")), "foo")


class TestDecode(unittest.TestCase):
    def test_decode_firefox(self):
        entry = decode_from_path(FIREFOX)

        self.assertEqual(entry.identifier, "org.mozilla.firefox")
        self.assertEqual(entry.path, str(FIREFOX))
        self.assertIsNone(entry.translation_domain)
        self.assertEqual(
            list(entry.groups),
            ["Desktop Action new-private-window", "Desktop Action new-window", "Desktop Entry"],
        )

        name = entry.groups["Desktop Entry"].fields["Name"]
        self.assertEqual(name.default_value, "Firefox Web Browser")
        self.assertEqual(name.localized_values, {"de": "Firefox-Webbrowser", "fr": "Navigateur Web Firefox"})

    def test_localized_key_before_its_default(self):
        entry = decode_from_path(NAUTILUS)

        name = entry.groups["Desktop Entry"].fields["Name"]
        self.assertEqual(name.default_value, "Files")
        self.assertEqual(name.localized_values, {"de": "Dateien", "fr": "Fichiers"})

    def test_forward_reference_at_end_of_document(self):
        entry = decode("a.desktop", "[Desktop Entry]\nName[fr]=Bonjour\nName=Hello\n")
        field = entry.groups["Desktop Entry"].fields["Name"]
        self.assertEqual(field.localized_values, {"fr": "Bonjour"})

    def test_locale_filter_keeps_language_prefix(self):
        entry = decode_from_path(FIREFOX, ["fr_FR.UTF-8"])
        name = entry.groups["Desktop Entry"].fields["Name"]
        self.assertEqual(name.localized_values, {"fr": "Navigateur Web Firefox"})

    def test_locale_filter_accepts_region_of_requested_language(self):
        text = "[Desktop Entry]\nName=Color\nName[en_GB]=Colour\nName[de_DE]=Farbe\n"
        entry = decode("a.desktop", text, ["en"])
        self.assertEqual(entry.groups["Desktop Entry"].fields["Name"].localized_values, {"en_GB": "Colour"})

    def test_expand_locales(self):
        self.assertEqual(expand_locales(["fr_FR", "de"]), {"fr_FR", "fr", "de"})

    def test_translation_domain_directive(self):
        text = "[Desktop Entry]\nName=Files\nX-Ubuntu-Gettext-Domain=nautilus\nComment=Browse\n"
        entry = decode("a.desktop", text)
        self.assertEqual(entry.translation_domain, "nautilus")
        self.assertNotIn("X-Ubuntu-Gettext-Domain", entry.groups["Desktop Entry"].fields)
        self.assertEqual(set(entry.groups["Desktop Entry"].fields), {"Name", "Comment"})

    def test_spaces_around_equals(self):
        entry = decode("a.desktop", "[Desktop Entry]\nName = Files\n")
        self.assertEqual(entry.groups["Desktop Entry"].fields["Name"].default_value, "Files")

    def test_crlf_line_endings(self):
        entry = decode("a.desktop", "[Desktop Entry]\r\nName=Files\r\nName[fr]=Fichiers\r\n")
        field = entry.groups["Desktop Entry"].fields["Name"]
        self.assertEqual(field.default_value, "Files")
        self.assertEqual(field.localized_values, {"fr": "Fichiers"})

    def test_escapes_in_values(self):
        entry = decode("a.desktop", "[Desktop Entry]\nComment=line\\none\\stwo\n")
        self.assertEqual(entry.groups["Desktop Entry"].fields["Comment"].default_value, "line\none two")

    def test_repeated_group_merges(self):
        text = "[Desktop Entry]\nName=A\nIcon=a\n[Other]\nX=1\n[Desktop Entry]\nName=B\n"
        entry = decode("a.desktop", text)
        fields = entry.groups["Desktop Entry"].fields
        self.assertEqual(fields["Name"].default_value, "B")
        self.assertEqual(fields["Icon"].default_value, "a")

    def test_repeated_group_in_strict_mode(self):
        text = "[Desktop Entry]\nName=A\n[Desktop Entry]\nName=B\n"
        with self.assertRaises(DuplicateGroupError):
            decode("a.desktop", text, strict=True)

    def test_repeated_key_last_writer_wins(self):
        entry = decode("a.desktop", "[Desktop Entry]\nName=A\nName=B\n")
        self.assertEqual(entry.groups["Desktop Entry"].fields["Name"].default_value, "B")

    def test_decoding_is_deterministic(self):
        text = FIREFOX.read_text(encoding="utf-8")
        first = decode(FIREFOX, text)
        second = decode(FIREFOX, text)
        self.assertEqual(first, second)
        self.assertEqual(first.render(), second.render())


class TestDecodeErrors(unittest.TestCase):
    def test_invalid_value(self):
        with self.assertRaises(InvalidValueError):
            decode("a.desktop", "[Desktop Entry]\nName=a\\\n")

    def test_invalid_key(self):
        with self.assertRaises(InvalidKeyError):
            decode("a.desktop", "[Desktop Entry]\n=value\n")

    def test_key_value_without_a_group(self):
        with self.assertRaises(KeyValueWithoutAGroupError):
            decode("a.desktop", "Name=Files\n[Desktop Entry]\nIcon=x\n")

    def test_localized_key_without_default(self):
        with self.assertRaises(KeyDoesNotExistError):
            decode("a.desktop", "[Desktop Entry]\nName[fr]=Fichiers\n")

    def test_bracket_inside_locale(self):
        with self.assertRaises(InvalidKeyError):
            decode("a.desktop", "[Desktop Entry]\nName=a\nName[fr]]=b\n")

    def test_localized_key_does_not_leak_into_next_group(self):
        with self.assertRaises(KeyDoesNotExistError):
            decode("a.desktop", "[A]\nName[fr]=x\n[B]\nName=y\n")

    def test_bad_path(self):
        with self.assertRaises(AppIDError):
            decode("notes.txt", "[Desktop Entry]\nName=x\n")

    def test_missing_file(self):
        with self.assertRaises(EntryIOError) as ctx:
            decode_from_path(ENTRIES / "does-not-exist.desktop")
        self.assertIsInstance(ctx.exception.__cause__, OSError)


if __name__ == "__main__":
    unittest.main()
