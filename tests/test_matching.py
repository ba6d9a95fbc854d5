import unittest
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError

from deskentry.codec.decoder import decode, decode_from_path
from deskentry.matching.identifier import (
    LAST_SEGMENT_PENALTY,
    MatchOptions,
    best_identifier_match,
    find_app_by_id,
    find_entry_from_appid,
    identifier_score,
    lcs_ratio,
    select_best,
)
from deskentry.models.entry import DesktopEntry

ENTRIES = Path(__file__).parent / "entries"


def entry_with(identifier, **fields):
    entry = DesktopEntry.from_identifier(identifier)
    for key, value in fields.items():
        entry.set_desktop_entry(key, value)
    return entry


class TestLcsRatio(unittest.TestCase):
    def test_identical(self):
        self.assertEqual(lcs_ratio("firefox", "firefox"), 1.0)

    def test_substring(self):
        self.assertAlmostEqual(lcs_ratio("firefox", "org.mozilla.firefox"), 7 / 19)

    def test_no_overlap(self):
        self.assertEqual(lcs_ratio("abc", "xyz"), 0.0)

    def test_empty(self):
        self.assertEqual(lcs_ratio("", ""), 0.0)
        self.assertEqual(lcs_ratio("abc", ""), 0.0)


class TestIdentifierScore(unittest.TestCase):
    def test_last_segment_with_penalty(self):
        entry = entry_with("org.mozilla.firefox")
        self.assertAlmostEqual(identifier_score("firefox", entry), 1.0 - LAST_SEGMENT_PENALTY)

    def test_startup_wm_class(self):
        entry = entry_with("com.example.App", StartupWMClass="Special-Window")
        self.assertEqual(identifier_score("special-window", entry), 1.0)

    def test_exec_is_penalized(self):
        entry = entry_with("a.b", Exec="gimp")
        self.assertAlmostEqual(identifier_score("gimp", entry), 0.95)

    def test_never_negative(self):
        entry = entry_with("a.b", Exec="zzz")
        self.assertGreaterEqual(identifier_score("q", entry), 0.0)


class TestBestIdentifierMatch(unittest.TestCase):
    def setUp(self):
        self.firefox = entry_with("org.mozilla.firefox")
        self.nautilus = entry_with("org.gnome.Nautilus")

    def test_last_segment_match(self):
        found = best_identifier_match(["firefox"], [self.nautilus, self.firefox], MatchOptions())
        self.assertIs(found, self.firefox)

    def test_default_options_come_from_settings(self):
        found = best_identifier_match(["firefox"], [self.nautilus, self.firefox])
        self.assertIs(found, self.firefox)

    def test_case_insensitive(self):
        found = best_identifier_match(["Nautilus"], [self.firefox, self.nautilus], MatchOptions())
        self.assertIs(found, self.nautilus)

    def test_best_pattern_wins(self):
        found = best_identifier_match(["xyz", "nautilus"], [self.firefox, self.nautilus], MatchOptions())
        self.assertIs(found, self.nautilus)

    def test_no_match(self):
        options = MatchOptions(min_score=0.7, entropy=None)
        self.assertIsNone(best_identifier_match(["qqqq"], [self.firefox, self.nautilus], options))

    def test_no_patterns_or_entries(self):
        self.assertIsNone(best_identifier_match([], [self.firefox], MatchOptions()))
        self.assertIsNone(best_identifier_match(["firefox"], [], MatchOptions()))

    def test_first_entry_wins_ties(self):
        twin = entry_with("org.mozilla.firefox")
        found = best_identifier_match(["org.mozilla.firefox"], [self.firefox, twin], MatchOptions())
        self.assertIs(found, self.firefox)

    def test_stops_after_perfect_score(self):
        with patch("deskentry.matching.identifier.identifier_score", side_effect=[1.0, 0.1]) as score:
            found = best_identifier_match(["x"], [self.firefox, self.nautilus], MatchOptions())
        self.assertIs(found, self.firefox)
        self.assertEqual(score.call_count, 1)


class TestSelectBest(unittest.TestCase):
    def setUp(self):
        self.a = entry_with("a")
        self.b = entry_with("b")
        self.options = MatchOptions(min_score=0.7, entropy=(0.15, 0.1))

    def test_small_gap_is_rejected(self):
        self.assertIsNone(select_best([(0.5, self.a), (0.48, self.b)], self.options))

    def test_large_gap_is_accepted(self):
        self.assertIs(select_best([(0.5, self.a), (0.2, self.b)], self.options), self.a)

    def test_runner_up_after_winner_counts(self):
        self.assertIsNone(select_best([(0.2, self.a), (0.5, self.b), (0.45, entry_with("c"))], self.options))

    def test_above_min_score(self):
        self.assertIs(select_best([(0.1, self.a), (0.8, self.b)], self.options), self.b)

    def test_entropy_disabled(self):
        options = MatchOptions(min_score=0.7, entropy=None)
        self.assertIsNone(select_best([(0.5, self.a), (0.0, self.b)], options))

    def test_entropy_needs_minimum_score(self):
        options = MatchOptions(min_score=0.7, entropy=(0.01, 0.3))
        self.assertIsNone(select_best([(0.25, self.a), (0.0, self.b)], options))

    def test_empty(self):
        self.assertIsNone(select_best([], self.options))


class TestMatchOptions(unittest.TestCase):
    def test_defaults(self):
        options = MatchOptions()
        self.assertEqual(options.min_score, 0.7)
        self.assertEqual(options.entropy, (0.15, 0.2))

    def test_scores_must_be_within_unit_range(self):
        for kwargs in ({"min_score": 1.5}, {"min_score": -0.1}, {"entropy": (0.15, 2.0)}, {"entropy": (-1.0, 0.2)}):
            with self.subTest(**kwargs):
                with self.assertRaises(ValidationError):
                    MatchOptions(**kwargs)

    def test_bounds_are_inclusive(self):
        self.assertEqual(MatchOptions(min_score=1.0, entropy=(0.0, 1.0)).min_score, 1.0)


class TestExactLookups(unittest.TestCase):
    def setUp(self):
        self.firefox = decode_from_path(ENTRIES / "org.mozilla.firefox.desktop")
        self.nautilus = decode_from_path(ENTRIES / "org.gnome.Nautilus.desktop")

    def test_find_entry_from_appid(self):
        entries = [self.nautilus, self.firefox]
        self.assertIs(find_entry_from_appid(entries, "ORG.GNOME.NAUTILUS"), self.nautilus)
        self.assertIs(find_entry_from_appid(entries, "Firefox"), self.firefox)
        self.assertIsNone(find_entry_from_appid(entries, "gimp"))

    def test_find_app_by_id_prefers_wm_class(self):
        by_stem = decode("/usr/share/applications/firefox.desktop", "[Desktop Entry]\nName=Old\n")
        found = find_app_by_id([by_stem, self.firefox], "firefox")
        self.assertIs(found, self.firefox)

    def test_find_app_by_id_falls_back_to_name(self):
        found = find_app_by_id([self.firefox, self.nautilus], "files")
        self.assertIs(found, self.nautilus)


if __name__ == "__main__":
    unittest.main()
