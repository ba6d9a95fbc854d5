"""
Application search over installed desktop entries.

Usage:
    searcher = AppSearcher()
    entry    = searcher.find_app("files")          # free-text query
    entry    = searcher.find_by_id("nautilus")     # window app id / WM class

Entries are discovered and decoded once, then cached for `cache_ttl` seconds.
When two files share an identifier, the first one found wins (user
directories come before system ones in `default_paths`).
"""
from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..config import settings
from ..i18n.env import get_languages_from_env
from ..matching.identifier import MatchOptions, best_identifier_match, find_app_by_id
from ..matching.query import rank_entries
from ..models.entry import DesktopEntry
from .discovery import default_paths, iter_entry_paths
from .loader import load_entries

logger = logging.getLogger(__name__)


class AppSearcher:
    """Cached, locale-aware search over desktop entries."""

    def __init__(
        self,
        directories: Optional[Iterable[Path]] = None,
        locales: Optional[Sequence[str]] = None,
        cache_ttl: Optional[int] = None,
    ):
        if directories is not None:
            self.directories = [Path(d) for d in directories]
        elif settings.search_paths:
            self.directories = [Path(d) for d in settings.search_paths]
        else:
            self.directories = default_paths()

        if locales is not None:
            self.locales = list(locales)
        else:
            self.locales = list(settings.default_locales) or get_languages_from_env()

        self._entries: List[DesktopEntry] = []
        self._cache_timestamp = 0.0
        self._cache_ttl = settings.cache_ttl if cache_ttl is None else cache_ttl

    # ─────────────────────────────────────────────────────────────────────────
    #  Cache
    # ─────────────────────────────────────────────────────────────────────────
    def entries(self) -> List[DesktopEntry]:
        if not self._cache_timestamp or time.time() - self._cache_timestamp > self._cache_ttl:
            self.refresh()
        return self._entries

    def refresh(self) -> None:
        """Rediscover and decode every entry."""
        logger.info("[AppSearcher] refreshing cache …")
        paths = list(iter_entry_paths(self.directories))
        decoded = load_entries(paths, self.locales or None)

        seen = set()
        self._entries = []
        for entry in decoded:
            if entry.identifier in seen:
                logger.debug("[AppSearcher] shadowed duplicate: %s (%s)", entry.identifier, entry.path)
                continue
            seen.add(entry.identifier)
            self._entries.append(entry)

        self._cache_timestamp = time.time()
        logger.info("[AppSearcher] cache ready: %d apps", len(self._entries))

    # ─────────────────────────────────────────────────────────────────────────
    #  Queries
    # ─────────────────────────────────────────────────────────────────────────
    def search(self, query: str, limit: Optional[int] = 10, min_score: float = 0.0) -> List[Tuple[float, DesktopEntry]]:
        """Entries ranked by `query_score`, best first."""
        return rank_entries(query, self.entries(), self.locales, min_score=min_score, limit=limit)

    def find_app(self, query: str, min_score: float = 0.0) -> Optional[DesktopEntry]:
        results = self.search(query, limit=1, min_score=min_score)
        if results:
            score, entry = results[0]
            logger.info("[AppSearcher] best match for '%s': %s (score=%.2f)", query, entry.identifier, score)
            return entry
        logger.info("[AppSearcher] no result for '%s'", query)
        return None

    def find_by_id(self, *app_ids: str, options: Optional[MatchOptions] = None) -> Optional[DesktopEntry]:
        """
        Entry for a window's app id(s): exact lookup first, then fuzzy
        identifier matching under `options`.
        """
        entries = self.entries()
        for app_id in app_ids:
            exact = find_app_by_id(entries, app_id)
            if exact is not None:
                return exact
        return best_identifier_match(app_ids, entries, options)

    def get_all_apps(self) -> List[Dict[str, str]]:
        """Get list of all discovered apps (for debugging/UI)."""
        return [
            {
                "id": entry.identifier,
                "name": entry.get("name", self.locales) or entry.identifier,
                "path": entry.path,
            }
            for entry in self.entries()
        ]
