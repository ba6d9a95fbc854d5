"""
searcher — discovery, batch loading and cached search of desktop entries.

Quick start
───────────
    from deskentry.searcher import AppSearcher

    searcher = AppSearcher()
    searcher.find_app("web browser")
    searcher.find_by_id("firefox")
"""

from .app_searcher import AppSearcher
from .discovery import PathSource, default_path_sources, default_paths, guess_path_source, iter_entry_paths
from .loader import load_entries

__all__ = [
    "AppSearcher",
    "PathSource",
    "default_path_sources",
    "default_paths",
    "guess_path_source",
    "iter_entry_paths",
    "load_entries",
]
