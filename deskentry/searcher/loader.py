"""Batch decoding of many desktop entry files."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable, List, Optional

from ..codec.decoder import decode_from_path
from ..codec.errors import DecodeError
from ..config import settings
from ..models.entry import DesktopEntry

logger = logging.getLogger(__name__)


def _load_one(path: Path, locales_filter: Optional[List[str]]) -> Optional[DesktopEntry]:
    try:
        return decode_from_path(path, locales_filter)
    except DecodeError as e:
        logger.debug("[Loader] skipping %s: %s", path, e)
        return None


def load_entries(
    paths: Iterable[Path],
    locales_filter: Optional[Iterable[str]] = None,
    workers: Optional[int] = None,
) -> List[DesktopEntry]:
    """
    Decode every path, dropping the ones that fail.

    Result order follows `paths`, which matters for tie-breaks in matching.
    """
    paths = list(paths)
    locales = list(locales_filter) if locales_filter is not None else None
    workers = settings.loader_workers if workers is None else workers

    results: List[Optional[DesktopEntry]] = [None] * len(paths)
    if workers <= 1 or len(paths) <= 1:
        results = [_load_one(p, locales) for p in paths]
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(_load_one, p, locales): i for i, p in enumerate(paths)}
            for future in as_completed(futures):
                results[futures[future]] = future.result()

    entries = [e for e in results if e is not None]
    logger.info("[Loader] decoded %d/%d entries", len(entries), len(paths))
    return entries
