"""
Identifier matching — pick the entry a window-manager app id belongs to.

Each (pattern, entry) pair is scored against a few entry-derived strings:

    String               Penalty
    ───────────────────  ───────
    identifier             0
    last '.' segment       LAST_SEGMENT_PENALTY
    StartupWMClass         0
    Exec                   EXEC_PENALTY

with score = longest common substring / max(len(pattern), len(string)).
"""
from __future__ import annotations

import logging
from difflib import SequenceMatcher
from typing import Annotated, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from ..config import settings
from ..models.entry import DesktopEntry

logger = logging.getLogger(__name__)

LAST_SEGMENT_PENALTY = 0.05
EXEC_PENALTY = 0.05
PERFECT_SCORE = 0.99

UnitFloat = Annotated[float, Field(ge=0.0, le=1.0)]


class MatchOptions(BaseModel):
    """Confidence policy for `best_identifier_match`."""
    min_score: UnitFloat = 0.7
    # (min_entropy, min_score_at_entropy); None disables the entropy rescue
    entropy: Optional[Tuple[UnitFloat, UnitFloat]] = (0.15, 0.2)

    @classmethod
    def from_settings(cls) -> "MatchOptions":
        return cls(
            min_score=settings.min_score,
            entropy=(settings.min_entropy, settings.min_score_at_entropy),
        )


def lcs_ratio(pattern: str, candidate: str) -> float:
    """Longest common substring length over the longer length (0.0 for empties)."""
    longest = max(len(pattern), len(candidate))
    if longest == 0:
        return 0.0
    matcher = SequenceMatcher(None, pattern, candidate, autojunk=False)
    size = matcher.find_longest_match(0, len(pattern), 0, len(candidate)).size
    return size / longest


def _candidates(entry: DesktopEntry) -> List[Tuple[str, float]]:
    identifier = entry.identifier.lower()
    found = [(identifier, 0.0)]

    if "." in identifier:
        found.append((identifier.rsplit(".", 1)[-1], LAST_SEGMENT_PENALTY))

    wm_class = entry.desktop_entry("StartupWMClass")
    if wm_class:
        found.append((wm_class.lower(), 0.0))

    exec_line = entry.desktop_entry("Exec")
    if exec_line:
        found.append((exec_line.lower(), EXEC_PENALTY))

    return found


def identifier_score(pattern: str, entry: DesktopEntry) -> float:
    """Best score of one lower-cased pattern against one entry."""
    best = 0.0
    for candidate, penalty in _candidates(entry):
        score = max(lcs_ratio(pattern, candidate) - penalty, 0.0)
        if score > best:
            best = score
    return best


def select_best(
    scored: Sequence[Tuple[float, DesktopEntry]],
    options: MatchOptions,
) -> Optional[DesktopEntry]:
    """
    Apply the confidence policy to (score, entry) pairs in candidate order.

    The first entry wins ties. A top score at or below min_score is still
    accepted when it leads the runner-up by more than min_entropy and
    exceeds min_score_at_entropy.
    """
    if not scored:
        return None

    top_index = 0
    for i, (score, _) in enumerate(scored):
        if score > scored[top_index][0]:
            top_index = i
    top_score, top_entry = scored[top_index]
    second = max((s for i, (s, _) in enumerate(scored) if i != top_index), default=0.0)

    if top_score > options.min_score:
        return top_entry

    if options.entropy is not None:
        min_entropy, min_score_at_entropy = options.entropy
        if top_score - second > min_entropy and top_score > min_score_at_entropy:
            return top_entry

    return None


def best_identifier_match(
    patterns: Iterable[str],
    entries: Iterable[DesktopEntry],
    options: Optional[MatchOptions] = None,
) -> Optional[DesktopEntry]:
    """
    Entry that best matches any of `patterns` (e.g. a window's app id and
    WM class), or None when no entry is convincing.
    """
    options = options or MatchOptions.from_settings()
    normalized = [p.lower() for p in patterns]
    if not normalized:
        return None

    scored: List[Tuple[float, DesktopEntry]] = []
    for entry in entries:
        score = max(identifier_score(p, entry) for p in normalized)
        scored.append((score, entry))
        if score > PERFECT_SCORE:
            break

    best = select_best(scored, options)
    logger.debug(
        "[Matching] patterns=%s scanned=%d best=%s",
        normalized, len(scored), best.identifier if best else None,
    )
    return best


def find_entry_from_appid(entries: Iterable[DesktopEntry], appid: str) -> Optional[DesktopEntry]:
    """First entry whose identifier or StartupWMClass equals `appid` (case-insensitive)."""
    wanted = appid.lower()
    for entry in entries:
        if entry.identifier.lower() == wanted:
            return entry
        wm_class = entry.desktop_entry("StartupWMClass")
        if wm_class is not None and wm_class.lower() == wanted:
            return entry
    return None


def find_app_by_id(entries: Sequence[DesktopEntry], appid: str) -> Optional[DesktopEntry]:
    """
    Exact lookup in priority order: StartupWMClass, then id / file stem,
    then untranslated Name.
    """
    for check in (DesktopEntry.matches_wm_class, DesktopEntry.matches_id, DesktopEntry.matches_name):
        for entry in entries:
            if check(entry, appid):
                return entry
    return None
