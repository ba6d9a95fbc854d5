from .identifier import (
    EXEC_PENALTY,
    LAST_SEGMENT_PENALTY,
    MatchOptions,
    best_identifier_match,
    find_app_by_id,
    find_entry_from_appid,
    identifier_score,
    lcs_ratio,
    select_best,
)
from .query import SEARCH_FIELDS, build_haystack, query_score, rank_entries

__all__ = [
    "EXEC_PENALTY",
    "LAST_SEGMENT_PENALTY",
    "MatchOptions",
    "best_identifier_match",
    "find_app_by_id",
    "find_entry_from_appid",
    "identifier_score",
    "lcs_ratio",
    "select_best",
    "SEARCH_FIELDS",
    "build_haystack",
    "query_score",
    "rank_entries",
]
