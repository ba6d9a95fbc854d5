"""
deskentry — desktop entry decoding, locale resolution and app matching.

    from deskentry import decode_from_path, best_identifier_match, query_score

    entry = decode_from_path("/usr/share/applications/org.gnome.Nautilus.desktop")
    entry.get("name", ["fr_FR"])
"""

from .codec import (
    AppIDError,
    DecodeError,
    DuplicateGroupError,
    EntryIOError,
    InvalidKeyError,
    InvalidValueError,
    KeyDoesNotExistError,
    KeyValueWithoutAGroupError,
    classify_line,
    escape,
    unescape,
)
from .codec.decoder import decode, decode_from_path, get_app_id
from .config import Settings, settings
from .i18n import GettextTranslator, NullTranslator, Translator, get_languages_from_env, resolve, resolve_list
from .matching import (
    MatchOptions,
    best_identifier_match,
    find_app_by_id,
    find_entry_from_appid,
    query_score,
    rank_entries,
)
from .models import ENTRY_FIELDS, DesktopEntry, EntryField, GenericEntry, Group, MimeApps, Thumbnailer
from .searcher import (
    AppSearcher,
    PathSource,
    default_path_sources,
    default_paths,
    guess_path_source,
    iter_entry_paths,
    load_entries,
)

__version__ = "0.1.0"
