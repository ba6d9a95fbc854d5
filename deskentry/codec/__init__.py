"""
codec — the desktop entry line grammar.

The decoder itself lives in `deskentry.codec.decoder`; it depends on the
models, which in turn use `values.escape`, so it is not imported here.
"""

from .errors import (
    AppIDError,
    DecodeError,
    DuplicateGroupError,
    EntryIOError,
    InvalidKeyError,
    InvalidValueError,
    KeyDoesNotExistError,
    KeyValueWithoutAGroupError,
)
from .lines import BLANK, Blank, GroupHeader, KeyValue, classify_line, split_locale
from .values import escape, unescape
