"""Exceptions raised while decoding a desktop entry document."""


# ─────────────────────────── Exceptions ───────────────────────────

class DecodeError(Exception):
    """Base exception for every decoding failure."""


class AppIDError(DecodeError):
    """The path does not contain a valid app ID."""


class InvalidKeyError(DecodeError):
    """A key=value line has an empty key."""


class InvalidValueError(DecodeError):
    """A value holds an unknown escape sequence or a trailing backslash."""


class KeyValueWithoutAGroupError(DecodeError):
    """A key=value line appeared before any group header."""


class KeyDoesNotExistError(DecodeError):
    """A localized key has no default value in its group."""


class DuplicateGroupError(DecodeError):
    """The same group header appears twice (strict decoding only)."""


class EntryIOError(DecodeError):
    """The document could not be read from disk."""
