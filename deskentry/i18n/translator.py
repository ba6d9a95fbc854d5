"""
Translation hook used when an entry names a gettext domain
(X-Ubuntu-Gettext-Domain) and no locale override matched.
"""
from __future__ import annotations

import gettext
import logging
import threading
from typing import Optional, Protocol, Set

from ..config import settings

logger = logging.getLogger(__name__)


class Translator(Protocol):
    """Anything that can look a message up in a text domain."""
    def translate(self, domain: str, key: str) -> str: ...


class NullTranslator:
    """Returns every key untranslated."""

    def translate(self, domain: str, key: str) -> str:
        return key


class GettextTranslator:
    """
    gettext-backed translator.

    gettext keeps its catalog bindings in process-global state, so every
    lookup is serialized on one lock.
    """

    _lock = threading.Lock()

    def __init__(self, localedir: Optional[str] = None):
        self.localedir = localedir
        self._bound: Set[str] = set()

    def translate(self, domain: str, key: str) -> str:
        if not key:
            return key
        with self._lock:
            if self.localedir and domain not in self._bound:
                gettext.bindtextdomain(domain, self.localedir)
                self._bound.add(domain)
                logger.debug("[Translator] bound domain '%s' to %s", domain, self.localedir)
            return gettext.dgettext(domain, key)


_default: Optional[Translator] = None


def default_translator() -> Optional[Translator]:
    """Translator used when a caller passes none; None when gettext is disabled."""
    global _default
    if not settings.use_gettext:
        return None
    if _default is None:
        _default = GettextTranslator(settings.gettext_localedir)
    return _default
