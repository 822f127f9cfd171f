# ctxmenu/core/scroll_lock.py
from __future__ import annotations

import logging
from typing import Dict, Tuple

from ctxmenu.ui.document import Document

log = logging.getLogger(__name__)


class ScrollLockManager:
    """
    Suspends page scrolling while a root menu is open.

    Locks nest per document: the first lock remembers the document's overflow
    and hides it, the matching last unlock puts it back. Unlocking an unlocked
    document does nothing.
    """

    def __init__(self) -> None:
        self._locks: Dict[int, Tuple[Document, int, str]] = {}

    def lock(self, document: Document) -> int:
        key = id(document)
        if key in self._locks:
            doc, depth, saved = self._locks[key]
            self._locks[key] = (doc, depth + 1, saved)
            return depth + 1
        self._locks[key] = (document, 1, document.overflow)
        document.overflow = "hidden"
        log.debug("scroll locked (was %r)", self._locks[key][2])
        return 1

    def unlock(self, document: Document) -> int:
        key = id(document)
        entry = self._locks.get(key)
        if entry is None:
            return 0
        doc, depth, saved = entry
        if depth > 1:
            self._locks[key] = (doc, depth - 1, saved)
            return depth - 1
        del self._locks[key]
        doc.overflow = saved
        log.debug("scroll restored to %r", saved)
        return 0

    def depth(self, document: Document) -> int:
        entry = self._locks.get(id(document))
        return entry[1] if entry else 0

    def is_locked(self, document: Document) -> bool:
        return self.depth(document) > 0

    def reset(self) -> None:
        """Restore every locked document and forget all locks."""
        for doc, _, saved in self._locks.values():
            doc.overflow = saved
        self._locks.clear()
