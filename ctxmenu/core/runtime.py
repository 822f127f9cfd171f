# ctxmenu/core/runtime.py
"""
Process-wide menu state: which target has which menu, and who holds the
scroll lock. Created on first use, dropped when the last root menu detaches.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ctxmenu.core.registry import InstanceRegistry
from ctxmenu.core.scroll_lock import ScrollLockManager

log = logging.getLogger(__name__)


class MenuRuntime:
    def __init__(self) -> None:
        self.registry = InstanceRegistry()
        self.scroll_lock = ScrollLockManager()

    def register(self, target: Any, menu: Any) -> Any:
        return self.registry.set(target, menu)

    def lookup(self, target: Any) -> Optional[Any]:
        return self.registry.get(target)

    def unregister(self, target: Any, menu: Any) -> bool:
        removed = self.registry.remove(target, menu)
        if removed and not len(self.registry):
            self.teardown()
        return removed

    def teardown(self) -> None:
        global _runtime
        self.scroll_lock.reset()
        self.registry.clear()
        if _runtime is self:
            _runtime = None
            log.debug("menu runtime torn down")


_runtime: Optional[MenuRuntime] = None


def get_runtime() -> MenuRuntime:
    global _runtime
    if _runtime is None:
        _runtime = MenuRuntime()
    return _runtime


def reset_runtime() -> None:
    """Forget all registrations and locks (tests, app shutdown)."""
    if _runtime is not None:
        _runtime.teardown()
