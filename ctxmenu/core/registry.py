# ctxmenu/core/registry.py
from __future__ import annotations

from typing import Any, Dict, Iterator, Optional, Tuple


class InstanceRegistry:
    """target node -> its one attached root menu."""

    def __init__(self) -> None:
        self._entries: Dict[int, Tuple[Any, Any]] = {}

    def get(self, target: Any) -> Optional[Any]:
        entry = self._entries.get(id(target))
        return entry[1] if entry else None

    def set(self, target: Any, menu: Any) -> Any:
        """Register `menu` for `target` unless one is already there; return the registered one."""
        existing = self.get(target)
        if existing is not None:
            return existing
        self._entries[id(target)] = (target, menu)
        return menu

    def remove(self, target: Any, menu: Any = None) -> bool:
        entry = self._entries.get(id(target))
        if entry is None or (menu is not None and entry[1] is not menu):
            return False
        del self._entries[id(target)]
        return True

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, target: Any) -> bool:
        return id(target) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Any]:
        return iter([menu for _, menu in self._entries.values()])
