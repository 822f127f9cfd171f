# ctxmenu/core/listeners.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional

from ctxmenu.ui.events import EventTarget, Handler

log = logging.getLogger(__name__)


@dataclass
class Binding:
    target: EventTarget
    event: str
    handler: Handler
    _off: Optional[Callable[[], None]] = field(default=None, repr=False)

    @property
    def installed(self) -> bool:
        return self._off is not None

    def install(self) -> None:
        if self._off is None:
            self._off = self.target.on(self.event, self.handler)

    def uninstall(self) -> None:
        off, self._off = self._off, None
        if off is not None:
            off()


class ListenerSet:
    """
    The close-detection bindings of one open menu.

        ls.add(document, "pointerdown", on_down)
        ls.add(document, "keydown", on_key)
        ls.install()     # bind everything
        ...
        ls.remove()      # unbind everything, newest first; again is a no-op
    """

    def __init__(self, owner: Any = None) -> None:
        self.owner = owner
        self._bindings: List[Binding] = []

    def add(self, target: EventTarget, event: str, handler: Handler) -> Binding:
        binding = Binding(target, event, handler)
        self._bindings.append(binding)
        return binding

    def install(self) -> None:
        for binding in self._bindings:
            binding.install()

    def remove(self) -> int:
        """Unbind and forget every binding; returns how many were bound."""
        removed = 0
        bindings, self._bindings = self._bindings, []
        for binding in reversed(bindings):
            if binding.installed:
                binding.uninstall()
                removed += 1
        if removed:
            log.debug("removed %d listener(s) of %r", removed, self.owner)
        return removed

    @property
    def installed(self) -> int:
        return sum(1 for b in self._bindings if b.installed)

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[Binding]:
        return iter(list(self._bindings))
