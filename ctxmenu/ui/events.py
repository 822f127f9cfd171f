# ctxmenu/ui/events.py
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, DefaultDict, List, Optional, Tuple

if TYPE_CHECKING:
    from ctxmenu.ui.document import Node


__all__ = ["UIEvent", "EventTarget", "Handler"]


@dataclass
class UIEvent:
    """
    A pointer/key event travelling through the node tree.

    pos      : viewport (window) coordinates of the pointer
    page_pos : the same point in document coordinates (pos + scroll)
    button   : 1 left, 2 middle, 3 right (0 for non-button events)
    dy       : wheel notches, positive = away from the user
    """
    type: str
    target: "Node"
    pos: Tuple[int, int] = (0, 0)
    page_pos: Tuple[int, int] = (0, 0)
    button: int = 0
    key: Optional[int] = None
    alt: bool = False
    dy: int = 0
    bubbles: bool = True
    current_target: Optional["Node"] = None
    default_prevented: bool = False
    propagation_stopped: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


Handler = Callable[[UIEvent], None]


class _Entry:
    __slots__ = ("handler", "bound")

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.bound = True


class EventTarget:
    """
    Per-node pub/sub:
        off = node.on("pointerdown", handler)
        ...
        off()  # unbind; calling it again does nothing

    A handler unbound while an event is being delivered is skipped for the
    rest of that delivery.
    """

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, List[_Entry]] = defaultdict(list)

    def on(self, event: str, handler: Handler) -> Callable[[], None]:
        entry = _Entry(handler)
        self._listeners[event].append(entry)

        def off() -> None:
            if not entry.bound:
                return
            entry.bound = False
            try:
                self._listeners[event].remove(entry)
            except ValueError:
                pass

        return off

    def listener_count(self, event: Optional[str] = None) -> int:
        if event is not None:
            return len(self._listeners.get(event, ()))
        return sum(len(v) for v in self._listeners.values())

    def _deliver(self, event: UIEvent) -> None:
        for entry in list(self._listeners.get(event.type, ())):
            if entry.bound:
                entry.handler(event)
