# ctxmenu/core/menu.py
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Union

import ctxmenu.utils.settings as settings
from ctxmenu.core.base import BaseMenu
from ctxmenu.core.options import MenuOptions
from ctxmenu.core.overlay import OverlayManager
from ctxmenu.core.positioning import Placement, calculate_position
from ctxmenu.core.runtime import get_runtime
from ctxmenu.core.scroll_lock import ScrollLockManager
from ctxmenu.errors import MenuConfigError
from ctxmenu.ui.document import Document, Node
from ctxmenu.ui.events import UIEvent

log = logging.getLogger(__name__)


Targets = Union[Node, Sequence[Node]]


def _as_targets(target: Targets) -> Tuple[Node, ...]:
    if isinstance(target, Node):
        return (target,)
    targets = tuple(target)
    if not targets or not all(isinstance(t, Node) for t in targets):
        raise MenuConfigError("target must be a Node or a non-empty sequence of Nodes")
    return targets


class ContextMenu(BaseMenu):
    """
    A right-click menu attached to one or more target nodes.

        menu = ContextMenu(doc, tile, [
            {"label": "Copy", "action": copy},
            "-",
            sub_menu("More", [{"label": "Paste", "action": paste}], delay={"open": 100}),
        ], overlay=True, transfer=True)

        shared = ContextMenu(doc, [tile_a, tile_b], items)

    Each target has at most one menu: constructing a ContextMenu for a target
    that already has one returns the existing menu unchanged.
    """

    def __new__(cls, document: Document, target: Targets, items: Optional[Iterable[Any]] = None, **options: Any):
        runtime = get_runtime()
        for node in _as_targets(target):
            existing = runtime.lookup(node)
            if existing is not None:
                log.debug("target %r already has %r", node, existing)
                return existing
        return super().__new__(cls)

    def __init__(self, document: Document, target: Targets, items: Optional[Iterable[Any]] = None, **options: Any) -> None:
        if getattr(self, "_attached", False):
            return
        super().__init__(document, items, MenuOptions.from_mapping(options))
        self.targets = _as_targets(target)
        self.target = self.targets[0]
        self.invoker: Optional[Node] = None
        self.overlay: Optional[OverlayManager] = OverlayManager(document, self.menu_id) if self.options.overlay else None
        self._scroll_lock: Optional[ScrollLockManager] = None
        self._point: Tuple[int, int] = (0, 0)
        runtime = get_runtime()
        self._offs: List[Callable[[], None]] = []
        for node in self.targets:
            self._offs.append(node.on("contextmenu", self._on_invoke))
            runtime.register(node, self)
        self._attached = True

    def __repr__(self) -> str:
        return f"<ContextMenu {self.menu_id or hex(id(self))} {self.state.value}>"

    @property
    def attached(self) -> bool:
        return getattr(self, "_attached", False)

    # ---- public -------------------------------------------------------------

    def open(self, point: Tuple[int, int]) -> None:
        """Open at a viewport point; reopens if already open."""
        if self.is_open:
            self.close()
        self._point = (int(point[0]), int(point[1]))
        self._open()

    def detach(self) -> None:
        """Close, stop listening to every target and free them for another menu."""
        if not self.attached:
            return
        self.close()
        offs, self._offs = self._offs, []
        for off in offs:
            off()
        runtime = get_runtime()
        for node in self.targets:
            runtime.unregister(node, self)
        self._attached = False
        log.debug("detached %r", self)

    # ---- invocation ---------------------------------------------------------

    def _on_invoke(self, ev: UIEvent) -> None:
        ev.stop_propagation()
        if ev.alt and self.options.default_on_alt:
            return
        ev.prevent_default()
        if self.options.is_disabled(self):
            log.debug("%r is disabled", self)
            return
        self.invoker = ev.current_target
        self.open(ev.pos)

    # ---- open/close hooks ---------------------------------------------------

    def _before_open(self) -> None:
        if self.overlay is not None:
            self.overlay.create()
        if self.options.locks_scroll:
            self._scroll_lock = get_runtime().scroll_lock
            self._scroll_lock.lock(self.document)

    def _insert(self, node: Node) -> None:
        if self.overlay is not None:
            self.overlay.node.append_child(node)
        else:
            self.document.append_child(node)

    def _compute_placement(self, size: Tuple[int, int]) -> Placement:
        return calculate_position(
            self._point,
            size,
            self.document.viewport_size,
            self.document.scroll,
            transfer=self.options.transfer,
            vertical_margin=self.options.vertical_margin,
        )

    def _reveal(self) -> None:
        super()._reveal()
        if self.overlay is not None:
            self.overlay.reveal()

    def _bind_close_detection(self) -> None:
        super()._bind_close_detection()
        if self.overlay is not None:
            self.listeners.add(self.overlay.node, "contextmenu", self._on_overlay_contextmenu)

    def _remove_nodes(self) -> None:
        if self.overlay is not None:
            self.overlay.destroy()
        super()._remove_nodes()

    def _release(self) -> None:
        lock, self._scroll_lock = self._scroll_lock, None
        if lock is not None:
            lock.unlock(self.document)

    # ---- close detection ----------------------------------------------------

    def _on_overlay_contextmenu(self, ev: UIEvent) -> None:
        ev.prevent_default()
        ev.stop_propagation()
        if settings.ATTR_ITEM in ev.target.attrs:
            return
        self.close()


def attach(document: Document, target: Targets, items: Optional[Iterable[Any]] = None, **options: Any) -> ContextMenu:
    """Attach a menu to `target` (a node or a sequence of nodes), or return the one already attached."""
    return ContextMenu(document, target, items, **options)
