# ctxmenu/core/submenu.py
from __future__ import annotations

import logging
import weakref
from typing import Any, Iterable, Optional, Tuple

import ctxmenu.utils.settings as settings
from ctxmenu.core.base import BaseMenu
from ctxmenu.core.options import SubMenuOptions
from ctxmenu.core.positioning import Placement, calculate_sub_position
from ctxmenu.ui.document import Document, Node
from ctxmenu.ui.events import UIEvent

log = logging.getLogger(__name__)


class SubMenu(BaseMenu):
    """
    A menu opened beside an opener item of another menu.

    It lives in the root's overlay when there is one, never owns an overlay or
    the scroll lock, and keeps only a weak reference to the menu it opened from.
    """

    def __init__(
        self,
        document: Document,
        items: Optional[Iterable[Any]] = None,
        options: Optional[SubMenuOptions] = None,
        *,
        label: str = "",
    ) -> None:
        super().__init__(document, items, options or SubMenuOptions())
        self.label = label
        self._parent: Optional[weakref.ReferenceType] = None
        self.anchor: Optional[Node] = None

    def __repr__(self) -> str:
        return f"<SubMenu {self.label!r} {self.state.value}>"

    @property
    def parent(self) -> Optional[BaseMenu]:
        return self._parent() if self._parent is not None else None

    @property
    def root(self) -> BaseMenu:
        menu: BaseMenu = self
        while isinstance(menu, SubMenu):
            parent = menu.parent
            if parent is None:
                break
            menu = parent
        return menu

    @property
    def menu_id(self) -> str:
        if self.options.id:
            return self.options.id
        parent = self.parent
        return parent.menu_id if parent is not None else ""

    def open(self, parent: BaseMenu, anchor: Node) -> None:
        if self.is_open:
            return
        self._parent = weakref.ref(parent)
        self.anchor = anchor
        self._open()

    # ---- open/close hooks ---------------------------------------------------

    def _insert(self, node: Node) -> None:
        overlay = getattr(self.root, "overlay", None)
        if overlay is not None and overlay.active:
            overlay.node.append_child(node)
        else:
            self.document.append_child(node)

    def _compute_placement(self, size: Tuple[int, int]) -> Placement:
        return calculate_sub_position(
            self.document.to_viewport(self.anchor.rect),
            size,
            self.document.viewport_size,
            self.document.scroll,
            transfer=self.options.transfer,
            vertical_margin=self.options.vertical_margin,
        )

    def _bind_close_detection(self) -> None:
        super()._bind_close_detection()
        parent = self.parent
        if parent is not None and parent.node is not None:
            self.listeners.add(parent.node, "pointerover", self._on_parent_pointerover)
        self.listeners.add(self.node, "pointerenter", self._on_self_pointerenter)

    def _after_open(self) -> None:
        parent = self.parent
        if parent is not None:
            parent.opened_child = self

    def _release(self) -> None:
        parent = self.parent
        if parent is not None and parent.opened_child is self:
            parent.opened_child = None

    # ---- close delay --------------------------------------------------------

    def _on_parent_pointerover(self, ev: UIEvent) -> None:
        target = ev.target
        if target is self.anchor:
            self._cancel_timer("close")
            return
        if settings.ATTR_ITEM not in target.attrs or settings.ATTR_OPENER in target.attrs:
            return
        if not self.has_pending("close"):
            self._start_timer("close", self.options.close_delay, self.close)

    def _on_self_pointerenter(self, ev: UIEvent) -> None:
        self._cancel_timer("close")
