# ctxmenu/core/overlay.py
from __future__ import annotations

import logging
from typing import Optional

import ctxmenu.utils.settings as settings
from ctxmenu.ui.document import Document, Node

log = logging.getLogger(__name__)


class OverlayManager:
    """
    Full-viewport layer a root menu (and its sub-menus) live in. It sits on
    top of everything else, so clicks outside the menus land on it rather
    than on the page underneath.
    """

    def __init__(self, document: Document, menu_id: str = "") -> None:
        self.document = document
        self.menu_id = menu_id
        self._node: Optional[Node] = None

    @property
    def node(self) -> Optional[Node]:
        return self._node

    @property
    def active(self) -> bool:
        return self._node is not None and self._node.is_connected

    def create(self) -> Node:
        """Insert the overlay, hidden until reveal(). Reuses a live one."""
        if self._node is None:
            node = Node("div", attrs={settings.ATTR_OVERLAY: self.menu_id}, rect=self.document.viewport_rect())
            node.visible = False
            self._node = node
        if not self._node.is_connected:
            self.document.append_child(self._node)
        return self._node

    def reveal(self) -> None:
        if self._node is not None:
            self._node.rect = self.document.viewport_rect()
            self._node.visible = True
            self._node.class_name = settings.VISIBLE_CLASS

    def destroy(self) -> None:
        node, self._node = self._node, None
        if node is not None:
            node.remove()
