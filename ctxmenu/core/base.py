# ctxmenu/core/base.py
"""
Shared state machine of root menus and sub-menus.

    closed --open()--> open --close()--> closed

open() is a template: subclasses decide where the nodes go, where they are
placed and which close-detection bindings to install; BaseMenu builds the
item nodes, lays them out and wires item behaviour (actions, sub-menu
openers, hover timers).

close() tears down leaf first: the open child closes before this menu
cancels its timers, drops its bindings and removes its nodes.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Tuple, Union

import pygame

import ctxmenu.utils.settings as settings
from ctxmenu.core.items import DIVIDER, ActionItem, Item, SubMenuItem, parse_items
from ctxmenu.core.listeners import ListenerSet
from ctxmenu.core.options import MenuOptions, SubMenuOptions
from ctxmenu.core.positioning import Placement
from ctxmenu.ui.document import Document, Node
from ctxmenu.ui.events import UIEvent
from ctxmenu.ui.layout import layout_menu
from ctxmenu.utils.scheduler import TimerHandle

if TYPE_CHECKING:
    from ctxmenu.core.submenu import SubMenu

log = logging.getLogger(__name__)


class MenuState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


class BaseMenu:
    def __init__(
        self,
        document: Document,
        items: Optional[Iterable[Any]],
        options: Union[MenuOptions, SubMenuOptions],
    ) -> None:
        self.document = document
        self.items: List[Item] = parse_items(items)
        self.options = options
        self.state = MenuState.CLOSED
        self.opened_child: Optional["SubMenu"] = None
        self.listeners = ListenerSet(self)
        self.node: Optional[Node] = None
        self.placement: Optional[Placement] = None
        self.opened_at: Optional[int] = None
        self._timers: Dict[str, TimerHandle] = {}
        self._sub_menus: Dict[int, "SubMenu"] = {}
        self._closing = False

    # ---- queries ------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self.state is MenuState.OPEN

    @property
    def root(self) -> "BaseMenu":
        return self

    @property
    def menu_id(self) -> str:
        return self.options.id

    def open_chain(self) -> List["BaseMenu"]:
        """This menu and its open descendants, outermost first."""
        chain: List[BaseMenu] = []
        menu: Optional[BaseMenu] = self
        while menu is not None and menu.is_open:
            chain.append(menu)
            menu = menu.opened_child
        return chain

    def _owns(self, node: Optional[Node]) -> bool:
        """True if `node` is inside this menu or one of its open sub-menus."""
        return any(m.node is not None and m.node.contains(node) for m in self.open_chain())

    # ---- timers -------------------------------------------------------------

    def _start_timer(self, key: str, delay_ms: int, callback) -> TimerHandle:
        self._cancel_timer(key)
        handle = self.document.scheduler.call_later(delay_ms, callback)
        self._timers[key] = handle
        return handle

    def _cancel_timer(self, key: str) -> None:
        handle = self._timers.pop(key, None)
        if handle is not None:
            handle.cancel()

    def _cancel_timers(self) -> None:
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()

    def has_pending(self, key: str) -> bool:
        handle = self._timers.get(key)
        return handle is not None and handle.active

    # ---- open ---------------------------------------------------------------

    def _open(self) -> None:
        self._before_open()
        node = self._build_nodes()
        node.visible = False
        self.node = node
        self._insert(node)

        size = layout_menu(node, self.document)
        self.placement = self._compute_placement(size)
        self._apply_placement(self.placement)
        self._reveal()

        self._bind_close_detection()
        self.listeners.install()
        self.state = MenuState.OPEN
        self.opened_at = self.document.scheduler.now()
        self._after_open()
        log.debug("opened %r at %s", self, self.placement)
        self.options.callbacks.open(self)

    def _before_open(self) -> None:
        pass

    def _insert(self, node: Node) -> None:
        self.document.append_child(node)

    def _compute_placement(self, size: Tuple[int, int]) -> Placement:
        raise NotImplementedError

    def _apply_placement(self, placement: Placement) -> None:
        node = self.node
        node.move_to(placement.x, placement.y)
        if placement.max_height is not None and placement.max_height < node.rect.height:
            node.rect.height = placement.max_height
            node.clips = True

    def _reveal(self) -> None:
        self.node.visible = True
        self.node.class_name = settings.VISIBLE_CLASS

    def _bind_close_detection(self) -> None:
        self.listeners.add(self.document, "pointerdown", self._on_document_pointerdown)
        self.listeners.add(self.document, "keydown", self._on_keydown)

    def _after_open(self) -> None:
        pass

    # ---- close --------------------------------------------------------------

    def close(self) -> None:
        """Close this menu and everything opened from it. Closing a closed menu does nothing."""
        if not self.is_open or self._closing:
            return
        self._closing = True
        try:
            child = self.opened_child
            if child is not None:
                child.close()
            self.opened_child = None
            self._cancel_timers()
            self.listeners.remove()
            self._remove_nodes()
            self._release()
            self._sub_menus.clear()
            self.node = None
            self.placement = None
            self.opened_at = None
            self.state = MenuState.CLOSED
        finally:
            self._closing = False
        log.debug("closed %r", self)
        self.options.callbacks.close(self)

    def _remove_nodes(self) -> None:
        if self.node is not None:
            self.node.remove()

    def _release(self) -> None:
        pass

    # ---- handlers -----------------------------------------------------------

    def _on_document_pointerdown(self, ev: UIEvent) -> None:
        if self._owns(ev.target):
            return
        root_options = self.root.options
        if ev.button == settings.RIGHT_BUTTON and getattr(root_options, "ignores_right_button", False):
            return
        self.close()

    def _on_keydown(self, ev: UIEvent) -> None:
        # Every open menu listens; only the innermost one closes.
        if ev.key != pygame.K_ESCAPE:
            return
        child = self.opened_child
        if child is not None and child.is_open:
            return
        self.close()

    # ---- nodes --------------------------------------------------------------

    def _build_nodes(self) -> Node:
        menu_id = self.menu_id
        container = Node("ul", attrs={settings.ATTR_MENU: menu_id})
        container.on("pointerdown", _stop)
        container.on("contextmenu", _prevent)
        container.on("wheel", self._on_wheel)

        for index, item in enumerate(self.items):
            if item is DIVIDER:
                container.append_child(Node("li", attrs={settings.ATTR_DIVIDER: menu_id}))
                continue
            node = container.append_child(Node("li", text=item.label, attrs={settings.ATTR_ITEM: menu_id}))
            node.on("contextmenu", _suppress)
            if isinstance(item, SubMenuItem):
                node.attrs[settings.ATTR_OPENER] = menu_id
                self._wire_opener(index, item, node)
            else:
                node.on("pointerdown", _stop)
                self._wire_action(item, node)
        return container

    def _on_wheel(self, ev: UIEvent) -> None:
        ev.prevent_default()
        ev.stop_propagation()
        if self.node is not None:
            self.node.scroll_content(-ev.dy * settings.WHEEL_STEP_PX)

    def _wire_action(self, item: ActionItem, node: Node) -> None:
        def on_pointerup(ev: UIEvent) -> None:
            ev.stop_propagation()
            if self.opened_at is None:
                return
            if self.document.scheduler.now() - self.opened_at < settings.ACTIVATION_GRACE_MS:
                log.debug("ignoring %r: pointer-up inside the grace period", item.label)
                return
            self.root.close()
            item.action()

        node.on("pointerup", on_pointerup)

    def _wire_opener(self, index: int, item: SubMenuItem, node: Node) -> None:
        def on_enter(ev: UIEvent) -> None:
            sub = self._sub_menu_for(index, item)
            child = self.opened_child
            if child is not None and child is not sub:
                child.close()
            if sub.is_open:
                sub._cancel_timer("close")
                return
            self._start_timer("open", item.options.open_delay, lambda: self._open_sub_menu(index, item, node))

        def on_leave(ev: UIEvent) -> None:
            self._cancel_timer("open")

        def on_down(ev: UIEvent) -> None:
            ev.stop_propagation()
            self._cancel_timer("open")
            self._open_sub_menu(index, item, node)

        node.on("pointerenter", on_enter)
        node.on("pointerleave", on_leave)
        node.on("pointerdown", on_down)

    def _sub_menu_for(self, index: int, item: SubMenuItem) -> "SubMenu":
        from ctxmenu.core.submenu import SubMenu

        sub = self._sub_menus.get(index)
        if sub is None:
            sub = SubMenu(self.document, item.items, item.options, label=item.label)
            self._sub_menus[index] = sub
        return sub

    def _open_sub_menu(self, index: int, item: SubMenuItem, anchor: Node) -> None:
        if not self.is_open or not anchor.is_connected:
            return
        self._cancel_timer("open")
        sub = self._sub_menu_for(index, item)
        child = self.opened_child
        if child is not None and child is not sub:
            child.close()
        if sub.is_open:
            return
        sub.open(self, anchor)


def _stop(ev: UIEvent) -> None:
    ev.stop_propagation()


def _prevent(ev: UIEvent) -> None:
    ev.prevent_default()


def _suppress(ev: UIEvent) -> None:
    ev.prevent_default()
    ev.stop_propagation()
