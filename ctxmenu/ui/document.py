# ctxmenu/ui/document.py
"""
Retained node tree that menus are built into.

A Document owns the viewport (size + scroll offset) and a tree of Nodes whose
rects are in document coordinates. It turns pygame input into UIEvents and
delivers them to the node under the pointer, bubbling up to the document:

    doc = Document((800, 600))
    tile = doc.append_child(Node("div", rect=(40, 40, 200, 120)))
    tile.on("contextmenu", handler)
    doc.feed(event)     # for every pygame event
    doc.tick()          # once per frame, runs due timers

Pointer motion produces non-bubbling "pointerenter"/"pointerleave" for every
node entered or left, and a bubbling "pointerover" when the deepest hovered
node changes. A right button press delivers "pointerdown" and then, after
hit-testing again, "contextmenu".
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union

import pygame

import ctxmenu.utils.settings as settings
from ctxmenu.ui.events import EventTarget, UIEvent
from ctxmenu.ui.menu_theme import MenuTheme, make_font
from ctxmenu.utils.scheduler import Scheduler

log = logging.getLogger(__name__)

RectLike = Union[pygame.Rect, Sequence[int]]


class Node(EventTarget):
    """A rectangle in the document with children, attributes and listeners."""

    def __init__(
        self,
        tag: str = "div",
        *,
        text: str = "",
        attrs: Optional[dict] = None,
        rect: Optional[RectLike] = None,
    ) -> None:
        super().__init__()
        self.tag = tag
        self.text = text
        self.attrs: dict = dict(attrs or {})
        self.rect = pygame.Rect(rect) if rect is not None else pygame.Rect(0, 0, 0, 0)
        self.parent: Optional[Node] = None
        self.children: List[Node] = []
        self.visible: bool = True
        self.class_name: str = ""

        # Height-capped containers clip their children and scroll them.
        self.clips: bool = False
        self.content_height: int = 0
        self.content_offset: int = 0

    # ---- tree ---------------------------------------------------------------

    def append_child(self, node: "Node") -> "Node":
        if node.parent is not None:
            node.remove()
        node.parent = self
        self.children.append(node)
        return node

    def remove(self) -> None:
        """Detach from the parent. No-op when already detached."""
        if self.parent is None:
            return
        try:
            self.parent.children.remove(self)
        finally:
            self.parent = None

    def ancestors(self) -> Iterator["Node"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def contains(self, other: Optional["Node"]) -> bool:
        """True if `other` is this node or one of its descendants."""
        node = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def walk(self) -> Iterator["Node"]:
        yield self
        for child in list(self.children):
            yield from child.walk()

    @property
    def root(self) -> "Node":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def is_connected(self) -> bool:
        return isinstance(self.root, Document)

    # ---- geometry -----------------------------------------------------------

    def move_to(self, x: int, y: int) -> None:
        """Move this node's top-left to (x, y), carrying descendants along."""
        self._shift(x - self.rect.x, y - self.rect.y)

    def _shift(self, dx: int, dy: int) -> None:
        if not dx and not dy:
            return
        self.rect.move_ip(dx, dy)
        for child in self.children:
            child._shift(dx, dy)

    def scroll_content(self, dy: int) -> bool:
        """Scroll the children of a clipping node by dy pixels; True if they moved."""
        if not self.clips:
            return False
        limit = max(0, self.content_height - self.rect.height)
        offset = max(0, min(limit, self.content_offset + dy))
        delta = offset - self.content_offset
        if not delta:
            return False
        self.content_offset = offset
        for child in self.children:
            child._shift(0, -delta)
        return True

    def __repr__(self) -> str:
        label = f" {self.text!r}" if self.text else ""
        return f"<{type(self).__name__} {self.tag}{label} {tuple(self.rect)}>"


class Document(Node):
    """Root node: viewport, scrolling, hit-testing and event delivery."""

    def __init__(
        self,
        viewport: Tuple[int, int] = (800, 600),
        *,
        page_size: Optional[Tuple[int, int]] = None,
        scheduler: Optional[Scheduler] = None,
        theme: Optional[MenuTheme] = None,
        measure_text: Optional[Callable[[str], int]] = None,
    ) -> None:
        super().__init__("document")
        self.viewport_width, self.viewport_height = int(viewport[0]), int(viewport[1])
        page_w, page_h = page_size or viewport
        self.rect = pygame.Rect(0, 0, max(page_w, self.viewport_width), max(page_h, self.viewport_height))
        self.scroll_x = 0
        self.scroll_y = 0
        self.overflow = "auto"  # "hidden" while a menu holds the scroll lock
        self.scheduler = scheduler or Scheduler()
        self.theme = theme or MenuTheme()
        self._measure_text = measure_text
        self._hover_path: List[Node] = []
        self._pointer_pos: Tuple[int, int] = (0, 0)

    # ---- viewport -----------------------------------------------------------

    @property
    def viewport_size(self) -> Tuple[int, int]:
        return self.viewport_width, self.viewport_height

    @property
    def scroll(self) -> Tuple[int, int]:
        return self.scroll_x, self.scroll_y

    def viewport_rect(self) -> pygame.Rect:
        """The visible area in document coordinates."""
        return pygame.Rect(self.scroll_x, self.scroll_y, self.viewport_width, self.viewport_height)

    def to_page(self, pos: Tuple[int, int]) -> Tuple[int, int]:
        return int(pos[0]) + self.scroll_x, int(pos[1]) + self.scroll_y

    def to_viewport(self, rect: pygame.Rect) -> pygame.Rect:
        return rect.move(-self.scroll_x, -self.scroll_y)

    def resize(self, size: Tuple[int, int]) -> None:
        self.viewport_width, self.viewport_height = int(size[0]), int(size[1])
        self.rect.width = max(self.rect.width, self.viewport_width)
        self.rect.height = max(self.rect.height, self.viewport_height)
        self.scroll_to(self.scroll_x, self.scroll_y, force=True)

    def scroll_to(self, x: int, y: int, *, force: bool = False) -> bool:
        """Scroll the page; refused while overflow is hidden unless forced."""
        if self.overflow == "hidden" and not force:
            return False
        x = max(0, min(int(x), self.rect.width - self.viewport_width))
        y = max(0, min(int(y), self.rect.height - self.viewport_height))
        moved = (x, y) != (self.scroll_x, self.scroll_y)
        self.scroll_x, self.scroll_y = x, y
        return moved

    def scroll_by(self, dx: int, dy: int) -> bool:
        return self.scroll_to(self.scroll_x + dx, self.scroll_y + dy)

    # ---- measuring ----------------------------------------------------------

    def measure_text(self, text: str) -> int:
        if self._measure_text is None:
            font = make_font(self.theme)
            self._measure_text = lambda s: font.size(s)[0]
        return int(self._measure_text(text))

    # ---- hit testing --------------------------------------------------------

    def hit_test(self, pos: Tuple[int, int]) -> Node:
        """Deepest visible node under a viewport point (the document if none)."""
        found = self._hit(self, self.to_page(pos))
        return found if found is not None else self

    def _hit(self, node: Node, point: Tuple[int, int]) -> Optional[Node]:
        if node.clips and not node.rect.collidepoint(point):
            return None
        for child in reversed(node.children):
            if not child.visible:
                continue
            found = self._hit(child, point)
            if found is not None:
                return found
        if node is not self and node.rect.collidepoint(point):
            return node
        return None

    @property
    def hovered(self) -> Optional[Node]:
        for node in self._hover_path:
            if node is not self and node.is_connected:
                return node
        return None

    @property
    def pointer_pos(self) -> Tuple[int, int]:
        return self._pointer_pos

    # ---- delivery -----------------------------------------------------------

    def dispatch(self, event_type: str, target: Node, **fields) -> UIEvent:
        """Deliver an event to `target`, then to its ancestors if it bubbles."""
        event = UIEvent(event_type, target, **fields)
        path = [target, *target.ancestors()] if event.bubbles else [target]
        for node in path:
            event.current_target = node
            node._deliver(event)
            if event.propagation_stopped:
                break
        event.current_target = None
        return event

    def _pointer_fields(self, pos: Tuple[int, int]) -> dict:
        pos = (int(pos[0]), int(pos[1]))
        return {"pos": pos, "page_pos": self.to_page(pos)}

    def pointer_move(self, pos: Tuple[int, int]) -> Node:
        self._pointer_pos = (int(pos[0]), int(pos[1]))
        target = self.hit_test(pos)
        new_path = [target, *target.ancestors()]
        old_path = self._hover_path
        fields = self._pointer_fields(pos)

        for node in old_path:
            if node not in new_path and node.is_connected:
                self.dispatch("pointerleave", node, bubbles=False, **fields)
        if not old_path or old_path[0] is not target:
            self.dispatch("pointerover", target, **fields)
        for node in reversed(new_path):
            if node not in old_path:
                self.dispatch("pointerenter", node, bubbles=False, **fields)

        self._hover_path = new_path
        return target

    def pointer_down(self, pos: Tuple[int, int], button: int = settings.LEFT_BUTTON, *, alt: bool = False) -> UIEvent:
        """Press a button; for the right button the returned event is the "contextmenu" one."""
        if tuple(pos) != self._pointer_pos or not self._hover_path:
            self.pointer_move(pos)
        down = self.dispatch("pointerdown", self.hit_test(pos), button=button, alt=alt, **self._pointer_fields(pos))
        if button == settings.RIGHT_BUTTON:
            return self.context_menu(pos, alt=alt)
        return down

    def context_menu(self, pos: Tuple[int, int], *, alt: bool = False) -> UIEvent:
        # Hit-test again: the pointerdown may have removed whatever was on top.
        event = self.dispatch(
            "contextmenu", self.hit_test(pos), button=settings.RIGHT_BUTTON, alt=alt, **self._pointer_fields(pos)
        )
        if not event.default_prevented:
            log.debug("contextmenu at %s left to the platform", event.pos)
        return event

    def pointer_up(self, pos: Tuple[int, int], button: int = settings.LEFT_BUTTON, *, alt: bool = False) -> UIEvent:
        return self.dispatch("pointerup", self.hit_test(pos), button=button, alt=alt, **self._pointer_fields(pos))

    def key_down(self, key: int, *, alt: bool = False) -> UIEvent:
        return self.dispatch("keydown", self, key=key, alt=alt, **self._pointer_fields(self._pointer_pos))

    def wheel(self, pos: Tuple[int, int], dy: int) -> UIEvent:
        event = self.dispatch("wheel", self.hit_test(pos), dy=int(dy), **self._pointer_fields(pos))
        if not event.default_prevented:
            self.scroll_by(0, -int(dy) * settings.WHEEL_STEP_PX)
        return event

    def feed(self, ev: pygame.event.Event) -> Optional[Union[UIEvent, Node]]:
        """Translate one pygame event; returns what was dispatched (or None)."""
        if ev.type == pygame.MOUSEMOTION:
            return self.pointer_move(ev.pos)
        if ev.type == pygame.MOUSEBUTTONDOWN:
            if ev.button in (4, 5):  # legacy wheel buttons; MOUSEWHEEL covers these
                return None
            return self.pointer_down(ev.pos, ev.button, alt=_alt_held(ev))
        if ev.type == pygame.MOUSEBUTTONUP:
            if ev.button in (4, 5):
                return None
            return self.pointer_up(ev.pos, ev.button, alt=_alt_held(ev))
        if ev.type == pygame.MOUSEWHEEL:
            return self.wheel(self._pointer_pos, ev.y)
        if ev.type == pygame.KEYDOWN:
            return self.key_down(ev.key, alt=_alt_held(ev))
        if ev.type == pygame.VIDEORESIZE:
            self.resize(ev.size)
        return None

    def tick(self) -> int:
        """Run due timers; call once per frame."""
        return self.scheduler.run_due()


def _alt_held(ev: pygame.event.Event) -> bool:
    mod = getattr(ev, "mod", None)
    if mod is None:
        mod = pygame.key.get_mods()
    return bool(mod & pygame.KMOD_ALT)
