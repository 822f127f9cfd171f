# tests/test_document.py
from __future__ import annotations

import pygame

from ctxmenu.ui.document import Document, Node


def _record(node, events, log):
    for name in events:
        node.on(name, lambda ev, n=node.text: log.append((ev.type, n)))


def test_hit_test_prefers_topmost_deepest(document):
    back = document.append_child(Node(text="back", rect=(0, 0, 300, 300)))
    inner = back.append_child(Node(text="inner", rect=(10, 10, 50, 50)))
    front = document.append_child(Node(text="front", rect=(200, 200, 100, 100)))
    assert document.hit_test((20, 20)) is inner
    assert document.hit_test((250, 250)) is front
    assert document.hit_test((500, 500)) is document
    front.visible = False
    assert document.hit_test((250, 250)) is back


def test_bubbling_and_stop_propagation(document):
    log = []
    outer = document.append_child(Node(text="outer", rect=(0, 0, 100, 100)))
    inner = outer.append_child(Node(text="inner", rect=(0, 0, 10, 10)))
    for n in (inner, outer):
        _record(n, ["pointerdown"], log)
    document.on("pointerdown", lambda ev: log.append(("pointerdown", "doc")))

    document.pointer_down((5, 5))
    assert log == [("pointerdown", "inner"), ("pointerdown", "outer"), ("pointerdown", "doc")]

    log.clear()
    inner.on("pointerdown", lambda ev: ev.stop_propagation())
    document.pointer_down((5, 5))
    assert log == [("pointerdown", "inner")]


def test_enter_leave_and_over(document):
    log = []
    a = document.append_child(Node(text="a", rect=(0, 0, 100, 100)))
    b = document.append_child(Node(text="b", rect=(200, 0, 100, 100)))
    for n in (a, b):
        _record(n, ["pointerenter", "pointerleave", "pointerover"], log)

    document.pointer_move((10, 10))
    document.pointer_move((20, 20))
    document.pointer_move((210, 10))
    assert log == [
        ("pointerover", "a"),
        ("pointerenter", "a"),
        ("pointerleave", "a"),
        ("pointerover", "b"),
        ("pointerenter", "b"),
    ]
    assert document.hovered is b


def test_right_button_dispatches_contextmenu_after_retesting(document):
    page = document.append_child(Node(text="page", rect=(0, 0, 100, 100)))
    cover = document.append_child(Node(text="cover", rect=(0, 0, 100, 100)))
    cover.on("pointerdown", lambda ev: cover.remove())
    seen = []
    page.on("contextmenu", lambda ev: seen.append(ev.target.text))

    event = document.pointer_down((50, 50), 3)
    assert event.type == "contextmenu"
    assert seen == ["page"]


def test_wheel_scrolls_unless_hidden(document):
    document.wheel((10, 10), -1)
    assert document.scroll_y == 40
    document.overflow = "hidden"
    document.wheel((10, 10), -1)
    assert document.scroll_y == 40
    assert document.scroll_to(0, 0, force=True)
    assert document.scroll == (0, 0)


def test_wheel_default_prevented(document):
    document.on("wheel", lambda ev: ev.prevent_default())
    document.wheel((10, 10), -3)
    assert document.scroll_y == 0


def test_scroll_is_bounded_by_page(document):
    document.scroll_to(0, 10_000)
    assert document.scroll_y == 600
    assert document.to_page((5, 5)) == (5, 605)


def test_clipping_node_scrolls_children(document):
    box = document.append_child(Node(rect=(0, 0, 100, 50)))
    child = box.append_child(Node(text="c", rect=(0, 0, 100, 100)))
    box.clips = True
    box.content_height = 100
    assert box.scroll_content(30)
    assert child.rect.y == -30
    assert not box.scroll_content(0)
    box.scroll_content(500)
    assert box.content_offset == 50
    assert document.hit_test((10, 60)) is document


def test_move_to_carries_children(document):
    box = document.append_child(Node(rect=(0, 0, 100, 50)))
    child = box.append_child(Node(rect=(5, 5, 10, 10)))
    box.move_to(100, 200)
    assert child.rect.topleft == (105, 205)


def test_remove_is_idempotent(document):
    node = document.append_child(Node())
    node.remove()
    node.remove()
    assert not node.is_connected
    assert node not in document.children


def test_feed_translates_pygame_events(document):
    hits = []
    document.append_child(Node(text="n", rect=(0, 0, 50, 50))).on("pointerdown", lambda ev: hits.append(ev.button))
    document.feed(pygame.event.Event(pygame.MOUSEMOTION, pos=(10, 10), rel=(0, 0), buttons=(0, 0, 0)))
    document.feed(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(10, 10), button=1))
    document.feed(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(10, 10), button=4))
    keys = []
    document.on("keydown", lambda ev: keys.append((ev.key, ev.alt)))
    document.feed(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE, mod=pygame.KMOD_LALT))
    assert hits == [1]
    assert keys == [(pygame.K_ESCAPE, True)]


def test_resize_keeps_scroll_in_range():
    doc = Document((800, 600), page_size=(800, 1000))
    doc.scroll_to(0, 400)
    doc.resize((800, 900))
    assert doc.scroll_y == 100
    assert doc.viewport_rect() == pygame.Rect(0, 100, 800, 900)
