# tests/test_sub_menu.py
from __future__ import annotations

import pygame
import pytest

import ctxmenu.utils.settings as settings
from ctxmenu import ContextMenu, SubMenu, sub_menu
from ctxmenu.ui.document import Node
from tests.util_menus import center, item, right_click


@pytest.fixture
def log():
    return []


@pytest.fixture
def menu(document, target, log):
    m = ContextMenu(document, target, [
        {"label": "Copy", "action": lambda: log.append("copy")},
        sub_menu("Share", [
            {"label": "Email", "action": lambda: log.append("email")},
            sub_menu("Social", [{"label": "Forum", "action": lambda: log.append("forum")}], delay={"open": 0}),
        ], delay={"open": 100, "close": 200}),
        sub_menu("Sort", [{"label": "Name", "action": lambda: log.append("name")}]),
        {"label": "Delete", "action": lambda: log.append("delete")},
    ], id="files")
    right_click(document, (150, 150))
    return m


def hover(document, node):
    document.pointer_move(center(document, node))


def wait(document, clock, ms):
    clock.advance(ms)
    document.tick()


def open_share(document, menu) -> SubMenu:
    document.pointer_down(center(document, item(menu, "Share")))
    return menu.opened_child


def test_opener_nodes_are_marked(menu):
    share = item(menu, "Share")
    assert share.attrs == {settings.ATTR_ITEM: "files", settings.ATTR_OPENER: "files"}
    assert settings.ATTR_OPENER not in item(menu, "Copy").attrs


def test_hover_opens_after_delay(document, clock, menu):
    hover(document, item(menu, "Share"))
    wait(document, clock, 99)
    assert menu.opened_child is None

    wait(document, clock, 1)
    sub = menu.opened_child
    assert isinstance(sub, SubMenu) and sub.is_open
    assert sub.parent is menu and sub.root is menu
    assert sub.node.parent is document
    assert [n.text for n in sub.node.children] == ["Email", "Social"]
    assert sub.node.attrs[settings.ATTR_MENU] == "files"


def test_sub_menu_sits_beside_its_opener(document, menu):
    sub = open_share(document, menu)
    share = item(menu, "Share")
    assert sub.node.rect.topleft == (share.rect.right, share.rect.top)


def test_leaving_before_delay_opens_nothing(document, clock, menu):
    hover(document, item(menu, "Share"))
    wait(document, clock, 50)
    hover(document, item(menu, "Copy"))
    wait(document, clock, 500)
    assert menu.opened_child is None
    assert not menu.has_pending("open")


def test_pointerdown_opens_immediately(document, menu):
    sub = open_share(document, menu)
    assert sub is not None and sub.is_open
    assert not menu.has_pending("open")
    assert menu.is_open


def test_only_one_sub_menu_per_parent(document, clock, menu):
    share = open_share(document, menu)
    hover(document, item(menu, "Sort"))
    assert not share.is_open
    assert menu.opened_child is None

    wait(document, clock, settings.SUBMENU_OPEN_DELAY_MS)
    sort = menu.opened_child
    assert sort is not None and sort.label == "Sort"
    assert not share.is_open
    opened = [n for n in document.children if settings.ATTR_MENU in n.attrs]
    assert opened == [menu.node, sort.node]


def test_close_is_leaf_first(document, menu, monkeypatch):
    sub = open_share(document, menu)
    order = []
    for name, m in (("root", menu), ("sub", sub)):
        original = m.listeners.remove
        monkeypatch.setattr(m.listeners, "remove", lambda o=original, n=name: order.append(n) or o())

    document.pointer_down((700, 500))
    assert order == ["sub", "root"]
    assert not sub.is_open and not menu.is_open
    assert sub.node is None and menu.node is None


def test_escape_closes_innermost_menu_first(document, clock, menu):
    share = open_share(document, menu)
    hover(document, item(share, "Social"))
    wait(document, clock, 0)
    social = share.opened_child
    assert document.listener_count("keydown") == 3

    document.key_down(pygame.K_ESCAPE)
    assert not social.is_open
    assert share.is_open and menu.is_open
    assert share.opened_child is None

    document.key_down(pygame.K_ESCAPE)
    assert not share.is_open and menu.is_open
    assert menu.opened_child is None
    assert document.listener_count("keydown") == 1

    document.key_down(pygame.K_ESCAPE)
    assert not menu.is_open
    assert document.listener_count() == 0


def test_other_keys_leave_sub_menus_open(document, menu):
    sub = open_share(document, menu)
    document.key_down(pygame.K_a)
    assert sub.is_open and menu.is_open


def test_clicks_in_sub_menu_keep_tree_open(document, menu):
    sub = open_share(document, menu)
    document.pointer_down(center(document, item(sub, "Email")))
    assert sub.is_open and menu.is_open


def test_close_delay_after_hovering_another_item(document, clock, menu):
    sub = open_share(document, menu)
    hover(document, item(menu, "Copy"))
    wait(document, clock, 199)
    assert sub.is_open

    hover(document, item(menu, "Share"))
    wait(document, clock, 500)
    assert sub.is_open

    hover(document, item(menu, "Delete"))
    wait(document, clock, 200)
    assert not sub.is_open
    assert menu.opened_child is None
    assert menu.is_open


def test_entering_sub_menu_cancels_close(document, clock, menu):
    sub = open_share(document, menu)
    hover(document, item(menu, "Copy"))
    hover(document, item(sub, "Email"))
    wait(document, clock, 500)
    assert sub.is_open


def test_action_in_sub_menu_closes_everything(document, clock, menu, log):
    sub = open_share(document, menu)
    wait(document, clock, 300)
    document.pointer_up(center(document, item(sub, "Email")))
    assert log == ["email"]
    assert not sub.is_open and not menu.is_open


def test_nested_sub_menus(document, clock, menu, log):
    share = open_share(document, menu)
    hover(document, item(share, "Social"))
    wait(document, clock, 0)
    social = share.opened_child
    assert social is not None and social.root is menu
    assert menu.open_chain() == [menu, share, social]

    # clicking the grand-child does not close anything
    document.pointer_down(center(document, item(social, "Forum")))
    assert social.is_open and share.is_open

    wait(document, clock, 300)
    document.pointer_up(center(document, item(social, "Forum")))
    assert log == ["forum"]
    assert not menu.is_open and not share.is_open and not social.is_open


def test_closing_parent_cancels_timers(document, clock, menu):
    sub = open_share(document, menu)
    hover(document, item(menu, "Copy"))
    assert sub.has_pending("close")
    hover(document, item(menu, "Sort"))
    assert menu.has_pending("open")
    menu.close()
    wait(document, clock, 1000)
    assert menu.opened_child is None
    assert document.scheduler.pending == 0


def test_sub_menus_live_in_the_overlay(document, target):
    menu = ContextMenu(document, target, [sub_menu("More", [{"label": "A"}])], overlay=True)
    right_click(document, (150, 150))
    document.pointer_down(center(document, item(menu, "More")))
    sub = menu.opened_child
    assert sub.node.parent is menu.overlay.node
    document.pointer_down((700, 500))
    assert not sub.is_open and not menu.overlay.active


def test_sub_menu_flips_at_the_right_edge(document):
    wide = document.append_child(Node(rect=(0, 0, 800, 600)))
    menu = ContextMenu(document, wide, [sub_menu("More", [{"label": "A"}])])
    right_click(document, (760, 100))
    assert menu.node.rect.x == 800 - 122
    document.pointer_down(center(document, item(menu, "More")))
    opener = item(menu, "More")
    assert menu.opened_child.node.rect.x == opener.rect.left - 122


def test_invalid_delay_opens_on_next_tick(document, target, clock):
    menu = ContextMenu(document, target, [sub_menu("More", [{"label": "A"}], delay={"open": "soon"})])
    right_click(document, (150, 150))
    hover(document, item(menu, "More"))
    assert menu.opened_child is None
    document.tick()
    assert menu.opened_child is not None


def test_sub_menu_callbacks(document, target):
    log = []
    menu = ContextMenu(document, target, [
        sub_menu("More", [{"label": "A"}], callback={"open": lambda m: log.append("open"), "close": lambda m: log.append("close")}),
    ])
    right_click(document, (150, 150))
    document.pointer_down(center(document, item(menu, "More")))
    menu.close()
    assert log == ["open", "close"]
