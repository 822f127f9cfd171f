# tests/test_render_demo.py
from __future__ import annotations

import pygame

import ctxmenu.utils.settings as settings
from ctxmenu import ContextMenu, MenuRenderer, sub_menu
from tests.util_menus import center, item, right_click


def test_renderer_paints_open_menus(document, target):
    menu = ContextMenu(document, target, [{"label": "Copy"}, "-", sub_menu("More", [{"label": "A"}])], overlay=True)
    right_click(document, (150, 150))
    document.pointer_down(center(document, item(menu, "More")))

    screen = pygame.Surface(document.viewport_size)
    screen.fill((0, 0, 0))
    MenuRenderer(document.theme).draw(screen, document)

    rect = document.to_viewport(item(menu, "Copy").rect)
    assert tuple(screen.get_at((rect.right - 4, rect.centery)))[:3] == settings.CONTEXT_MENU_BG_COLOR
    sub_rect = document.to_viewport(menu.opened_child.node.rect)
    assert tuple(screen.get_at((sub_rect.right - 4, sub_rect.centery)))[:3] == settings.CONTEXT_MENU_BG_COLOR
    # nothing drawn outside the menus: the overlay is fully transparent
    assert tuple(screen.get_at((700, 500)))[:3] == (0, 0, 0)


def test_demo_builds_and_handles_a_right_click():
    from ctxmenu.demo import Demo

    demo = Demo((640, 400))
    nested, plain, disabled = demo.menus
    tile = demo.tiles[0]
    pos = demo.document.to_viewport(tile.rect).center

    demo.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=pos, rel=(0, 0), buttons=(0, 0, 0)))
    demo.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=3))
    demo.document.tick()
    demo.draw()
    assert nested.is_open and not plain.is_open and not disabled.is_open

    demo.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE, mod=0))
    assert not nested.is_open
    for menu in demo.menus:
        menu.detach()
