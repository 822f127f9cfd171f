# ctxmenu/ui/renderer.py
from __future__ import annotations

from typing import Optional

import pygame

import ctxmenu.utils.settings as settings
from ctxmenu.ui.document import Document, Node
from ctxmenu.ui.layout import is_divider, is_opener
from ctxmenu.ui.menu_theme import MenuTheme, make_font


class MenuRenderer:
    """Draws the menu nodes of a Document; anything else in the tree is left to the app."""

    def __init__(self, theme: Optional[MenuTheme] = None) -> None:
        self.theme = theme or MenuTheme()
        self._font: Optional[pygame.font.Font] = None

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = make_font(self.theme)
        return self._font

    def draw(self, screen: pygame.Surface, document: Document) -> None:
        hovered = document.hovered
        for child in list(document.children):
            self._draw_node(screen, document, child, hovered)

    # ---- internals ---------------------------------------------------------

    def _draw_node(self, screen: pygame.Surface, doc: Document, node: Node, hovered: Optional[Node]) -> None:
        if not node.visible:
            return
        rect = doc.to_viewport(node.rect)

        if settings.ATTR_OVERLAY in node.attrs:
            self._draw_overlay(screen, rect)
        elif settings.ATTR_MENU in node.attrs:
            self._draw_menu(screen, doc, node, rect, hovered)
            return  # items drawn inside the panel clip
        for child in list(node.children):
            self._draw_node(screen, doc, child, hovered)

    def _draw_overlay(self, screen: pygame.Surface, rect: pygame.Rect) -> None:
        if self.theme.overlay.a == 0:
            return
        shade = pygame.Surface(rect.size, pygame.SRCALPHA)
        shade.fill(self.theme.overlay)
        screen.blit(shade, rect)

    def _draw_menu(self, screen: pygame.Surface, doc: Document, menu: Node, rect: pygame.Rect, hovered: Optional[Node]) -> None:
        t = self.theme
        pygame.draw.rect(screen, t.bg, rect, border_radius=t.radius)

        previous_clip = screen.get_clip()
        screen.set_clip(rect.clip(previous_clip))
        for item in menu.children:
            item_rect = doc.to_viewport(item.rect)
            if is_divider(item):
                y = item_rect.centery
                pygame.draw.line(screen, t.divider, (item_rect.left + t.padding, y), (item_rect.right - t.padding, y))
                continue
            if item is hovered:
                pygame.draw.rect(screen, t.hover, item_rect, border_radius=t.radius)
            text_surface = self.font.render(item.text, True, t.fg)
            text_rect = text_surface.get_rect(x=item_rect.x + t.padding, centery=item_rect.centery)
            screen.blit(text_surface, text_rect)
            if is_opener(item):
                self._draw_arrow(screen, item_rect)
        screen.set_clip(previous_clip)

        pygame.draw.rect(screen, t.border, rect, t.border_width, border_radius=t.radius)

    def _draw_arrow(self, screen: pygame.Surface, item_rect: pygame.Rect) -> None:
        size = 4
        cx = item_rect.right - self.theme.padding - size
        cy = item_rect.centery
        points = [(cx - size, cy - size), (cx + size // 2, cy), (cx - size, cy + size)]
        pygame.draw.polygon(screen, self.theme.fg, points)
