# ctxmenu/ui/layout.py
from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

import pygame

import ctxmenu.utils.settings as settings

if TYPE_CHECKING:
    from ctxmenu.ui.document import Document, Node


def is_divider(node: "Node") -> bool:
    return settings.ATTR_DIVIDER in node.attrs


def is_opener(node: "Node") -> bool:
    return settings.ATTR_OPENER in node.attrs


def layout_menu(container: "Node", document: "Document") -> Tuple[int, int]:
    """
    Size a menu container from its items and stack the items inside it,
    starting at the container's current top-left. Returns (width, height).

    All items share the width of the widest label (plus room for the
    sub-menu arrow on openers); dividers are thinner than items.
    """
    theme = document.theme
    b = theme.border_width

    label_w = 0
    for node in container.children:
        if is_divider(node):
            continue
        w = document.measure_text(node.text)
        if is_opener(node):
            w += theme.arrow_width
        label_w = max(label_w, w)

    width = max(theme.min_width, label_w + theme.padding * 2) + b * 2
    x0, y0 = container.rect.topleft
    y = b
    for node in container.children:
        h = theme.divider_height if is_divider(node) else theme.item_height
        node.rect = pygame.Rect(x0 + b, y0 + y, width - b * 2, h)
        y += h
    height = y + b

    container.rect.size = (width, height)
    container.content_height = height
    container.content_offset = 0
    return width, height
