# ctxmenu/core/positioning.py
"""
Where a menu goes.

Both functions are pure: they take viewport-relative inputs and return a
Placement in document coordinates (scroll offset already added).

Overflow handling per axis, when the menu's far edge would leave the viewport:
- clamp (default): pull the menu back so its far edge sits on the viewport edge
- transfer: flip it to the other side of the anchor point

A menu that still starts above the viewport is pushed down to
`vertical_margin`; if it is also taller than the viewport minus both margins
it gets a `max_height` and its content scrolls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

import pygame

import ctxmenu.utils.settings as settings
from ctxmenu.errors import MenuConfigError

Transfer = Union[bool, str, None]


@dataclass(frozen=True)
class Placement:
    x: int
    y: int
    max_height: Optional[int] = None

    @property
    def topleft(self) -> Tuple[int, int]:
        return self.x, self.y


def transfer_axes(transfer: Transfer) -> Tuple[bool, bool]:
    """Normalize the transfer option to (flip_x, flip_y)."""
    if transfer is True or transfer == "both":
        return True, True
    if transfer == "x":
        return True, False
    if transfer == "y":
        return False, True
    if transfer is False or transfer is None or transfer == "":
        return False, False
    raise MenuConfigError(f"transfer must be a bool or one of 'x', 'y', 'both', got {transfer!r}")


def _clamp_point(point: Tuple[int, int], viewport: Tuple[int, int]) -> Tuple[int, int]:
    vw, vh = viewport
    return max(0, min(int(point[0]), vw)), max(0, min(int(point[1]), vh))


def _fit_vertical(y: int, height: int, viewport_h: int, margin: int) -> Tuple[int, Optional[int]]:
    if y >= 0:
        return y, None
    max_height = None
    if height > viewport_h - margin * 2:
        max_height = max(0, viewport_h - margin * 2)
    return margin, max_height


def calculate_position(
    point: Tuple[int, int],
    size: Tuple[int, int],
    viewport: Tuple[int, int],
    scroll: Tuple[int, int] = (0, 0),
    *,
    transfer: Transfer = False,
    vertical_margin: int = settings.VERTICAL_MARGIN,
) -> Placement:
    """Top-left for a root menu opened at a pointer `point` (viewport coords)."""
    flip_x, flip_y = transfer_axes(transfer)
    px, py = _clamp_point(point, viewport)
    width, height = int(size[0]), int(size[1])
    vw, vh = int(viewport[0]), int(viewport[1])

    x, y = px, py
    if px + width > vw:
        x = px - width if flip_x else vw - width
    if py + height > vh:
        y = py - height if flip_y else vh - height

    y, max_height = _fit_vertical(y, height, vh, vertical_margin)
    x = max(0, x)
    return Placement(x + int(scroll[0]), y + int(scroll[1]), max_height)


def calculate_sub_position(
    anchor: pygame.Rect,
    size: Tuple[int, int],
    viewport: Tuple[int, int],
    scroll: Tuple[int, int] = (0, 0),
    *,
    transfer: Transfer = True,
    vertical_margin: int = settings.VERTICAL_MARGIN,
) -> Placement:
    """
    Top-left for a sub-menu beside its opener item. `anchor` is the opener's
    rect in viewport coordinates; the menu starts at its right/top edges and
    flips to its left/bottom edges.
    """
    flip_x, flip_y = transfer_axes(transfer)
    width, height = int(size[0]), int(size[1])
    vw, vh = int(viewport[0]), int(viewport[1])

    x, y = anchor.right, anchor.top
    if x + width > vw:
        x = anchor.left - width if flip_x else vw - width
    if y + height > vh:
        y = anchor.bottom - height if flip_y else vh - height

    y, max_height = _fit_vertical(y, height, vh, vertical_margin)
    x = max(0, x)
    return Placement(x + int(scroll[0]), y + int(scroll[1]), max_height)
