from __future__ import annotations
from dataclasses import dataclass, field
import pygame

import ctxmenu.utils.settings as settings


@dataclass(frozen=True)
class MenuTheme:
    # Use default_factory for mutable pygame.Color instances
    bg: pygame.Color = field(default_factory=lambda: pygame.Color(*settings.CONTEXT_MENU_BG_COLOR))
    fg: pygame.Color = field(default_factory=lambda: pygame.Color(*settings.CONTEXT_MENU_TEXT_COLOR))
    hover: pygame.Color = field(default_factory=lambda: pygame.Color(*settings.CONTEXT_MENU_HOVER_BG_COLOR))
    border: pygame.Color = field(default_factory=lambda: pygame.Color(*settings.CONTEXT_MENU_BORDER_COLOR))
    divider: pygame.Color = field(default_factory=lambda: pygame.Color(*settings.CONTEXT_MENU_DIVIDER_COLOR))
    overlay: pygame.Color = field(default_factory=lambda: pygame.Color(*settings.OVERLAY_COLOR))

    padding: int = settings.CONTEXT_MENU_PADDING
    item_height: int = settings.CONTEXT_MENU_ITEM_HEIGHT
    divider_height: int = settings.CONTEXT_MENU_DIVIDER_HEIGHT
    min_width: int = settings.CONTEXT_MENU_MIN_WIDTH
    arrow_width: int = settings.CONTEXT_MENU_ARROW_WIDTH
    border_width: int = settings.CONTEXT_MENU_BORDER
    radius: int = 3
    font_name: str = "Arial"
    font_size: int = settings.CONTEXT_MENU_FONT_SIZE


def make_font(theme: MenuTheme) -> pygame.font.Font:
    """Create a font safely even when system fonts are limited (CI)."""
    if not pygame.font.get_init():
        pygame.font.init()
    try:
        return pygame.font.SysFont(theme.font_name, theme.font_size)
    except (pygame.error, OSError):
        return pygame.font.Font(None, theme.font_size)
