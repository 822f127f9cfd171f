# ctxmenu/demo.py
"""
Interactive demo: three tiles, each with its own right-click menu.

- "Nested"   : overlay + transfer, sub-menus two levels deep
- "Plain"    : no overlay, page keeps scrolling
- "Disabled" : never opens; the native menu is still suppressed

    python main.py            # or: python -m ctxmenu.demo
    CTXMENU_LOG_FILE=1 python main.py   # also log to logs/
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional, Tuple

import pygame

import ctxmenu.utils.settings as settings
from ctxmenu.core import ContextMenu, sub_menu
from ctxmenu.ui import Document, MenuRenderer, Node, make_font
from ctxmenu.utils.error_report import install_excepthook
from ctxmenu.utils.logging_setup import configure_logging, get_logger

log = get_logger("demo")

TILE_COLOR = (52, 58, 72)
TILE_TEXT = (220, 220, 230)


def configure_environment(headless: Optional[bool] = None) -> None:
    """SDL defaults that work on Linux, CI and without a display."""
    ci = os.getenv("CI", "").lower() == "true"
    no_display = not (os.getenv("DISPLAY") or os.getenv("WAYLAND_DISPLAY"))
    if headless is None:
        headless = ci or no_display
    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
    if headless:
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


class Demo:
    """Owns the window, the document and the menus; run() is the frame loop."""

    def __init__(self, size: Tuple[int, int] = (settings.SCREEN_WIDTH, settings.SCREEN_HEIGHT)) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode(size, pygame.RESIZABLE)
        pygame.display.set_caption("ctxmenu demo")
        self.clock = pygame.time.Clock()
        self.running = True
        self.status = "Right-click a tile"

        # Twice the window height so the scroll lock has something to lock.
        self.document = Document(size, page_size=(size[0], size[1] * 2))
        self.renderer = MenuRenderer(self.document.theme)
        self.font = make_font(self.document.theme)
        self.tiles: List[Node] = []
        self.menus: List[ContextMenu] = []
        self._build()

    def _say(self, text: str):
        def action() -> None:
            self.status = text
            log.info(text)
        return action

    def _tile(self, label: str, rect: Tuple[int, int, int, int]) -> Node:
        tile = self.document.append_child(Node("section", text=label, rect=rect))
        self.tiles.append(tile)
        return tile

    def _build(self) -> None:
        nested = self._tile("Nested", (40, 60, 260, 160))
        plain = self._tile("Plain", (340, 60, 260, 160))
        disabled = self._tile("Disabled", (640, 60, 260, 160))

        self.menus.append(ContextMenu(self.document, nested, [
            {"label": "Open", "action": self._say("Open")},
            {"label": "Rename", "action": self._say("Rename")},
            "-",
            sub_menu("Share", [
                {"label": "Email", "action": self._say("Share by email")},
                {"label": "Link", "action": self._say("Copy link")},
                sub_menu("Social", [
                    {"label": "Mastodon", "action": self._say("Toot")},
                    {"label": "Forum", "action": self._say("Post")},
                ], delay={"open": 150, "close": 300}),
            ]),
            sub_menu("Sort by", [
                {"label": "Name", "action": self._say("Sort by name")},
                {"label": "Date", "action": self._say("Sort by date")},
            ]),
            "-",
            {"label": "Delete", "action": self._say("Delete")},
        ], id="nested", overlay=True, transfer=True, no_recreate=True, callback={
            "open": lambda m: log.debug("nested menu opened"),
            "close": lambda m: log.debug("nested menu closed"),
        }))

        self.menus.append(ContextMenu(self.document, plain, [
            {"label": "Copy", "action": self._say("Copy")},
            {"label": "Paste", "action": self._say("Paste")},
        ], id="plain", scrolling=True))

        self.menus.append(ContextMenu(self.document, disabled, [
            {"label": "Never shown", "action": self._say("unreachable")},
        ], id="disabled", disabled=True))

    # ---- loop ---------------------------------------------------------------

    def handle_event(self, ev: pygame.event.Event) -> None:
        if ev.type == pygame.QUIT:
            self.running = False
            return
        if ev.type == pygame.VIDEORESIZE:
            self.screen = pygame.display.set_mode(ev.size, pygame.RESIZABLE)
        self.document.feed(ev)

    def draw(self) -> None:
        self.screen.fill(settings.BG_COLOR)
        doc = self.document
        for tile in self.tiles:
            rect = doc.to_viewport(tile.rect)
            pygame.draw.rect(self.screen, TILE_COLOR, rect, border_radius=6)
            label = self.font.render(tile.text, True, TILE_TEXT)
            self.screen.blit(label, label.get_rect(center=rect.center))
        status = self.font.render(self.status, True, TILE_TEXT)
        self.screen.blit(status, (12, doc.viewport_height - status.get_height() - 10))
        self.renderer.draw(self.screen, doc)

    def run(self, max_frames: Optional[int] = None) -> int:
        frames = 0
        while self.running:
            for ev in pygame.event.get():
                self.handle_event(ev)
            self.document.tick()
            self.draw()
            pygame.display.flip()
            self.clock.tick(settings.FPS)
            frames += 1
            if max_frames is not None and frames >= max_frames:
                break
        for menu in self.menus:
            menu.detach()
        pygame.quit()
        return 0


def run(max_frames: Optional[int] = None, *, level: int = logging.INFO, log_to_file: Optional[bool] = None) -> int:
    """
    Start the demo window. Logs go to the console; set CTXMENU_LOG_FILE=1
    (or pass log_to_file=True) to also write logs/ctxmenu-<timestamp>.log.
    """
    if log_to_file is None:
        log_to_file = os.getenv("CTXMENU_LOG_FILE", "") == "1"
    configure_environment()
    configure_logging(level, log_to_file=log_to_file)
    install_excepthook()
    return Demo().run(max_frames)


if __name__ == "__main__":
    raise SystemExit(run())
