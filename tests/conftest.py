# tests/conftest.py
from __future__ import annotations
import os
import sys
from pathlib import Path
import pytest

# Ensure repo root is importable (so `import ctxmenu` works without installing)
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Headless Pygame setup
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402

from ctxmenu.core.runtime import reset_runtime  # noqa: E402
from ctxmenu.ui.document import Document, Node  # noqa: E402
from ctxmenu.utils.scheduler import Scheduler  # noqa: E402

CHAR_WIDTH = 8


@pytest.fixture(scope="session", autouse=True)
def _init_pygame():
    pygame.init()
    # a tiny hidden surface so font/surface paths work
    pygame.display.set_mode((1, 1))
    yield
    pygame.quit()


@pytest.fixture(autouse=True)
def _fresh_runtime():
    reset_runtime()
    yield
    reset_runtime()


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, start: int = 1000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def document(clock: FakeClock) -> Document:
    """800x600 viewport over an 800x1200 page, fixed-width text."""
    return Document(
        (800, 600),
        page_size=(800, 1200),
        scheduler=Scheduler(clock),
        measure_text=lambda s: CHAR_WIDTH * len(s),
    )


@pytest.fixture
def target(document: Document) -> Node:
    return document.append_child(Node("section", text="tile", rect=(100, 100, 200, 100)))
