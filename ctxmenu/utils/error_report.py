# ctxmenu/utils/error_report.py
from __future__ import annotations

"""
Minimal crash capture for the demo loop:
- write logs/crash_YYYYMMDD_HHMMSS.txt
- try to save the last frame next to it if a pygame display exists
Install early in the entrypoint, before the loop starts.
"""

import os
import sys
import time
import traceback

import pygame


def _log_dir() -> str:
    d = os.path.join(os.getcwd(), "logs")
    os.makedirs(d, exist_ok=True)
    return d


def write_crash_file(tb: str) -> str:
    stamp = time.strftime("%Y%m%d_%H%M%S")
    path = os.path.join(_log_dir(), f"crash_{stamp}.txt")
    with open(path, "w", encoding="utf-8") as f:
        f.write(tb)
    return path


def _save_last_frame(stamp_path: str) -> None:
    if not pygame.get_init():
        return
    surf = pygame.display.get_surface()
    if surf is None:
        return
    pygame.image.save(surf, stamp_path.replace(".txt", ".png"))


def install_excepthook(save_frame: bool = True) -> None:
    def _hook(exc_type, exc, tb):
        full = "".join(traceback.format_exception(exc_type, exc, tb))
        path = write_crash_file(full)
        print(f"\n[Crash] Unhandled exception written to {path}\n", file=sys.stderr)
        if save_frame:
            try:
                _save_last_frame(path)
            except pygame.error:
                pass
        # Re-raise so debuggers/CI still fail properly
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _hook
