# ctxmenu/utils/logging_setup.py
from __future__ import annotations

import logging
import os
from datetime import datetime

FMT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
DATEFMT = "%H:%M:%S"


def configure_logging(level: int = logging.INFO, *, log_to_file: bool = False) -> None:
    """
    Configure root logging with a readable format and optional file sink.
    The file sink is off unless asked for; ctxmenu.demo turns it on from
    CTXMENU_LOG_FILE.
    Silences noisy third-party loggers by default.
    """
    logging.basicConfig(level=level, format=FMT, datefmt=DATEFMT)

    for noisy in ("PIL", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    if log_to_file:
        os.makedirs("logs", exist_ok=True)
        ts = datetime.now().strftime("%Y%m%d-%H%M%S")
        fh = logging.FileHandler(f"logs/ctxmenu-{ts}.log", encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(FMT, DATEFMT))
        logging.getLogger().addHandler(fh)


def get_logger(name: str) -> logging.Logger:
    """Package-scoped logger, e.g. get_logger("demo") -> 'ctxmenu.demo'."""
    if name.startswith("ctxmenu"):
        return logging.getLogger(name)
    return logging.getLogger(f"ctxmenu.{name}")
