# ctxmenu/errors.py
from __future__ import annotations


class MenuError(Exception):
    """Base class for errors raised by ctxmenu."""


class MenuConfigError(MenuError, ValueError):
    """Unknown option names, malformed item descriptors or bad option values."""
