# ctxmenu/core/options.py
"""
Menu configuration.

Each menu gets one flat options object built by merging a literal defaults
mapping with the caller's overrides. The older camelCase spellings
(noRecreate, defaultOnAlt, verticalMargin) are accepted as aliases.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Union

import ctxmenu.utils.settings as settings
from ctxmenu.core.positioning import Transfer, transfer_axes
from ctxmenu.errors import MenuConfigError

log = logging.getLogger(__name__)

MenuCallback = Callable[[Any], None]
DisabledFlag = Union[bool, Callable[[Any], bool]]

DEFAULT_OPTIONS: Dict[str, Any] = {
    "id": "",
    "overlay": False,
    "transfer": False,
    "scrolling": False,
    "disabled": False,
    "no_recreate": False,
    "default_on_alt": True,
    "vertical_margin": settings.VERTICAL_MARGIN,
    "callback": None,
}

DEFAULT_SUB_OPTIONS: Dict[str, Any] = {
    "id": "",
    "transfer": True,
    "vertical_margin": settings.VERTICAL_MARGIN,
    "callback": None,
    "delay": {"open": settings.SUBMENU_OPEN_DELAY_MS, "close": settings.SUBMENU_CLOSE_DELAY_MS},
}

_ALIASES = {
    "noRecreate": "no_recreate",
    "defaultOnAlt": "default_on_alt",
    "verticalMargin": "vertical_margin",
    "name": "id",
}


def _noop(_menu: Any) -> None:
    return None


@dataclass(frozen=True)
class Callbacks:
    """Open/close hooks; both receive the menu instance."""
    open: MenuCallback = _noop
    close: MenuCallback = _noop

    @classmethod
    def normalize(cls, value: Any) -> "Callbacks":
        """
        Accepts None, a single callable (the open hook) or a mapping with
        "open"/"close" (or the older "opening"/"closure") entries.
        """
        if value is None:
            return cls()
        if isinstance(value, Callbacks):
            return value
        if callable(value):
            return cls(open=value)
        if isinstance(value, Mapping):
            on_open = value.get("open", value.get("opening"))
            on_close = value.get("close", value.get("closure"))
            for name, fn in (("open", on_open), ("close", on_close)):
                if fn is not None and not callable(fn):
                    raise MenuConfigError(f"callback {name!r} must be callable, got {type(fn).__name__}")
            return cls(open=on_open or _noop, close=on_close or _noop)
        raise MenuConfigError(f"callback must be a callable or a mapping, got {type(value).__name__}")


def coerce_delay(value: Any) -> int:
    """Milliseconds as a non-negative int; anything unusable becomes 0."""
    try:
        ms = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(ms) or math.isinf(ms) or ms < 0:
        return 0
    return int(ms)


def _merge(defaults: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(defaults)
    for key, value in overrides.items():
        name = _ALIASES.get(key, key)
        if name not in defaults:
            raise MenuConfigError(f"unknown option {key!r}")
        merged[name] = value
    return merged


def _margin(value: Any) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        raise MenuConfigError(f"vertical_margin must be an int, got {value!r}") from None


@dataclass
class MenuOptions:
    """Options of a root menu."""
    id: str = ""
    overlay: bool = False
    transfer: Transfer = False
    scrolling: bool = False
    disabled: DisabledFlag = False
    no_recreate: bool = False
    default_on_alt: bool = True
    vertical_margin: int = settings.VERTICAL_MARGIN
    callbacks: Callbacks = field(default_factory=Callbacks)

    @classmethod
    def from_mapping(cls, overrides: Optional[Mapping[str, Any]] = None) -> "MenuOptions":
        merged = _merge(DEFAULT_OPTIONS, overrides or {})
        transfer_axes(merged["transfer"])
        disabled = merged["disabled"]
        opts = cls(
            id=str(merged["id"] or ""),
            overlay=bool(merged["overlay"]),
            transfer=merged["transfer"],
            scrolling=bool(merged["scrolling"]),
            disabled=disabled if callable(disabled) else bool(disabled),
            no_recreate=bool(merged["no_recreate"]),
            default_on_alt=bool(merged["default_on_alt"]),
            vertical_margin=_margin(merged["vertical_margin"]),
            callbacks=Callbacks.normalize(merged["callback"]),
        )
        if opts.no_recreate and not opts.overlay:
            log.warning("menu %r: no_recreate only works together with overlay=True; ignoring it", opts.id)
        return opts

    @property
    def ignores_right_button(self) -> bool:
        """Outside right-button presses leave the menu open (overlay + no_recreate)."""
        return self.overlay and self.no_recreate

    @property
    def locks_scroll(self) -> bool:
        return self.overlay or not self.scrolling

    def is_disabled(self, menu: Any) -> bool:
        if callable(self.disabled):
            return bool(self.disabled(menu))
        return bool(self.disabled)


@dataclass
class SubMenuOptions:
    """Options of a nested menu; delays are in milliseconds."""
    id: str = ""
    transfer: Transfer = True
    vertical_margin: int = settings.VERTICAL_MARGIN
    open_delay: int = settings.SUBMENU_OPEN_DELAY_MS
    close_delay: int = settings.SUBMENU_CLOSE_DELAY_MS
    callbacks: Callbacks = field(default_factory=Callbacks)

    @classmethod
    def from_mapping(cls, overrides: Optional[Mapping[str, Any]] = None) -> "SubMenuOptions":
        merged = _merge(DEFAULT_SUB_OPTIONS, overrides or {})
        transfer_axes(merged["transfer"])
        delay = merged["delay"]
        if isinstance(delay, Mapping):
            open_delay = delay.get("open", delay.get("opening", settings.SUBMENU_OPEN_DELAY_MS))
            close_delay = delay.get("close", delay.get("closure", settings.SUBMENU_CLOSE_DELAY_MS))
        else:
            open_delay = close_delay = delay
        return cls(
            id=str(merged["id"] or ""),
            transfer=merged["transfer"],
            vertical_margin=_margin(merged["vertical_margin"]),
            open_delay=coerce_delay(open_delay),
            close_delay=coerce_delay(close_delay),
            callbacks=Callbacks.normalize(merged["callback"]),
        )
