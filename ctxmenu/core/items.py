# ctxmenu/core/items.py
"""
Item descriptors: what a menu shows, independent of any nodes.

- DIVIDER          : a separator line
- ActionItem       : label + zero-argument callback
- SubMenuItem      : label + nested items + sub-menu options (delays etc.)

parse_items() also accepts the loose forms handy in app code:
    "-", "—", "divider", "separator"            -> DIVIDER
    {"label": "Copy", "action": fn}              -> ActionItem
    {"label": "More", "items": [...], "delay": {"open": 100}}  -> SubMenuItem
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ctxmenu.core.options import SubMenuOptions
from ctxmenu.errors import MenuConfigError

_DIVIDER_WORDS = {"-", "—", "divider", "separator"}


class Divider:
    __slots__ = ()

    def __repr__(self) -> str:
        return "DIVIDER"


DIVIDER = Divider()


@dataclass(frozen=True)
class ActionItem:
    label: str
    action: Callable[[], Any] = lambda: None

    def __post_init__(self) -> None:
        if not callable(self.action):
            raise MenuConfigError(f"item {self.label!r}: action must be callable")


@dataclass(frozen=True)
class SubMenuItem:
    label: str
    items: Tuple["Item", ...] = ()
    options: SubMenuOptions = field(default_factory=SubMenuOptions)


Item = Union[Divider, ActionItem, SubMenuItem]


def sub_menu(label: str, items: Iterable[Any], **options: Any) -> SubMenuItem:
    """Build a sub-menu opener item; options as for SubMenuOptions (delay, transfer, ...)."""
    return SubMenuItem(label=label, items=tuple(parse_items(items)), options=SubMenuOptions.from_mapping(options))


def parse_item(raw: Any) -> Item:
    if isinstance(raw, (Divider, ActionItem, SubMenuItem)):
        return raw
    if isinstance(raw, str):
        if raw.strip() in _DIVIDER_WORDS:
            return DIVIDER
        raise MenuConfigError(f"a bare string item must be a divider marker, got {raw!r}")
    if isinstance(raw, Mapping):
        return _from_mapping(raw)
    raise MenuConfigError(f"cannot build a menu item from {type(raw).__name__}")


def parse_items(raw: Optional[Iterable[Any]]) -> List[Item]:
    if raw is None:
        return []
    if isinstance(raw, (str, Mapping)):
        raise MenuConfigError("items must be a sequence of item descriptors")
    return [parse_item(el) for el in raw]


def _from_mapping(d: Mapping[str, Any]) -> Item:
    data: Dict[str, Any] = dict(d)
    label = data.pop("label", data.pop("title", None))
    if label is None:
        if data.get("divider") or data.get("type") == "divider":
            return DIVIDER
        raise MenuConfigError(f"item needs a label: {dict(d)!r}")
    if not isinstance(label, str):
        raise MenuConfigError(f"item label must be a string, got {type(label).__name__}")

    children = data.pop("items", data.pop("sub_items", None))
    if children is not None:
        return sub_menu(label, children, **data)

    action = data.pop("action", data.pop("function", None))
    if data:
        raise MenuConfigError(f"item {label!r}: unexpected keys {sorted(data)}")
    return ActionItem(label, action) if action is not None else ActionItem(label)
