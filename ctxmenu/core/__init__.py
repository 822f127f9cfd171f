from ctxmenu.core.base import BaseMenu, MenuState
from ctxmenu.core.items import DIVIDER, ActionItem, SubMenuItem, parse_items, sub_menu
from ctxmenu.core.menu import ContextMenu, attach
from ctxmenu.core.options import Callbacks, MenuOptions, SubMenuOptions
from ctxmenu.core.positioning import Placement, calculate_position, calculate_sub_position
from ctxmenu.core.runtime import MenuRuntime, get_runtime, reset_runtime
from ctxmenu.core.submenu import SubMenu

__all__ = [
    "BaseMenu",
    "MenuState",
    "DIVIDER",
    "ActionItem",
    "SubMenuItem",
    "parse_items",
    "sub_menu",
    "ContextMenu",
    "attach",
    "Callbacks",
    "MenuOptions",
    "SubMenuOptions",
    "Placement",
    "calculate_position",
    "calculate_sub_position",
    "MenuRuntime",
    "get_runtime",
    "reset_runtime",
    "SubMenu",
]
