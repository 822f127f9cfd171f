"""
ctxmenu: right-click context menus with nested sub-menus for pygame.

    doc = Document((800, 600))
    tile = doc.append_child(Node("div", rect=(40, 40, 200, 120)))
    attach(doc, tile, [{"label": "Copy", "action": copy}], overlay=True)
"""
from ctxmenu.core import (
    DIVIDER,
    ActionItem,
    Callbacks,
    ContextMenu,
    MenuOptions,
    MenuState,
    SubMenu,
    SubMenuItem,
    SubMenuOptions,
    attach,
    calculate_position,
    calculate_sub_position,
    get_runtime,
    reset_runtime,
    sub_menu,
)
from ctxmenu.errors import MenuConfigError, MenuError
from ctxmenu.ui import Document, MenuRenderer, MenuTheme, Node, UIEvent

__version__ = "0.1.0"

__all__ = [
    "DIVIDER",
    "ActionItem",
    "Callbacks",
    "ContextMenu",
    "MenuOptions",
    "MenuState",
    "SubMenu",
    "SubMenuItem",
    "SubMenuOptions",
    "attach",
    "calculate_position",
    "calculate_sub_position",
    "get_runtime",
    "reset_runtime",
    "sub_menu",
    "MenuConfigError",
    "MenuError",
    "Document",
    "MenuRenderer",
    "MenuTheme",
    "Node",
    "UIEvent",
]
