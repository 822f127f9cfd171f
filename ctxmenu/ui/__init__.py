"""Host surface for menus: node tree, event delivery, layout and drawing."""
from .document import Document, Node
from .events import EventTarget, UIEvent
from .menu_theme import MenuTheme, make_font
from .renderer import MenuRenderer

__all__ = ["Document", "Node", "EventTarget", "UIEvent", "MenuTheme", "make_font", "MenuRenderer"]
