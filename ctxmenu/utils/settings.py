# ctxmenu/utils/settings.py
"""
Centralized settings and constants for context menus.

Option objects (see ctxmenu.core.options) start from these values and merge
the caller's overrides on top, so changing a constant here changes the
default for every menu constructed afterwards.
"""

# --- Timing (milliseconds) ---
SUBMENU_OPEN_DELAY_MS = 250
SUBMENU_CLOSE_DELAY_MS = 250
ACTIVATION_GRACE_MS = 200  # ignore item pointer-ups this soon after opening

# --- Positioning ---
VERTICAL_MARGIN = 10   # gap kept above/below a menu that is taller than the viewport
WHEEL_STEP_PX = 40     # document/menu scroll per wheel notch

# --- Styling hooks (node attributes) ---
ATTR_MENU = "data-cm"
ATTR_ITEM = "data-cm-item"
ATTR_OPENER = "data-cm-opener"
ATTR_DIVIDER = "data-cm-divider"
ATTR_OVERLAY = "data-cm-overlay"
VISIBLE_CLASS = "visible"

# --- Input ---
RIGHT_BUTTON = 3
LEFT_BUTTON = 1

# --- Layout ---
CONTEXT_MENU_PADDING = 8
CONTEXT_MENU_ITEM_HEIGHT = 24
CONTEXT_MENU_DIVIDER_HEIGHT = 9
CONTEXT_MENU_MIN_WIDTH = 120
CONTEXT_MENU_ARROW_WIDTH = 16
CONTEXT_MENU_BORDER = 1

# --- Colors ---
CONTEXT_MENU_BG_COLOR = (40, 40, 40)
CONTEXT_MENU_BORDER_COLOR = (150, 150, 150)
CONTEXT_MENU_HOVER_BG_COLOR = (60, 60, 80)
CONTEXT_MENU_TEXT_COLOR = (240, 240, 240)
CONTEXT_MENU_DIVIDER_COLOR = (90, 90, 96)
CONTEXT_MENU_FONT_SIZE = 16
OVERLAY_COLOR = (0, 0, 0, 0)  # fully transparent; raise alpha to dim the page

# --- Demo window ---
SCREEN_WIDTH = 960
SCREEN_HEIGHT = 600
FPS = 60
BG_COLOR = (18, 18, 22)
