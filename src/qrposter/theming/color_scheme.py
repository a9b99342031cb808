"""
Color scheme for the qrposter configurator window.

Semantic color names for the window chrome and status indicator, plus
helpers for the user-chosen ``#rrggbb`` poster colors.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from PyQt6.QtGui import QColor

logger = logging.getLogger(__name__)

HEX_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")


def normalize_hex_color(value: str) -> Optional[str]:
    """'#ABC' / 'aabbcc' / '#AaBbCc' -> '#aabbcc'. None if not a hex color."""
    match = HEX_COLOR_RE.match((value or "").strip())
    if not match:
        return None
    digits = match.group(1).lower()
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return f"#{digits}"


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    normalized = normalize_hex_color(value)
    if normalized is None:
        raise ValueError(f"Not a hex color: {value!r}")
    return tuple(int(normalized[i:i + 2], 16) for i in (1, 3, 5))


def relative_luminance(color: Tuple[int, int, int]) -> float:
    """WCAG relative luminance of an RGB tuple."""
    def gamma_correct(c):
        c = c / 255.0
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (gamma_correct(c) for c in color)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def readable_text_color(background_hex: str) -> str:
    """Black or white, whichever reads better on ``background_hex``."""
    try:
        luminance = relative_luminance(hex_to_rgb(background_hex))
    except ValueError:
        return "#000000"
    return "#000000" if luminance > 0.179 else "#ffffff"


@dataclass
class ColorScheme:
    """
    Color scheme for the configurator chrome with semantic color names.

    The poster preview does not use these; it is drawn with the colors the
    user picked.
    """

    # Window and Panel Backgrounds
    window_bg: Tuple[int, int, int] = (36, 36, 40)       # #242428 - Main window background
    panel_bg: Tuple[int, int, int] = (26, 26, 30)        # #1a1a1e - Form/preview panels
    border_color: Tuple[int, int, int] = (85, 85, 85)    # #555555 - Panel borders

    # Text Colors
    text_primary: Tuple[int, int, int] = (255, 255, 255)   # #ffffff - Primary text
    text_secondary: Tuple[int, int, int] = (170, 170, 170) # #aaaaaa - Hints, counters
    text_error: Tuple[int, int, int] = (255, 107, 107)     # #ff6b6b - Inline errors

    # Input Fields
    input_bg: Tuple[int, int, int] = (48, 48, 54)          # #303036 - Input background
    input_border: Tuple[int, int, int] = (90, 90, 100)     # #5a5a64 - Input border
    input_focus_border: Tuple[int, int, int] = (100, 108, 255) # #646cff - Focused input

    # Buttons
    button_bg: Tuple[int, int, int] = (100, 108, 255)      # #646cff - Primary action
    button_disabled_bg: Tuple[int, int, int] = (70, 70, 80) # #464650 - Busy/disabled
    button_text: Tuple[int, int, int] = (255, 255, 255)    # #ffffff - Button text

    # Status Indicators
    status_success: Tuple[int, int, int] = (0, 200, 83)    # #00c853 - Download ready
    status_warning: Tuple[int, int, int] = (255, 170, 0)   # #ffaa00 - Generating
    status_error: Tuple[int, int, int] = (255, 82, 82)     # #ff5252 - Failed
    status_info: Tuple[int, int, int] = (150, 150, 160)    # #9696a0 - Idle

    def to_qcolor(self, color_tuple: Tuple[int, int, int]) -> QColor:
        return QColor(*color_tuple)

    def to_hex(self, color_tuple: Tuple[int, int, int]) -> str:
        """
        Convert RGB tuple to hex color string.

        Args:
            color_tuple: (R, G, B) color tuple

        Returns:
            str: Hex color string (e.g., "#ffffff")
        """
        r, g, b = color_tuple[:3]
        return f"#{r:02x}{g:02x}{b:02x}"
