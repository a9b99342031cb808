"""
Theming and styling system.

Color scheme and stylesheet generation for the configurator window, plus
hex color helpers for the poster colors.
"""

from .color_scheme import (
    ColorScheme,
    normalize_hex_color,
    hex_to_rgb,
    relative_luminance,
    readable_text_color,
)
from .style_generator import StyleSheetGenerator

__all__ = [
    "ColorScheme",
    "normalize_hex_color",
    "hex_to_rgb",
    "relative_luminance",
    "readable_text_color",
    "StyleSheetGenerator",
]
