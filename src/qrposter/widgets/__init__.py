"""
Configurator widgets.

Live poster preview, color swatches, logo picker and the request status
indicator.
"""

from .poster_preview import (
    SHOP_NAME_PLACEHOLDER,
    TAGLINE_PLACEHOLDER,
    PosterPreview,
    PreviewModel,
    project_preview,
)
from .color_button import ColorButton
from .logo_picker import LogoPicker
from .status_indicator import DEFAULT_MESSAGES, StatusIndicator, get_status_color

__all__ = [
    "SHOP_NAME_PLACEHOLDER",
    "TAGLINE_PLACEHOLDER",
    "PosterPreview",
    "PreviewModel",
    "project_preview",
    "ColorButton",
    "LogoPicker",
    "DEFAULT_MESSAGES",
    "StatusIndicator",
    "get_status_color",
]
