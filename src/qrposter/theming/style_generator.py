"""
QStyleSheet generator for the configurator window.

Builds stylesheet strings from a ColorScheme so no widget hardcodes colors.
"""

import logging
from .color_scheme import ColorScheme

logger = logging.getLogger(__name__)


class StyleSheetGenerator:
    """Generates QStyleSheet strings from ColorScheme objects."""

    def __init__(self, color_scheme: ColorScheme):
        self.color_scheme = color_scheme

    def generate_window_style(self) -> str:
        """
        Generate QStyleSheet for the main window and its form controls.

        Returns:
            str: Complete QStyleSheet for window styling
        """
        cs = self.color_scheme
        return f"""
            QMainWindow, QWidget#formPanel {{
                background-color: {cs.to_hex(cs.window_bg)};
                color: {cs.to_hex(cs.text_primary)};
            }}
            QLabel {{
                color: {cs.to_hex(cs.text_primary)};
            }}
            QLabel#hintLabel, QLabel#counterLabel {{
                color: {cs.to_hex(cs.text_secondary)};
            }}
            QLabel#errorLabel {{
                color: {cs.to_hex(cs.text_error)};
            }}
            QLineEdit, QComboBox {{
                background-color: {cs.to_hex(cs.input_bg)};
                color: {cs.to_hex(cs.text_primary)};
                border: 1px solid {cs.to_hex(cs.input_border)};
                border-radius: 4px;
                padding: 4px;
            }}
            QLineEdit:focus {{
                border: 1px solid {cs.to_hex(cs.input_focus_border)};
            }}
            QLineEdit[invalid="true"] {{
                border: 1px solid {cs.to_hex(cs.text_error)};
            }}
        """

    def generate_submit_button_style(self) -> str:
        cs = self.color_scheme
        return f"""
            QPushButton {{
                background-color: {cs.to_hex(cs.button_bg)};
                color: {cs.to_hex(cs.button_text)};
                border: none;
                border-radius: 6px;
                padding: 8px 16px;
                font-weight: bold;
            }}
            QPushButton:disabled {{
                background-color: {cs.to_hex(cs.button_disabled_bg)};
            }}
        """
