"""Swatch button that opens a QColorDialog and reports '#rrggbb' values."""

from typing import Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import QColorDialog, QPushButton, QWidget

from qrposter.theming import normalize_hex_color, readable_text_color


class ColorButton(QPushButton):
    """Shows the current color as its background and hex value as its text."""

    color_changed = pyqtSignal(str)

    def __init__(self, color: str = "#000000", title: str = "Pick a color", parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._title = title
        self._color = normalize_hex_color(color) or "#000000"
        self.clicked.connect(self.choose_color)
        self._refresh()

    @property
    def color(self) -> str:
        return self._color

    def set_color(self, color: str) -> None:
        """Update the swatch without emitting ``color_changed``."""
        normalized = normalize_hex_color(color)
        if normalized is None or normalized == self._color:
            return
        self._color = normalized
        self._refresh()

    def choose_color(self) -> None:
        chosen = QColorDialog.getColor(QColor(self._color), self, self._title)
        if not chosen.isValid():
            return
        value = chosen.name()
        if value != self._color:
            self._color = value
            self._refresh()
            self.color_changed.emit(value)

    def _refresh(self) -> None:
        self.setText(self._color)
        self.setStyleSheet(
            f"background-color: {self._color}; color: {readable_text_color(self._color)};"
            " border: 1px solid #555555; border-radius: 4px; padding: 4px;"
        )
