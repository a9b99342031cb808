"""
Signal blocking helpers.

Used when the window pushes store state back into its editors, so the
editors' change signals do not loop straight back into the store.
"""

from contextlib import contextmanager
from typing import Any
from PyQt6.QtWidgets import QWidget, QLineEdit, QComboBox
import logging

from qrposter.widgets.color_button import ColorButton

logger = logging.getLogger(__name__)


class SignalService:
    """
    Examples:
        # Block signals (context manager):
        with SignalService.block_signals(line_edit):
            line_edit.setText("Sharma Sweets")

        # Update a value only if it differs, signals blocked:
        SignalService.update_widget_value(line_edit, config.shop_name)
    """

    @staticmethod
    @contextmanager
    def block_signals(*widgets: QWidget):
        """Context manager for blocking widget signals."""
        previous = [widget.blockSignals(True) if widget is not None else None for widget in widgets]
        try:
            yield
        finally:
            for widget, was_blocked in zip(widgets, previous):
                if widget is not None:
                    widget.blockSignals(bool(was_blocked))

    @staticmethod
    def update_widget_value(widget: QWidget, value: Any) -> None:
        """Update widget value with signals blocked; no-op when already equal."""
        with SignalService.block_signals(widget):
            if isinstance(widget, QLineEdit):
                text = "" if value is None else str(value)
                if widget.text() != text:
                    widget.setText(text)
            elif isinstance(widget, ColorButton):
                widget.set_color(value)
            elif isinstance(widget, QComboBox):
                if isinstance(value, int):
                    widget.setCurrentIndex(value)
                else:
                    widget.setCurrentText(str(value))
            else:
                logger.warning(f"Unsupported widget type for value update: {type(widget).__name__}")
