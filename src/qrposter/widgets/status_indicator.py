"""Status indicator widget: colored dot and label mirroring the exchange state."""

import logging
from typing import Optional

from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QWidget

from qrposter.core.exchange import ExchangeState
from qrposter.theming import ColorScheme

logger = logging.getLogger(__name__)

DEFAULT_MESSAGES = {
    ExchangeState.IDLE: "Ready",
    ExchangeState.SUBMITTING: "Generating PDF... this may take 30-60s if the server is waking up",
    ExchangeState.SUCCEEDED: "Downloaded!",
    ExchangeState.FAILED: "Generation failed",
    ExchangeState.CANCELLED: "Cancelled",
}


def get_status_color(state: ExchangeState, color_scheme: ColorScheme) -> str:
    """Resolve exchange state to color from scheme."""
    color_map = {
        ExchangeState.IDLE: color_scheme.status_info,
        ExchangeState.SUBMITTING: color_scheme.status_warning,
        ExchangeState.SUCCEEDED: color_scheme.status_success,
        ExchangeState.FAILED: color_scheme.status_error,
        ExchangeState.CANCELLED: color_scheme.status_info,
    }
    return color_scheme.to_hex(color_map[state])


class StatusIndicator(QWidget):
    """
    Colored dot plus message for the request lifecycle.

    Usage:
        indicator = StatusIndicator(color_scheme=self.color_scheme, parent=self)
        controller.state_changed.connect(indicator.set_state)
    """

    def __init__(self, color_scheme: ColorScheme = None, parent=None):
        super().__init__(parent)
        self._color_scheme = color_scheme or ColorScheme()
        self.state = ExchangeState.IDLE
        self._setup_ui()

    def _setup_ui(self):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        # Colored dot
        self._dot = QLabel("●")
        self._dot.setFixedWidth(12)
        layout.addWidget(self._dot)

        # Status text
        self._label = QLabel()
        self._label.setFont(QFont("Arial", 8))
        layout.addWidget(self._label, 1)

        self.set_state(ExchangeState.IDLE)

    @property
    def text(self) -> str:
        return self._label.text()

    def set_state(self, state: ExchangeState, message: Optional[str] = None):
        """Update visual state."""
        self.state = state
        color = get_status_color(state, self._color_scheme)
        logger.debug(f"StatusIndicator.set_state: state={state}, color={color}")
        self._dot.setStyleSheet(f"color: {color};")
        self._label.setText(message or DEFAULT_MESSAGES[state])
