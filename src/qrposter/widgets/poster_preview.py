"""
Live poster preview.

``project_preview`` is a pure projection of (configuration, preview handle)
into display values; ``PosterPreview`` only paints what it returns. No
network, no state of its own beyond the last projection.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPixmap
from PyQt6.QtWidgets import QFrame, QLabel, QVBoxLayout, QWidget

from qrposter.core.models import PosterConfig
from qrposter.theming import normalize_hex_color

logger = logging.getLogger(__name__)

SHOP_NAME_PLACEHOLDER = "YOUR SHOP NAME"
TAGLINE_PLACEHOLDER = "Your tagline goes here"
UPI_PLACEHOLDER = "upi@example"
PAYMENT_APPS = "💳 GPay • PhonePe • Paytm 📱"
DEFAULT_PRIMARY = "#646cff"
DEFAULT_TEXT = "#000000"
LOGO_SIZE = 56


@dataclass(frozen=True)
class PreviewModel:
    shop_name: str
    tagline: str
    upi_id: str
    primary_color: str
    text_color: str
    logo_path: Optional[Path]
    extras: Tuple[Tuple[str, str], ...]


def project_preview(config: PosterConfig, handle=None) -> PreviewModel:
    """Map a configuration and the current preview handle to display values."""
    extras = tuple(
        (name.replace("_", " ").title(), value.strip())
        for name, value in config.extras.items()
        if value and value.strip()
    )
    return PreviewModel(
        shop_name=config.shop_name or SHOP_NAME_PLACEHOLDER,
        tagline=config.tagline or TAGLINE_PLACEHOLDER,
        upi_id=config.upi_id or UPI_PLACEHOLDER,
        primary_color=normalize_hex_color(config.primary_color) or DEFAULT_PRIMARY,
        text_color=normalize_hex_color(config.text_color) or DEFAULT_TEXT,
        logo_path=handle.path if handle is not None else None,
        extras=extras,
    )


class PosterPreview(QFrame):
    """A4-ish poster mock that mirrors the current configuration."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName("posterPreview")
        self.setMinimumSize(280, 396)
        self.model: Optional[PreviewModel] = None
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 12)
        layout.setSpacing(8)

        self._header = QFrame()
        self._header.setObjectName("posterHeader")
        header_layout = QVBoxLayout(self._header)
        self.shop_name_label = QLabel()
        self.shop_name_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.shop_name_label.setWordWrap(True)
        self.tagline_label = QLabel()
        self.tagline_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.tagline_label.setWordWrap(True)
        header_layout.addWidget(self.shop_name_label)
        header_layout.addWidget(self.tagline_label)
        layout.addWidget(self._header)

        self._qr_box = QLabel("QR")
        self._qr_box.setObjectName("qrBox")
        self._qr_box.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._qr_box.setFixedSize(160, 160)
        qr_layout = QVBoxLayout(self._qr_box)
        qr_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.logo_label = QLabel()
        self.logo_label.setFixedSize(LOGO_SIZE, LOGO_SIZE)
        self.logo_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.logo_label.hide()
        qr_layout.addWidget(self.logo_label)
        layout.addWidget(self._qr_box, alignment=Qt.AlignmentFlag.AlignHCenter)

        self.upi_label = QLabel()
        self.upi_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.upi_label)

        self.extras_label = QLabel()
        self.extras_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.extras_label.setWordWrap(True)
        layout.addWidget(self.extras_label)

        layout.addStretch()
        footer = QLabel(PAYMENT_APPS)
        footer.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(footer)

    def update_preview(self, config: PosterConfig, handle=None) -> PreviewModel:
        """Re-project and repaint. Returns the model that was drawn."""
        model = project_preview(config, handle)
        self.model = model

        self.shop_name_label.setText(model.shop_name)
        self.tagline_label.setText(model.tagline)
        self.upi_label.setText(model.upi_id)
        self.extras_label.setText("  ".join(f"{label}: {value}" for label, value in model.extras))
        self.extras_label.setVisible(bool(model.extras))

        self.setStyleSheet(f"""
            QFrame#posterPreview {{ background-color: #ffffff; border: 1px solid #dddddd; }}
            QFrame#posterHeader {{ background-color: {model.primary_color}; }}
            QFrame#posterHeader QLabel {{ color: {model.text_color}; }}
            QLabel#qrBox {{ border: 3px solid {model.primary_color}; color: #bbbbbb; font-size: 28px; }}
            QLabel {{ color: {model.text_color}; }}
        """)
        font = self.shop_name_label.font()
        font.setPointSize(18)
        font.setBold(True)
        self.shop_name_label.setFont(font)

        self._render_logo(model.logo_path)
        return model

    def _render_logo(self, path: Optional[Path]) -> None:
        if path is None:
            self.logo_label.clear()
            self.logo_label.hide()
            return

        pixmap = QPixmap(str(path))
        if pixmap.isNull():
            logger.error(f"Failed to load logo preview from {path}")
            self.logo_label.clear()
            self.logo_label.hide()
            return

        self.logo_label.setPixmap(pixmap.scaled(
            LOGO_SIZE, LOGO_SIZE,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        ))
        self.logo_label.show()
