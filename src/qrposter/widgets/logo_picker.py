"""Logo file picker with a clear button."""

import logging
from pathlib import Path
from typing import Optional, Union

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QFileDialog, QHBoxLayout, QLabel, QPushButton, QWidget

from qrposter.core.models import LogoFile

logger = logging.getLogger(__name__)

IMAGE_FILTER = "Images (*.png *.jpg *.jpeg *.gif *.bmp *.webp *.svg)"
EMPTY_TEXT = "Click to upload logo"


class LogoPicker(QWidget):
    """
    Emits ``logo_selected(LogoFile)`` when a file is chosen and
    ``logo_selected(None)`` when the selection is cleared.
    """

    logo_selected = pyqtSignal(object)
    load_failed = pyqtSignal(str, str)  # path, error message

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.choose_button = QPushButton("📁")
        self.choose_button.setFixedWidth(32)
        self.choose_button.clicked.connect(self.choose_file)
        layout.addWidget(self.choose_button)

        self.name_label = QLabel(EMPTY_TEXT)
        layout.addWidget(self.name_label, 1)

        self.clear_button = QPushButton("✕")
        self.clear_button.setFixedWidth(28)
        self.clear_button.clicked.connect(self.clear)
        self.clear_button.hide()
        layout.addWidget(self.clear_button)

    def choose_file(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Upload Shop Logo", "", IMAGE_FILTER)
        if path:
            self.load_path(path)

    def load_path(self, path: Union[str, Path]) -> Optional[LogoFile]:
        """Read ``path`` and emit it as the selected logo."""
        try:
            logo = LogoFile.from_path(path)
        except OSError as e:
            logger.error(f"Could not read logo {path}: {e}")
            self.load_failed.emit(str(path), str(e))
            return None
        self.name_label.setText(logo.filename)
        self.clear_button.show()
        self.logo_selected.emit(logo)
        return logo

    def clear(self) -> None:
        self.name_label.setText(EMPTY_TEXT)
        self.clear_button.hide()
        self.logo_selected.emit(None)

    def show_logo(self, logo: Optional[LogoFile]) -> None:
        """Reflect externally changed state without emitting."""
        if logo is None:
            self.name_label.setText(EMPTY_TEXT)
            self.clear_button.hide()
        else:
            self.name_label.setText(logo.filename)
            self.clear_button.show()
