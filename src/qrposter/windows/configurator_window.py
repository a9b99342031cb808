"""
Configurator main window.

A presentation shell over ConfiguratorSession: editors push changes into the
field store, store notifications push values back into the editors and the
live preview, and controller signals drive the status line and notices.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from qrposter.core.exchange import ExchangeState
from qrposter.core.models import PosterArtifact, PosterConfig
from qrposter.core.session import ConfiguratorSession
from qrposter.core.validation import is_valid_upi
from qrposter.io.exceptions import PosterValidationError
from qrposter.protocols.presets import PresetRegistry
from qrposter.services import SignalService
from qrposter.theming import ColorScheme, StyleSheetGenerator
from qrposter.widgets import ColorButton, LogoPicker, PosterPreview, StatusIndicator
from qrposter.windows.notifications import (
    Notice,
    NoticeLevel,
    describe_download,
    describe_error,
    show_notice,
)

logger = logging.getLogger(__name__)

SUBMIT_TEXT = "Download PDF Poster"
SUBMITTING_TEXT = "Generating PDF..."
PRESET_PLACEHOLDER = "Choose a preset..."
TEXT_FIELDS = ("shop_name", "upi_id", "tagline")


class ConfiguratorWindow(QMainWindow):
    """Form on the left, live poster preview on the right."""

    def __init__(
        self,
        session: Optional[ConfiguratorSession] = None,
        color_scheme: Optional[ColorScheme] = None,
        notifier: Callable[[Optional[QWidget], Notice], None] = show_notice,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.session = session or ConfiguratorSession(parent=self)
        self.color_scheme = color_scheme or ColorScheme()
        self.notifier = notifier
        self.line_edits: Dict[str, QLineEdit] = {}
        self.last_saved_path: Optional[Path] = None

        self.setWindowTitle("Brand Your QR")
        self._setup_ui()
        self._connect_signals()
        self._sync_from_config(self.session.config)

    # ========== UI SETUP ==========

    def _setup_ui(self) -> None:
        style = StyleSheetGenerator(self.color_scheme)
        self.setStyleSheet(style.generate_window_style())

        central = QWidget()
        root = QHBoxLayout(central)

        form_panel = QWidget()
        form_panel.setObjectName("formPanel")
        form_column = QVBoxLayout(form_panel)

        header = QLabel("<h2>Brand Your QR</h2><p>Customize your shop's payment poster</p>")
        form_column.addWidget(header)

        self.error_label = QLabel()
        self.error_label.setObjectName("errorLabel")
        self.error_label.hide()
        form_column.addWidget(self.error_label)

        form = QFormLayout()
        app_config = self.session.app_config

        self.preset_combo = QComboBox()
        self.preset_combo.addItem(PRESET_PLACEHOLDER)
        self.preset_combo.addItems(PresetRegistry.names())
        form.addRow("Preset", self.preset_combo)

        shop_row = QHBoxLayout()
        shop_edit = self._add_line_edit("shop_name", "e.g. Sharma Sweets")
        shop_edit.setMaxLength(app_config.shop_name_max_length)
        self.counter_label = QLabel()
        self.counter_label.setObjectName("counterLabel")
        shop_row.addWidget(shop_edit, 1)
        shop_row.addWidget(self.counter_label)
        form.addRow("Shop Name", shop_row)

        form.addRow("UPI ID", self._add_line_edit("upi_id", "name@okaxis"))
        form.addRow("Tagline (Optional)", self._add_line_edit("tagline", "Best quality in town"))
        for name in app_config.auxiliary_fields:
            label = name.replace("_", " ").title()
            form.addRow(f"{label} (Optional)", self._add_line_edit(name, ""))

        colors = QHBoxLayout()
        self.primary_color_button = ColorButton(title="Brand Color")
        self.text_color_button = ColorButton(title="Text Color")
        colors.addWidget(QLabel("Brand"))
        colors.addWidget(self.primary_color_button)
        colors.addWidget(QLabel("Text"))
        colors.addWidget(self.text_color_button)
        form.addRow("Colors", colors)

        self.logo_picker = LogoPicker()
        form.addRow("Shop Logo", self.logo_picker)
        form_column.addLayout(form)

        buttons = QHBoxLayout()
        self.reset_button = QPushButton("Reset")
        self.submit_button = QPushButton(SUBMIT_TEXT)
        self.submit_button.setStyleSheet(style.generate_submit_button_style())
        buttons.addWidget(self.reset_button)
        buttons.addWidget(self.submit_button, 1)
        form_column.addLayout(buttons)

        self.status_indicator = StatusIndicator(self.color_scheme)
        form_column.addWidget(self.status_indicator)

        hint = QLabel("ⓘ Poster will be generated in A4 format with embedded QR code")
        hint.setObjectName("hintLabel")
        form_column.addWidget(hint)
        form_column.addStretch()

        preview_column = QVBoxLayout()
        preview_column.addWidget(QLabel("<h3>Live Preview</h3>"))
        self.preview = PosterPreview()
        preview_column.addWidget(self.preview, 1)
        note = QLabel("Colors and content update in real-time")
        note.setObjectName("hintLabel")
        note.setAlignment(Qt.AlignmentFlag.AlignCenter)
        preview_column.addWidget(note)

        root.addWidget(form_panel, 1)
        root.addLayout(preview_column, 1)
        self.setCentralWidget(central)

    def _add_line_edit(self, name: str, placeholder: str) -> QLineEdit:
        edit = QLineEdit()
        edit.setPlaceholderText(placeholder)
        edit.textEdited.connect(lambda text, field=name: self._on_text_edited(field, text))
        self.line_edits[name] = edit
        return edit

    def _connect_signals(self) -> None:
        session = self.session
        session.store.config_changed.connect(self._on_config_changed)
        session.previews.preview_changed.connect(self._on_preview_changed)
        session.controller.state_changed.connect(self._on_state_changed)
        session.controller.succeeded.connect(self._on_succeeded)
        session.controller.failed.connect(self._on_failed)
        session.controller.validation_failed.connect(self._on_validation_failed)

        self.primary_color_button.color_changed.connect(
            lambda value: session.set_field("primary_color", value))
        self.text_color_button.color_changed.connect(
            lambda value: session.set_field("text_color", value))
        self.logo_picker.logo_selected.connect(lambda logo: session.set_field("logo", logo))
        self.logo_picker.load_failed.connect(self._on_logo_load_failed)
        self.preset_combo.activated.connect(self._on_preset_activated)
        self.reset_button.clicked.connect(session.reset)
        self.submit_button.clicked.connect(self.submit)

    # ========== COMMANDS ==========

    def submit(self) -> None:
        self._clear_error()
        self.session.submit()

    def _on_text_edited(self, field: str, text: str) -> None:
        self.session.set_field(field, text)

    def _on_preset_activated(self, index: int) -> None:
        if index <= 0:
            return
        preset = PresetRegistry.get(self.preset_combo.itemText(index))
        if preset is not None:
            self.session.apply_preset(preset)
        with SignalService.block_signals(self.preset_combo):
            self.preset_combo.setCurrentIndex(0)

    # ========== STORE -> VIEW ==========

    def _on_config_changed(self, config: PosterConfig, changed) -> None:
        self._sync_from_config(config)

    def _on_preview_changed(self, handle) -> None:
        self.preview.update_preview(self.session.config, handle)

    def _sync_from_config(self, config: PosterConfig) -> None:
        for name, edit in self.line_edits.items():
            SignalService.update_widget_value(edit, config.get(name))
        SignalService.update_widget_value(self.primary_color_button, config.primary_color)
        SignalService.update_widget_value(self.text_color_button, config.text_color)
        with SignalService.block_signals(self.logo_picker):
            self.logo_picker.show_logo(config.logo)

        max_length = self.session.app_config.shop_name_max_length
        self.counter_label.setText(f"{len(config.shop_name)}/{max_length}")
        if self.error_label.text():
            self._refresh_invalid_markers(config)

        self.preview.update_preview(config, self.session.preview_handle)

    # ========== CONTROLLER -> VIEW ==========

    def _on_state_changed(self, state: ExchangeState) -> None:
        self.status_indicator.set_state(state)
        busy = state is ExchangeState.SUBMITTING
        self.submit_button.setEnabled(not busy)
        self.submit_button.setText(SUBMITTING_TEXT if busy else SUBMIT_TEXT)
        for name in TEXT_FIELDS:
            self.line_edits[name].setEnabled(not busy)

    def _on_succeeded(self, artifact: PosterArtifact) -> None:
        directory = self.session.app_config.resolve_download_dir()
        try:
            self.last_saved_path = artifact.save(directory)
        except OSError as e:
            logger.error(f"Could not save {artifact.filename} to {directory}: {e}")
            self.notifier(self, Notice(NoticeLevel.ERROR, "Save Failed", f"Could not save the poster: {e}"))
            return
        self.notifier(self, describe_download(self.last_saved_path))

    def _on_failed(self, error: Exception) -> None:
        notice = describe_error(error)
        self._show_error(notice.text)
        self.notifier(self, notice)

    def _on_validation_failed(self, error: PosterValidationError) -> None:
        self._show_error(error.message)
        self._refresh_invalid_markers(self.session.config)
        self.notifier(self, describe_error(error))

    def _on_logo_load_failed(self, path: str, message: str) -> None:
        self.notifier(self, Notice(NoticeLevel.WARNING, "Logo Not Loaded", f"{path}: {message}"))

    # ========== INLINE ERRORS ==========

    def _show_error(self, text: str) -> None:
        self.error_label.setText(f"⚠️ {text}")
        self.error_label.show()

    def _clear_error(self) -> None:
        self.error_label.hide()
        self.error_label.clear()
        for edit in self.line_edits.values():
            self._set_invalid(edit, False)

    def _refresh_invalid_markers(self, config: PosterConfig) -> None:
        self._set_invalid(self.line_edits["shop_name"], not config.shop_name.strip())
        self._set_invalid(self.line_edits["upi_id"], not is_valid_upi(config.upi_id))

    @staticmethod
    def _set_invalid(edit: QLineEdit, invalid: bool) -> None:
        edit.setProperty("invalid", invalid)
        edit.style().unpolish(edit)
        edit.style().polish(edit)

    # ========== LIFECYCLE ==========

    def closeEvent(self, event):
        """Tear down the session: cancel the exchange, release the preview handle."""
        self.session.cancel_session()
        super().closeEvent(event)
