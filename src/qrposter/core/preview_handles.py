"""
Logo preview handle lifecycle.

The manager is the only code allowed to create or release preview handles.
Consumers read ``current`` (or listen to ``preview_changed``) and must not
hold a handle past the next change notification.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from qrposter.core.field_store import FieldStore
from qrposter.core.models import LOGO_FIELD, LogoFile, PosterConfig
from qrposter.protocols.app_config import get_configurator_config
from qrposter.protocols.handle_factory import HandleFactory

logger = logging.getLogger(__name__)

TEMP_PREFIX = "qrposter_logo_"


@dataclass(frozen=True)
class TempFileHandle:
    """Preview handle backed by a temporary file holding the logo bytes."""
    path: Path

    @property
    def url(self) -> str:
        return self.path.as_uri()


class TempFileHandleFactory:
    """Materialize logos as temp files; release unlinks them."""

    def __init__(self, directory: Optional[str] = None):
        self._directory = directory

    def create(self, logo: LogoFile) -> TempFileHandle:
        fd, name = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=logo.suffix, dir=self._directory)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(logo.content)
        except OSError:
            Path(name).unlink(missing_ok=True)
            raise
        return TempFileHandle(Path(name))

    def release(self, handle: TempFileHandle) -> None:
        handle.path.unlink(missing_ok=True)


class LogoPreviewManager(QObject):
    """
    Keeps one preview handle in lockstep with the store's logo field.

    The previous handle is released before the next one is created, so two
    handles are never live at the same time. ``close()`` releases whatever is
    live and stops listening.
    """

    preview_changed = pyqtSignal(object)  # handle or None

    def __init__(
        self,
        store: FieldStore,
        factory: Optional[HandleFactory] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._store = store
        self._factory = factory or TempFileHandleFactory(get_configurator_config().preview_temp_dir)
        self._current = None
        self._closed = False

        store.config_changed.connect(self._on_config_changed)
        if store.config.logo is not None:
            self._recycle(store.config.logo)

    @property
    def current(self):
        return self._current

    def close(self) -> None:
        """Release the live handle. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        try:
            self._store.config_changed.disconnect(self._on_config_changed)
        except TypeError:
            pass  # already disconnected
        self._release_current()

    def _on_config_changed(self, config: PosterConfig, changed) -> None:
        if LOGO_FIELD not in changed or self._closed:
            return
        self._recycle(config.logo)

    def _recycle(self, logo: Optional[LogoFile]) -> None:
        self._release_current()

        if logo is not None:
            try:
                self._current = self._factory.create(logo)
                logger.debug(f"Created preview handle for {logo.filename}: {self._current}")
            except OSError as e:
                logger.error(f"Could not create preview for {logo.filename}: {e}")
                self._current = None

        self.preview_changed.emit(self._current)

    def _release_current(self) -> None:
        handle, self._current = self._current, None
        if handle is None:
            return
        try:
            self._factory.release(handle)
            logger.debug(f"Released preview handle {handle}")
        except OSError as e:
            logger.warning(f"Failed to release preview handle {handle}: {e}")
