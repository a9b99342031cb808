"""
Field store: the single owner of the live poster configuration.

``set`` and ``merge`` are the only mutation entry points. Each call produces
at most one ``config_changed`` emission, delivered synchronously to every
listener before the call returns, so a preset merge can never be observed
half-applied.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from qrposter.core.models import PosterConfig, default_poster_config

logger = logging.getLogger(__name__)


class FieldStore(QObject):
    """Flat, versionless record with atomic point updates and bulk merges."""

    # (new PosterConfig, frozenset of changed field names)
    config_changed = pyqtSignal(object, object)

    def __init__(self, initial: Optional[PosterConfig] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._initial = initial if initial is not None else default_poster_config()
        self._config = self._initial

    @property
    def config(self) -> PosterConfig:
        return self._config

    def snapshot(self) -> PosterConfig:
        """Current record. Immutable, so safe to hold across later edits."""
        return self._config

    def get(self, name: str) -> Any:
        return self._config.get(name)

    def set(self, name: str, value: Any) -> None:
        """Replace one field.

        Raises:
            UnknownFieldError: ``name`` is not a configuration field
        """
        self._apply({name: value})

    def merge(self, values: Mapping[str, Any]) -> None:
        """Replace several fields as a single observable update.

        Unknown names are rejected before anything is applied.
        """
        self._apply(dict(values))

    def reset(self) -> None:
        """Restore session-start values in one update."""
        logger.debug("Resetting configuration to session defaults")
        self._replace(self._initial)

    def _apply(self, values: Mapping[str, Any]) -> None:
        if not values:
            return
        self._replace(self._config.with_values(values))

    def _replace(self, new_config: PosterConfig) -> None:
        changed = self._config.diff(new_config)
        if not changed:
            return
        self._config = new_config
        logger.debug(f"Configuration changed: {sorted(changed)}")
        self.config_changed.emit(new_config, changed)
