"""
Configurator session: the command surface the presentation shell talks to.

Wires the field store, the logo preview manager and the request controller
together and guarantees that ``cancel_session`` leaves nothing behind: no
exchange that can still mutate state, no live preview handle, no open
connection pool.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from PyQt6.QtCore import QObject

from qrposter.core.exchange import ExchangeRunner, ExchangeState, PosterRequestController
from qrposter.core.field_store import FieldStore
from qrposter.core.models import PosterArtifact, PosterConfig, default_poster_config
from qrposter.core.preview_handles import LogoPreviewManager, TempFileHandleFactory
from qrposter.io.client import PosterClient
from qrposter.io.exceptions import PosterValidationError
from qrposter.protocols.app_config import ConfiguratorConfig, get_configurator_config
from qrposter.protocols.handle_factory import HandleFactory
from qrposter.protocols.presets import Preset

logger = logging.getLogger(__name__)


class ConfiguratorSession(QObject):
    """One user's configurator session.

    Observers connect to ``store.config_changed``, ``previews.preview_changed``
    and the controller's signals.
    """

    def __init__(
        self,
        config: Optional[ConfiguratorConfig] = None,
        initial: Optional[PosterConfig] = None,
        client: Optional[PosterClient] = None,
        runner: Optional[ExchangeRunner] = None,
        handle_factory: Optional[HandleFactory] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.app_config = config or get_configurator_config()
        if initial is None:
            initial = default_poster_config(self.app_config.auxiliary_fields)

        self._client = client if client is not None else PosterClient(self.app_config)
        self.store = FieldStore(initial, parent=self)
        if handle_factory is None:
            handle_factory = TempFileHandleFactory(self.app_config.preview_temp_dir)
        self.previews = LogoPreviewManager(self.store, handle_factory, parent=self)
        self.controller = PosterRequestController(
            self.store, self._client, runner, self.app_config, parent=self
        )
        self._closed = False

    # ========== OBSERVABLE STATE ==========

    @property
    def config(self) -> PosterConfig:
        return self.store.config

    @property
    def preview_handle(self):
        return self.previews.current

    @property
    def state(self) -> ExchangeState:
        return self.controller.state

    @property
    def last_error(self) -> Optional[Exception]:
        return self.controller.last_error

    @property
    def last_artifact(self) -> Optional[PosterArtifact]:
        return self.controller.last_artifact

    @property
    def is_closed(self) -> bool:
        return self._closed

    # ========== COMMANDS ==========

    def set_field(self, name: str, value: Any) -> None:
        self.store.set(name, value)

    def apply_preset(self, preset: Union[Preset, Mapping[str, Any]]) -> None:
        """Merge a preset into the live configuration in one update."""
        values = preset.values if isinstance(preset, Preset) else preset
        if isinstance(preset, Preset):
            logger.info(f"Applying preset {preset.name!r}")
        self.store.merge(values)

    def reset(self) -> None:
        self.store.reset()

    def submit(self) -> Optional[PosterValidationError]:
        if self._closed:
            raise RuntimeError("Cannot submit on a closed session")
        return self.controller.submit()

    def cancel_session(self) -> None:
        """End the session. Idempotent."""
        if self._closed:
            return
        self._closed = True
        logger.debug("Closing configurator session")
        self.controller.cancel()
        self.previews.close()
        self._client.close()
