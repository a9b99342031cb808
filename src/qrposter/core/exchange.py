"""
Request lifecycle controller for poster generation.

Owns at most one outstanding exchange with the generation endpoint. Every
exchange is tagged with a generation number; a completion is applied only if
its generation is still the live one, so a superseded or torn-down exchange
can never change observable state, whenever and however it finishes.

State machine:
    IDLE -> SUBMITTING -> (SUCCEEDED | FAILED | CANCELLED) -> IDLE
"""
from __future__ import annotations

import functools
import logging
import re
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Protocol, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from qrposter.core.background_task import BackgroundTaskManager
from qrposter.core.field_store import FieldStore
from qrposter.core.models import PosterArtifact
from qrposter.core.payload import build_payload
from qrposter.core.validation import validate
from qrposter.io.client import PosterClient
from qrposter.io.exceptions import (
    ExchangeCancelled,
    ExchangeError,
    PosterValidationError,
    TransportUnreachable,
    UnexpectedContentType,
)
from qrposter.protocols.app_config import ConfiguratorConfig, get_configurator_config

logger = logging.getLogger(__name__)

_FILENAME_SEPARATORS = re.compile(r"[\s/\\]+")


class ExchangeState(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class ExchangeRunner(Protocol):
    """Executes the blocking exchange somewhere and reports back."""

    def run(
        self,
        target: Callable[..., Any],
        args: Tuple = (),
        kwargs: dict = None,
        on_success: Callable[[Any], None] = None,
        on_error: Callable[[Exception], None] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Any:
        ...

    def cleanup(self) -> None:
        ...


@dataclass
class _Exchange:
    generation: int
    cancel_event: threading.Event
    shop_name: str


def suggested_filename(shop_name: str, suffix: Optional[str] = None) -> str:
    """'Sharma  Sweets' -> 'Sharma_Sweets_MYQR.pdf'."""
    if suffix is None:
        suffix = get_configurator_config().filename_suffix
    base = _FILENAME_SEPARATORS.sub("_", (shop_name or "").strip())
    return f"{base}{suffix}"


class PosterRequestController(QObject):
    """
    Validates, dispatches and interprets poster generation exchanges.

    Signals:
        state_changed(ExchangeState)
        succeeded(PosterArtifact)
        failed(ExchangeError)               classified; never ExchangeCancelled
        validation_failed(PosterValidationError)
    """

    state_changed = pyqtSignal(object)
    succeeded = pyqtSignal(object)
    failed = pyqtSignal(object)
    validation_failed = pyqtSignal(object)

    def __init__(
        self,
        store: FieldStore,
        client: Optional[PosterClient] = None,
        runner: Optional[ExchangeRunner] = None,
        config: Optional[ConfiguratorConfig] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._store = store
        self._config = config or get_configurator_config()
        self._client = client if client is not None else PosterClient(self._config)
        self._runner = runner if runner is not None else BackgroundTaskManager()
        self._generation = 0
        self._inflight: Optional[_Exchange] = None
        self._state = ExchangeState.IDLE
        self.last_error: Optional[Exception] = None
        self.last_artifact: Optional[PosterArtifact] = None

    @property
    def state(self) -> ExchangeState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._inflight is not None

    @property
    def generation(self) -> int:
        return self._generation

    # ========== COMMANDS ==========

    def submit(self) -> Optional[PosterValidationError]:
        """Validate the current configuration and start a new exchange.

        Returns the validation violation, if any; in that case no network
        access happens and any exchange already in flight is left running.
        Otherwise the previous exchange (if any) is superseded and None is
        returned; the outcome arrives later through signals.
        """
        snapshot = self._store.snapshot()
        violation = validate(snapshot)
        if violation is not None:
            logger.info(f"Submit rejected locally: {type(violation).__name__}")
            self.last_error = violation
            self.validation_failed.emit(violation)
            if self._inflight is None:
                self._set_state(ExchangeState.IDLE)
            return violation

        self._supersede()

        self._generation += 1
        exchange = _Exchange(self._generation, threading.Event(), snapshot.shop_name)
        payload = build_payload(snapshot, self._config)
        self._inflight = exchange
        self.last_error = None

        logger.info(f"Starting exchange #{exchange.generation} for {snapshot.shop_name.strip()!r}")
        self._set_state(ExchangeState.SUBMITTING)
        self._runner.run(
            target=self._client.generate,
            args=(payload, exchange.cancel_event),
            cancel_event=exchange.cancel_event,
            on_success=functools.partial(self._on_success, exchange.generation),
            on_error=functools.partial(self._on_error, exchange.generation),
        )
        return None

    def cancel(self) -> None:
        """Tear down: cancel the live exchange without reporting an error."""
        had_exchange = self._inflight is not None
        self._supersede()
        self._runner.cleanup()
        if had_exchange:
            self._set_state(ExchangeState.IDLE)

    # ========== COMPLETIONS ==========

    def _on_success(self, generation: int, content: bytes) -> None:
        exchange = self._take_if_current(generation)
        if exchange is None:
            return

        artifact = PosterArtifact(
            content=content,
            filename=suggested_filename(exchange.shop_name, self._config.filename_suffix),
            content_type=self._config.expected_content_type,
        )
        self.last_artifact = artifact
        logger.info(f"Exchange #{generation} succeeded: {artifact.filename} ({len(content)} bytes)")
        self._set_state(ExchangeState.SUCCEEDED)
        self.succeeded.emit(artifact)
        self._set_state(ExchangeState.IDLE)

    def _on_error(self, generation: int, error: Exception) -> None:
        exchange = self._take_if_current(generation)
        if exchange is None:
            return

        if isinstance(error, ExchangeCancelled):
            logger.debug(f"Exchange #{generation} reported cancellation")
            self._set_state(ExchangeState.CANCELLED)
            self._set_state(ExchangeState.IDLE)
            return

        classified = self._classify(generation, error)
        self.last_error = classified
        self._set_state(ExchangeState.FAILED)
        self.failed.emit(classified)
        self._set_state(ExchangeState.IDLE)

    # ========== INTERNALS ==========

    def _take_if_current(self, generation: int) -> Optional[_Exchange]:
        exchange = self._inflight
        if exchange is None or exchange.generation != generation:
            logger.debug(f"Discarding completion of stale exchange #{generation}")
            return None
        self._inflight = None
        return exchange

    def _supersede(self) -> None:
        exchange, self._inflight = self._inflight, None
        if exchange is None:
            return
        self._client.abort(exchange.cancel_event)
        logger.info(f"Cancelled exchange #{exchange.generation}")
        self._set_state(ExchangeState.CANCELLED)

    def _classify(self, generation: int, error: Exception) -> ExchangeError:
        if isinstance(error, UnexpectedContentType):
            logger.error(
                f"Exchange #{generation}: server contract violation, "
                f"content type {error.content_type!r} instead of {error.expected!r}"
            )
            return error
        if isinstance(error, TransportUnreachable):
            logger.warning(f"Exchange #{generation}: endpoint unreachable: {error}")
            return error
        logger.error(f"Exchange #{generation}: unexpected failure", exc_info=error)
        classified = TransportUnreachable(f"Unexpected failure: {error}")
        classified.__cause__ = error
        return classified

    def _set_state(self, state: ExchangeState) -> None:
        if state is self._state:
            return
        logger.debug(f"Exchange state {self._state.value} -> {state.value}")
        self._state = state
        self.state_changed.emit(state)
