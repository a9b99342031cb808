"""
HTTP client for the remote poster-generation endpoint.

One blocking call per exchange, meant to run inside a BackgroundTask. The
response body is streamed so a cancel event can stop the transfer between
chunks. ``abort`` shuts down the exchange's sockets from another thread, so
a cancelled exchange still waiting for response headers stops at once
instead of at the timeout.
"""

from __future__ import annotations

import logging
import socket
import threading
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import httpx

from qrposter.io.exceptions import (
    ExchangeCancelled,
    TransportUnreachable,
    UnexpectedContentType,
)
from qrposter.protocols.app_config import ConfiguratorConfig, get_configurator_config

if TYPE_CHECKING:
    from qrposter.core.payload import PosterPayload

logger = logging.getLogger(__name__)

# httpcore trace events whose return value is the connection's network stream
_STREAM_EVENTS = ("connection.connect_tcp.complete", "connection.start_tls.complete")


def media_type(content_type_header: Optional[str]) -> str:
    """Strip parameters from a Content-Type header: 'application/pdf; x=y' -> 'application/pdf'."""
    if not content_type_header:
        return ""
    return content_type_header.split(";", 1)[0].strip().lower()


class _LiveTransfer:
    """Sockets opened for one exchange; collected through the httpx trace extension."""

    def __init__(self):
        self._lock = threading.Lock()
        self._sockets: List[socket.socket] = []
        self._aborted = False

    def trace(self, event_name: str, info: Dict[str, Any]) -> None:
        if event_name not in _STREAM_EVENTS:
            return
        stream = info.get("return_value")
        sock = stream.get_extra_info("socket") if stream is not None else None
        if sock is None:
            return
        with self._lock:
            self._sockets.append(sock)
            aborted = self._aborted
        if aborted:
            self._shutdown(sock)

    def abort(self) -> None:
        with self._lock:
            self._aborted = True
            sockets = list(self._sockets)
        for sock in sockets:
            self._shutdown(sock)

    @staticmethod
    def _shutdown(sock: socket.socket) -> None:
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass  # already closed or detached by TLS wrapping


class PosterClient:
    """
    Thin httpx wrapper that turns one payload into one PDF.

    Raises:
        TransportUnreachable: connect/read/timeout failure or non-2xx status
        UnexpectedContentType: 2xx status with the wrong media type
        ExchangeCancelled: the cancel event was set while the exchange ran
    """

    def __init__(
        self,
        config: Optional[ConfiguratorConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._config = config or get_configurator_config()
        self._client = httpx.Client(
            transport=transport,
            timeout=self._config.request_timeout_s,
            follow_redirects=True,
            # Fresh connection per exchange so abort() always has its socket
            limits=httpx.Limits(max_keepalive_connections=0),
        )
        self._live: Dict[threading.Event, _LiveTransfer] = {}
        self._live_lock = threading.Lock()
        self._closed = False

    @property
    def endpoint_url(self) -> str:
        return self._config.endpoint_url

    def generate(self, payload: "PosterPayload", cancel_event: Optional[threading.Event] = None) -> bytes:
        """POST ``payload`` and return the document bytes."""
        cancel_event = cancel_event or threading.Event()
        transfer = _LiveTransfer()
        with self._live_lock:
            self._live[cancel_event] = transfer

        logger.debug(f"POST {self.endpoint_url} (logo={'yes' if payload.logo else 'no'})")
        try:
            self._raise_if_cancelled(cancel_event)
            with self._client.stream(
                "POST",
                self.endpoint_url,
                data=payload.data(),
                files=payload.files(),
                extensions={"trace": transfer.trace},
            ) as response:
                self._raise_if_cancelled(cancel_event)

                if not response.is_success:
                    raise TransportUnreachable(
                        f"Server responded with {response.status_code}",
                        status_code=response.status_code,
                    )

                expected = self._config.expected_content_type.lower()
                received = media_type(response.headers.get("content-type"))
                if received != expected:
                    raise UnexpectedContentType(received, expected)

                chunks = []
                for chunk in response.iter_bytes():
                    self._raise_if_cancelled(cancel_event)
                    chunks.append(chunk)
        except (httpx.TransportError, httpx.StreamError) as e:
            if cancel_event.is_set():
                raise ExchangeCancelled("Exchange cancelled during transfer") from e
            raise TransportUnreachable(f"Could not connect to the server: {e}") from e
        finally:
            with self._live_lock:
                self._live.pop(cancel_event, None)

        content = b"".join(chunks)
        logger.debug(f"Received {len(content)} bytes from {self.endpoint_url}")
        return content

    def abort(self, cancel_event: threading.Event) -> None:
        """Cancel the exchange tied to ``cancel_event`` and cut its connection.

        Safe to call from any thread, and for exchanges that already finished.
        """
        cancel_event.set()
        with self._live_lock:
            transfer = self._live.get(cancel_event)
        if transfer is not None:
            logger.debug("Aborting live transfer")
            transfer.abort()

    def close(self) -> None:
        """Close the underlying connection pool. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        self._client.close()

    @staticmethod
    def _raise_if_cancelled(cancel_event: threading.Event) -> None:
        if cancel_event.is_set():
            raise ExchangeCancelled("Exchange cancelled")
