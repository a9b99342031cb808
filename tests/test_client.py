"""Tests for the httpx-based generation client."""

import threading
from urllib.parse import parse_qs

import httpx
import pytest

ENDPOINT = "https://poster.test/generate-pdf"


def _client(handler, **config_overrides):
    from qrposter.io import PosterClient
    from qrposter.protocols import ConfiguratorConfig

    config = ConfiguratorConfig(endpoint_url=ENDPOINT, **config_overrides)
    return PosterClient(config, transport=httpx.MockTransport(handler))


def _payload(**values):
    from qrposter.core import build_payload, default_poster_config
    from qrposter.protocols import ConfiguratorConfig

    config = default_poster_config(("website",)).with_values(values)
    return build_payload(config, ConfiguratorConfig())


def _pdf_response(content=b"%PDF-1.4 poster", content_type="application/pdf"):
    return httpx.Response(200, content=content, headers={"content-type": content_type})


def test_posts_form_fields_and_returns_pdf():
    seen = []

    def handler(request):
        request.read()
        seen.append(request)
        return _pdf_response()

    client = _client(handler)
    content = client.generate(_payload(shop_name=" Sharma Sweets ", website="sharma.in"))

    assert content == b"%PDF-1.4 poster"
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == ENDPOINT
    form = parse_qs(request.content.decode())
    assert form["shop_name"] == ["Sharma Sweets"]
    assert form["upi_id"] == ["payment@bank"]
    assert form["primary_color"] == ["#646cff"]
    assert form["website_url"] == ["sharma.in"]
    assert "website" not in form


def test_logo_sent_as_multipart_file():
    from qrposter.core import LogoFile

    seen = []

    def handler(request):
        request.read()
        seen.append(request)
        return _pdf_response()

    client = _client(handler)
    client.generate(_payload(logo=LogoFile("shop.png", b"PNGDATA", "image/png")))

    request = seen[0]
    assert request.headers["content-type"].startswith("multipart/form-data")
    assert b'name="logo"; filename="shop.png"' in request.content
    assert b"PNGDATA" in request.content
    assert b'name="shop_name"' in request.content


def test_content_type_parameters_ignored():
    client = _client(lambda request: _pdf_response(content_type="Application/PDF; charset=binary"))
    assert client.generate(_payload()) == b"%PDF-1.4 poster"


def test_html_response_is_unexpected_content_type():
    from qrposter.io import UnexpectedContentType

    client = _client(lambda request: _pdf_response(b"<html>waking up</html>", "text/html"))
    with pytest.raises(UnexpectedContentType) as excinfo:
        client.generate(_payload())
    assert excinfo.value.content_type == "text/html"
    assert excinfo.value.expected == "application/pdf"


def test_error_status_is_transport_unreachable():
    from qrposter.io import TransportUnreachable

    client = _client(lambda request: httpx.Response(502, text="Bad Gateway"))
    with pytest.raises(TransportUnreachable) as excinfo:
        client.generate(_payload())
    assert excinfo.value.status_code == 502


@pytest.mark.parametrize("exc_type", [httpx.ConnectError, httpx.ReadTimeout])
def test_connect_failures_are_transport_unreachable(exc_type):
    from qrposter.io import TransportUnreachable

    def handler(request):
        raise exc_type("unreachable", request=request)

    client = _client(handler)
    with pytest.raises(TransportUnreachable) as excinfo:
        client.generate(_payload())
    assert excinfo.value.status_code is None


def test_cancelled_before_dispatch_sends_nothing():
    from qrposter.io import ExchangeCancelled

    calls = []
    client = _client(lambda request: calls.append(request) or _pdf_response())
    event = threading.Event()
    event.set()

    with pytest.raises(ExchangeCancelled):
        client.generate(_payload(), event)
    assert calls == []


def test_cancel_during_transfer_stops_reading():
    from qrposter.io import ExchangeCancelled

    event = threading.Event()

    def body():
        yield b"%PDF-1.4 "
        event.set()
        yield b"rest of document"

    client = _client(lambda request: httpx.Response(
        200, content=body(), headers={"content-type": "application/pdf"}
    ))
    with pytest.raises(ExchangeCancelled):
        client.generate(_payload(), event)


def test_close_is_idempotent():
    client = _client(lambda request: _pdf_response())
    client.close()
    client.close()


def test_media_type():
    from qrposter.io import media_type

    assert media_type("application/pdf") == "application/pdf"
    assert media_type("text/HTML; charset=utf-8") == "text/html"
    assert media_type(None) == ""


def test_abort_interrupts_wait_for_headers():
    """A server that never answers does not hold a cancelled exchange until the timeout."""
    import socket
    import time

    from qrposter.io import ExchangeCancelled, PosterClient
    from qrposter.protocols import ConfiguratorConfig

    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(1)
    port = server.getsockname()[1]
    accepted = []
    threading.Thread(target=lambda: accepted.append(server.accept()[0]), daemon=True).start()

    config = ConfiguratorConfig(endpoint_url=f"http://127.0.0.1:{port}/generate-pdf", request_timeout_s=30)
    client = PosterClient(config, transport=httpx.HTTPTransport())
    event = threading.Event()
    outcome = []

    def run():
        try:
            client.generate(_payload(), event)
        except Exception as e:
            outcome.append(e)

    worker = threading.Thread(target=run, daemon=True)
    worker.start()
    deadline = time.monotonic() + 5
    while not accepted and time.monotonic() < deadline:
        time.sleep(0.01)
    time.sleep(0.2)

    started = time.monotonic()
    client.abort(event)
    worker.join(5)

    try:
        assert not worker.is_alive()
        assert time.monotonic() - started < 5
        assert isinstance(outcome[0], ExchangeCancelled)
    finally:
        client.close()
        for conn in accepted:
            conn.close()
        server.close()


def test_abort_after_completion_is_harmless():
    client = _client(lambda request: _pdf_response())
    event = threading.Event()
    client.generate(_payload(), event)

    client.abort(event)

    assert event.is_set()
