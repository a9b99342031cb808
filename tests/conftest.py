"""pytest configuration and fixtures for qrposter tests."""

import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

from qrposter.io.exceptions import ExchangeCancelled
from qrposter.protocols import app_config as app_config_module
from qrposter.protocols import ConfiguratorConfig, PresetRegistry


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def restore_global_state():
    """Keep the global config and preset registry from leaking between tests."""
    saved_config = app_config_module._configurator_config
    saved_presets = dict(PresetRegistry._presets)
    yield
    app_config_module._configurator_config = saved_config
    PresetRegistry._presets.clear()
    PresetRegistry._presets.update(saved_presets)


@pytest.fixture
def app_config(tmp_path):
    previews = tmp_path / "previews"
    previews.mkdir()
    return ConfiguratorConfig(
        endpoint_url="https://poster.test/generate-pdf",
        download_dir=str(tmp_path / "downloads"),
        preview_temp_dir=str(previews),
    )


# ---------- Fakes ----------

@dataclass
class Job:
    """One exchange handed to ManualRunner; the test decides when it finishes."""
    target: Callable[..., Any]
    args: tuple
    kwargs: dict
    on_success: Callable[[Any], None]
    on_error: Callable[[Exception], None]
    cancel_event: Optional[threading.Event]

    def execute(self):
        """Run the target now and deliver its outcome like BackgroundTask would."""
        try:
            result = self.target(*self.args, **self.kwargs)
        except Exception as e:
            self.on_error(e)
            return
        self.on_success(result)

    def succeed(self, content: bytes):
        self.on_success(content)

    def fail(self, error: Exception):
        self.on_error(error)


class ManualRunner:
    """Runner that records jobs instead of starting threads."""

    def __init__(self):
        self.jobs: List[Job] = []
        self.cleanups = 0

    def run(self, target, args=(), kwargs=None, on_success=None, on_error=None, cancel_event=None):
        job = Job(target, args, kwargs or {}, on_success, on_error, cancel_event)
        self.jobs.append(job)
        return job

    def cleanup(self):
        self.cleanups += 1


class FakeClient:
    """Stands in for PosterClient; records every payload that reached the 'network'."""

    def __init__(self, content: bytes = b"%PDF-1.4 fake", error: Optional[Exception] = None):
        self.content = content
        self.error = error
        self.calls = []
        self.aborted = []
        self.closed = False

    def generate(self, payload, cancel_event=None):
        if cancel_event is not None and cancel_event.is_set():
            raise ExchangeCancelled("cancelled before dispatch")
        self.calls.append(payload)
        if self.error is not None:
            raise self.error
        return self.content

    def abort(self, cancel_event):
        cancel_event.set()
        self.aborted.append(cancel_event)

    def close(self):
        self.closed = True


@dataclass(frozen=True)
class FakeHandle:
    path: Path
    serial: int


@dataclass
class RecordingHandleFactory:
    """Counts creations and releases and tracks which handles are live."""
    created: List[FakeHandle] = field(default_factory=list)
    released: List[FakeHandle] = field(default_factory=list)
    live: set = field(default_factory=set)
    max_live: int = 0

    def create(self, logo):
        handle = FakeHandle(Path(f"/nonexistent/{logo.filename}"), len(self.created))
        self.created.append(handle)
        self.live.add(handle)
        self.max_live = max(self.max_live, len(self.live))
        return handle

    def release(self, handle):
        assert handle in self.live, "released a handle that was not live"
        self.live.discard(handle)
        self.released.append(handle)


@pytest.fixture
def runner():
    return ManualRunner()


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def handle_factory():
    return RecordingHandleFactory()
