"""Tests for the configurator session command surface."""

import pytest


@pytest.fixture
def session(qapp, app_config, fake_client, runner, handle_factory):
    from qrposter.core import ConfiguratorSession

    session = ConfiguratorSession(
        config=app_config,
        client=fake_client,
        runner=runner,
        handle_factory=handle_factory,
    )
    yield session
    session.cancel_session()


def test_starts_with_default_configuration(session):
    from qrposter.core import ExchangeState

    assert session.config.shop_name == "My Shop"
    assert session.config.get("instagram") == ""
    assert session.preview_handle is None
    assert session.state is ExchangeState.IDLE
    assert session.last_error is None
    assert session.last_artifact is None


def test_apply_preset_keeps_unnamed_fields(session):
    session.set_field("tagline", "Since 1970")
    events = []
    session.store.config_changed.connect(lambda config, changed: events.append(changed))

    session.apply_preset({"shop_name": "X", "primary_color": "#111111"})

    assert session.config.shop_name == "X"
    assert session.config.primary_color == "#111111"
    assert session.config.tagline == "Since 1970"
    assert events == [frozenset({"shop_name", "primary_color"})]


def test_apply_registered_preset(session):
    from qrposter.protocols import PresetRegistry, register_default_presets

    register_default_presets()
    session.apply_preset(PresetRegistry.get("Sweet Shop"))

    assert session.config.primary_color == "#e65100"
    assert session.config.tagline == "Fresh sweets every day"
    assert session.config.shop_name == "My Shop"


def test_submit_round_trip(session, runner, fake_client):
    session.set_field("shop_name", "Sharma Sweets")
    assert session.submit() is None

    runner.jobs[0].execute()

    assert session.last_artifact.filename == "Sharma_Sweets_MYQR.pdf"
    assert fake_client.calls[0].data()["shop_name"] == "Sharma Sweets"


def test_cancel_session_leaves_nothing_behind(session, runner, fake_client, handle_factory):
    from qrposter.core import LogoFile

    session.set_field("logo", LogoFile("a.png", b"png", "image/png"))
    session.submit()
    succeeded = []
    session.controller.succeeded.connect(succeeded.append)

    session.cancel_session()
    runner.jobs[0].succeed(b"late")

    assert session.is_closed
    assert fake_client.closed
    assert handle_factory.live == set()
    assert len(handle_factory.released) == 1
    assert succeeded == []
    assert runner.jobs[0].cancel_event.is_set()


def test_cancel_session_is_idempotent(session, runner, handle_factory):
    session.cancel_session()
    session.cancel_session()

    assert runner.cleanups == 1


def test_submit_after_close_raises(session):
    session.cancel_session()
    with pytest.raises(RuntimeError):
        session.submit()
