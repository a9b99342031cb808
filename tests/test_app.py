"""Tests for the application launcher."""


def test_quit_releases_session(qapp, app_config, fake_client, runner, handle_factory):
    """Quitting the application tears the session down even if the window never closes."""
    from qrposter.app import create_window
    from qrposter.core import ConfiguratorSession, LogoFile

    session = ConfiguratorSession(
        config=app_config,
        client=fake_client,
        runner=runner,
        handle_factory=handle_factory,
    )
    before = qapp.receivers(qapp.aboutToQuit)
    window = create_window(qapp, session)
    session.set_field("logo", LogoFile("shop.png", b"png", "image/png"))
    session.submit()

    try:
        assert qapp.receivers(qapp.aboutToQuit) == before + 1
        window.session.cancel_session()  # what aboutToQuit invokes
    finally:
        qapp.aboutToQuit.disconnect(session.cancel_session)
    assert qapp.receivers(qapp.aboutToQuit) == before

    assert window.session is session
    assert session.is_closed
    assert fake_client.closed
    assert handle_factory.live == set()
    assert runner.jobs[0].cancel_event.is_set()


def test_configure_logging_reads_level(monkeypatch):
    import logging

    from qrposter.app import configure_logging

    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    root.handlers = []
    monkeypatch.setenv("QRPOSTER_LOG_LEVEL", "debug")
    try:
        configure_logging()
        assert root.level == logging.DEBUG
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
