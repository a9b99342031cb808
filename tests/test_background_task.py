"""Tests for BackgroundTask and BackgroundTaskManager."""

import threading


def test_run_emits_result(qapp):
    from qrposter.core import BackgroundTask

    task = BackgroundTask(target=lambda a, b: a + b, args=(1, 2))
    results = []
    task.result_ready.connect(results.append)

    task.run()

    assert results == [3]


def test_run_emits_exception_object(qapp):
    from qrposter.core import BackgroundTask

    def fail():
        raise ValueError("bad")

    task = BackgroundTask(target=fail)
    errors = []
    task.error_occurred.connect(errors.append)

    task.run()

    assert isinstance(errors[0], ValueError)


def test_cancelled_task_stays_silent(qapp):
    from qrposter.core import BackgroundTask

    event = threading.Event()
    task = BackgroundTask(target=lambda: "done", cancel_event=event)
    results = []
    task.result_ready.connect(results.append)

    task.cancel()
    task.run()

    assert event.is_set()
    assert results == []


def test_manager_cancels_previous_task(qapp):
    from qrposter.core import BackgroundTaskManager

    release = threading.Event()
    first_event = threading.Event()
    manager = BackgroundTaskManager()

    first = manager.run(target=release.wait, args=(5,), cancel_event=first_event)
    second = manager.run(target=lambda: "second")

    assert first_event.is_set()
    assert first.cancelled
    release.set()
    assert first.wait(5000)
    assert second.wait(5000)
    manager.cleanup()
    assert not manager.is_running


def test_manager_delivers_result_on_gui_thread(qapp):
    from qrposter.core import BackgroundTaskManager

    manager = BackgroundTaskManager()
    results = []
    task = manager.run(target=lambda: 42, on_success=results.append)

    assert task.wait(5000)
    qapp.processEvents()

    assert results == [42]
    manager.cleanup()
