"""Background task with cancellation and cleanup for blocking exchanges."""

import logging
import threading
from typing import Any, Callable, Optional, Set, Tuple

from PyQt6.QtCore import QThread, pyqtSignal

logger = logging.getLogger(__name__)

# --- Module-level constants ---
CANCEL_WAIT_MS = 100      # Wait time when cancelling previous task
CLEANUP_WAIT_MS = 200     # Wait time during session teardown


class BackgroundTask(QThread):
    """
    Runs a blocking callable off the GUI thread.

    Usage:
        task = BackgroundTask(target=client.generate, args=(payload, event), cancel_event=event)
        task.result_ready.connect(on_success)
        task.error_occurred.connect(on_error)  # Receives Exception, not str
        task.start()

        # Later:
        task.cancel()  # Signals won't emit; target sees the event set
    """

    result_ready = pyqtSignal(object)
    error_occurred = pyqtSignal(Exception)  # Full exception, caller decides

    def __init__(
        self,
        target: Callable[..., Any],
        args: Tuple = (),
        kwargs: dict = None,
        cancel_event: Optional[threading.Event] = None,
        parent=None
    ):
        super().__init__(parent)
        self._target = target
        self._args = args
        self._kwargs = kwargs or {}
        self._cancel_event = cancel_event
        self.cancelled = False

    def run(self):
        """Execute target, respecting cancellation."""
        try:
            result = self._target(*self._args, **self._kwargs)
            if not self.cancelled:
                self.result_ready.emit(result)
        except Exception as e:
            if not self.cancelled:
                self.error_occurred.emit(e)

    def cancel(self):
        """Cancel task and ask the target to stop cooperatively."""
        self.cancelled = True
        if self._cancel_event is not None:
            self._cancel_event.set()


class BackgroundTaskManager:
    """
    Manages background task lifecycle for one owner.

    Handles:
    - Cancelling the previous task before starting a new one
    - Keeping cancelled tasks referenced until their thread finishes
    - Cleanup on session teardown

    Usage:
        self._task_manager = BackgroundTaskManager()

        def fetch(self):
            self._task_manager.run(
                target=self.client.generate,
                args=(payload, event),
                cancel_event=event,
                on_success=self._on_ready,
                on_error=self._on_error,
            )

        def closeEvent(self, event):
            self._task_manager.cleanup()
            super().closeEvent(event)
    """

    def __init__(self):
        self._current_task: Optional[BackgroundTask] = None
        self._retired: Set[BackgroundTask] = set()

    @property
    def is_running(self) -> bool:
        return self._current_task is not None and self._current_task.isRunning()

    def run(
        self,
        target: Callable[..., Any],
        args: Tuple = (),
        kwargs: dict = None,
        on_success: Callable[[Any], None] = None,
        on_error: Callable[[Exception], None] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> BackgroundTask:
        """
        Run a background task, cancelling any previous one.

        Args:
            target: Function to execute in background
            args: Positional arguments for target
            kwargs: Keyword arguments for target
            on_success: Callback for successful result
            on_error: Callback for error (receives Exception, not str)
            cancel_event: Event the target polls; set when the task is cancelled

        Returns:
            The started BackgroundTask
        """
        self._retire_current(CANCEL_WAIT_MS)

        task = BackgroundTask(target=target, args=args, kwargs=kwargs, cancel_event=cancel_event)
        if on_success:
            task.result_ready.connect(on_success)
        if on_error:
            task.error_occurred.connect(on_error)

        self._current_task = task
        task.start()
        return task

    def cleanup(self):
        """Cancel and wait for current task. Call from closeEvent."""
        self._retire_current(CLEANUP_WAIT_MS)
        self._current_task = None

    def _retire_current(self, wait_ms: int) -> None:
        task = self._current_task
        if task is None or not task.isRunning():
            return
        task.cancel()
        if not task.wait(wait_ms):
            # Still blocked in I/O; keep a reference until the thread exits
            self._retired.add(task)
            task.finished.connect(lambda t=task: self._retired.discard(t))
            logger.debug(f"Background task still finishing after {wait_ms}ms; retired")
