"""
Background ticker that drives a ToastManager on a fixed interval.
"""
import logging
import threading
from typing import Optional

from .manager import ToastManager


logger = logging.getLogger(__name__)


class ToastTicker:
    """
    Calls `manager.tick()` every `manager.tick_interval_ms` on a daemon thread.

    Use as a context manager, or call `start()` and `stop()`. `stop()` joins
    the thread, so no tick happens after it returns.
    """

    def __init__(self, manager: ToastManager):
        self.manager = manager
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "ToastTicker":
        if self.running:
            return self
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="toast-ticker", daemon=True)
        self._thread.start()
        logger.debug("Toast ticker started")
        return self

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
            logger.debug("Toast ticker stopped")

    def _run(self) -> None:
        interval = self.manager.tick_interval_ms / 1000.0
        while not self._stop.wait(interval):
            self.manager.tick()

    def __enter__(self) -> "ToastTicker":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
