"""
Toast lifecycle manager - a queue of auto-dismissing notifications.
"""
import logging
import threading
import uuid
from typing import Callable, Optional

from ..config import get_config
from ..models.toast import Toast, ToastKind


logger = logging.getLogger(__name__)


class ToastManager:
    """
    Keeps toasts in insertion order and drives their countdowns.

    Each `tick()` stands for one `tick_interval_ms` of wall time. Active,
    unpaused toasts lose `100 * tick_interval_ms / duration_ms` percent per
    tick. A toast that reaches 0, or is dismissed, spends `exit_grace_ms`
    in the expiring phase before it is removed.

    Operations on unknown ids do nothing. All methods are safe to call
    from a ticker thread and the UI thread at the same time.
    """

    def __init__(
        self,
        default_duration_ms: Optional[int] = None,
        tick_interval_ms: Optional[int] = None,
        exit_grace_ms: Optional[int] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        config = get_config().toast
        self.default_duration_ms = default_duration_ms or config.default_duration_ms
        self.tick_interval_ms = tick_interval_ms or config.tick_interval_ms
        self.exit_grace_ms = config.exit_grace_ms if exit_grace_ms is None else exit_grace_ms
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)

        self._toasts: dict[str, Toast] = {}
        self._lock = threading.RLock()
        self._carry_ms = 0

    # -- queries ---------------------------------------------------------

    @property
    def toasts(self) -> list[Toast]:
        """Snapshots of every toast, oldest first."""
        with self._lock:
            return [toast.model_copy() for toast in self._toasts.values()]

    def get(self, toast_id: str) -> Optional[Toast]:
        with self._lock:
            toast = self._toasts.get(toast_id)
            return toast.model_copy() if toast else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._toasts)

    # -- commands --------------------------------------------------------

    def enqueue(
        self,
        message: str,
        kind: ToastKind = "success",
        duration_ms: Optional[int] = None,
    ) -> str:
        """Append a toast at 100% and return its id."""
        duration = duration_ms if duration_ms is not None else self.default_duration_ms
        # At least one full tick so the step never exceeds 100%
        duration = max(int(duration), self.tick_interval_ms)

        with self._lock:
            toast_id = self._id_factory()
            while toast_id in self._toasts:
                toast_id = self._id_factory()
            self._toasts[toast_id] = Toast(
                id=toast_id,
                message=message,
                kind=kind,
                duration_ms=duration,
            )

        logger.debug(f"Toast {toast_id} queued ({kind}, {duration}ms)")
        return toast_id

    def show_success(self, message: str, duration_ms: Optional[int] = None) -> str:
        return self.enqueue(message, "success", duration_ms)

    def show_error(self, message: str, duration_ms: Optional[int] = None) -> str:
        return self.enqueue(message, "error", duration_ms)

    def pause(self, toast_id: str) -> None:
        """Freeze the countdown (hover)."""
        with self._lock:
            toast = self._toasts.get(toast_id)
            if toast and not toast.is_expiring:
                toast.is_paused = True

    def resume(self, toast_id: str) -> None:
        """Continue the countdown from where it was frozen."""
        with self._lock:
            toast = self._toasts.get(toast_id)
            if toast and not toast.is_expiring:
                toast.is_paused = False

    def dismiss(self, toast_id: str) -> None:
        """Close a toast; it is removed once the exit grace has run out."""
        with self._lock:
            toast = self._toasts.get(toast_id)
            if toast is None or toast.is_expiring:
                return
            if self.exit_grace_ms <= 0:
                del self._toasts[toast_id]
                logger.debug(f"Toast {toast_id} removed")
                return
            toast.phase = "expiring"
            toast.is_paused = False
            toast.exit_remaining_ms = self.exit_grace_ms

    def tick(self) -> None:
        """Advance every toast by one tick interval."""
        with self._lock:
            expired: list[str] = []
            for toast in list(self._toasts.values()):
                if toast.is_expiring:
                    toast.exit_remaining_ms -= self.tick_interval_ms
                    if toast.exit_remaining_ms <= 0:
                        expired.append(toast.id)
                    continue
                if toast.is_paused:
                    continue

                step = 100.0 * self.tick_interval_ms / toast.duration_ms
                remaining = toast.remaining_percent - step
                if remaining <= 0:
                    toast.remaining_percent = 0.0
                    self.dismiss(toast.id)
                else:
                    toast.remaining_percent = remaining

            for toast_id in expired:
                del self._toasts[toast_id]
                logger.debug(f"Toast {toast_id} removed")

    def advance(self, elapsed_ms: float) -> int:
        """
        Run as many ticks as fit into `elapsed_ms`.
        The leftover is carried into the next call. Returns the tick count.
        """
        with self._lock:
            total = self._carry_ms + max(0, int(elapsed_ms))
            ticks, self._carry_ms = divmod(total, self.tick_interval_ms)
            for _ in range(ticks):
                self.tick()
            return ticks

    def clear(self) -> None:
        """Drop every toast at once."""
        with self._lock:
            self._toasts.clear()
            self._carry_ms = 0
