"""
Shared plumbing for page services.
"""
import logging

from ..client.http import ApiError
from ..notify.manager import ToastManager
from ..session import SessionProvider


logger = logging.getLogger(__name__)


class Service:
    """Holds the toast manager and the session provider every service needs."""

    def __init__(self, toasts: ToastManager, session: SessionProvider):
        self.toasts = toasts
        self.session = session

    def report(self, error: ApiError, fallback: str) -> None:
        """Surface an API failure as an error toast."""
        self.toasts.show_error(error.message or fallback)

    def is_stale(self, generation: int) -> bool:
        """True when the session changed while a request was in flight."""
        if generation != self.session.generation:
            logger.warning("Session changed during request, dropping response")
            return True
        return False
