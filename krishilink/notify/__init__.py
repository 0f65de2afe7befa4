"""Toast notifications."""

from .manager import ToastManager
from .ticker import ToastTicker

__all__ = ["ToastManager", "ToastTicker"]
