"""Page workflows built on the API client, toasts and the session."""

from .base import Service
from .crops import CropCatalog, CropService
from .interests import InterestService, InvalidTransitionError, check_transition
from .profile import ProfileService

__all__ = [
    "Service",
    "CropCatalog",
    "CropService",
    "InterestService",
    "InvalidTransitionError",
    "check_transition",
    "ProfileService",
]
