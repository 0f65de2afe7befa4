"""
Pydantic models for the KrishiLink client.
All data contracts are defined here for strict validation.
"""

from .crop import Crop, CropOwner, CropType, Unit, CROP_TYPES, UNITS
from .interest import (
    CropDetails,
    Interest,
    InterestCreate,
    InterestStatus,
    INTEREST_STATUSES,
)
from .user import UserProfile, Role, ROLES
from .query import QueryState, SORT_KEYS, ALL_TYPES, DEFAULT_SORT
from .toast import Toast, ToastKind, ToastPhase

__all__ = [
    # Crops
    "Crop",
    "CropOwner",
    "CropType",
    "Unit",
    "CROP_TYPES",
    "UNITS",
    # Interests
    "CropDetails",
    "Interest",
    "InterestCreate",
    "InterestStatus",
    "INTEREST_STATUSES",
    # Users
    "UserProfile",
    "Role",
    "ROLES",
    # Query
    "QueryState",
    "SORT_KEYS",
    "ALL_TYPES",
    "DEFAULT_SORT",
    # Toasts
    "Toast",
    "ToastKind",
    "ToastPhase",
]
