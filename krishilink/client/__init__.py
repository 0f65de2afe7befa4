"""REST API client."""

from .http import ApiClient, ApiError, TransportError, GENERIC_ERROR
from .resources import CropsAPI, InterestsAPI, UsersAPI, MarketplaceAPI

__all__ = [
    "ApiClient",
    "ApiError",
    "TransportError",
    "GENERIC_ERROR",
    "CropsAPI",
    "InterestsAPI",
    "UsersAPI",
    "MarketplaceAPI",
]
