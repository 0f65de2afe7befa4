"""
Shared fixtures for KrishiLink tests.
"""
from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from krishilink.models.crop import Crop
from krishilink.notify import ToastManager
from krishilink.session import IdentityUser, SessionProvider


BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def make_crop(
    crop_id: str,
    name: str,
    price: float = 10,
    quantity: float = 100,
    crop_type: str = "Grain",
    location: str = "Dhaka",
    description: str = "",
    owner: str = "farmer@example.com",
    age_days: int = 0,
) -> Crop:
    """Build a crop the way the API would send it."""
    return Crop.model_validate({
        "_id": crop_id,
        "name": name,
        "type": crop_type,
        "pricePerUnit": price,
        "unit": "kg",
        "quantity": quantity,
        "description": description,
        "location": location,
        "owner": {"ownerEmail": owner, "ownerName": owner.split("@")[0]},
        "createdAt": (BASE_TIME - timedelta(days=age_days)).isoformat(),
    })


@pytest.fixture
def sample_crops() -> list[Crop]:
    """Crops listed in creation order, oldest first."""
    return [
        make_crop("1", "Rice", price=10, quantity=500, crop_type="Grain",
                  location="Rajshahi", description="Aromatic rice", age_days=3),
        make_crop("2", "Wheat", price=30, quantity=200, crop_type="Grain",
                  location="Dinajpur", description="Winter harvest", age_days=2),
        make_crop("3", "Corn", price=20, quantity=300, crop_type="Grain",
                  location="Bogura", description="Sweet yellow corn", age_days=1),
        make_crop("4", "Mango", price=80, quantity=50, crop_type="Fruit",
                  location="Chapai Nawabganj", description="Himsagar variety", age_days=0),
    ]


@pytest.fixture
def toasts() -> ToastManager:
    ids = count(1)
    return ToastManager(
        default_duration_ms=1000,
        tick_interval_ms=100,
        exit_grace_ms=300,
        id_factory=lambda: f"t{next(ids)}",
    )


@pytest.fixture
def buyer() -> IdentityUser:
    return IdentityUser(uid="u-buyer", email="buyer@example.com", display_name="Rahim", id_token="tok-buyer")


@pytest.fixture
def farmer() -> IdentityUser:
    return IdentityUser(uid="u-farmer", email="farmer@example.com", id_token="tok-farmer")


@pytest.fixture
def session() -> SessionProvider:
    return SessionProvider()
