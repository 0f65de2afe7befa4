"""
Typed wrappers for the crops, interests and users endpoints.
"""
import logging
from typing import Any, Mapping, Optional, Type, TypeVar, Union
from urllib.parse import quote

from pydantic import BaseModel, ValidationError

from ..models.crop import Crop
from ..models.interest import Interest, InterestCreate, InterestStatus
from ..models.user import UserProfile
from .http import ApiClient, ApiError


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

Payload = Union[BaseModel, Mapping[str, Any]]


def unwrap(body: Any) -> Any:
    """The server wraps results as {"success": ..., "data": ...}."""
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body


def parse_one(model: Type[T], body: Any) -> T:
    data = unwrap(body)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error(f"Invalid {model.__name__} in response: {e}")
        raise ApiError(f"Unexpected {model.__name__.lower()} data from server", payload=data) from e


def parse_many(model: Type[T], body: Any) -> list[T]:
    """Parse a list of records, skipping the ones that do not validate."""
    data = unwrap(body)
    if not isinstance(data, list):
        return []

    items: list[T] = []
    for raw in data:
        try:
            items.append(model.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Skipping invalid {model.__name__}: {e.error_count()} errors")
    return items


def to_payload(data: Payload) -> dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True, exclude_none=True)
    return dict(data)


def _email_path(email: str) -> str:
    return quote(email, safe="@")


class CropsAPI:
    """/api/crops"""

    def __init__(self, client: ApiClient):
        self.client = client

    def get_all(self, search: str = "") -> list[Crop]:
        params = {"search": search} if search else None
        crops = parse_many(Crop, self.client.get("/api/crops", params=params))
        logger.info(f"Loaded {len(crops)} crops")
        return crops

    def get_latest(self) -> list[Crop]:
        return parse_many(Crop, self.client.get("/api/crops/latest"))

    def get_by_id(self, crop_id: str) -> Crop:
        return parse_one(Crop, self.client.get(f"/api/crops/{crop_id}"))

    def create(self, data: Payload, actor_email: str) -> Crop:
        body = self.client.post("/api/crops", json=to_payload(data), actor_email=actor_email)
        return parse_one(Crop, body)

    def update(self, crop_id: str, data: Payload, actor_email: str) -> Any:
        return unwrap(
            self.client.put(f"/api/crops/{crop_id}", json=to_payload(data), actor_email=actor_email)
        )

    def delete(self, crop_id: str, actor_email: str) -> Any:
        return unwrap(self.client.delete(f"/api/crops/{crop_id}", actor_email=actor_email))


class InterestsAPI:
    """/api/interests"""

    def __init__(self, client: ApiClient):
        self.client = client

    def add(self, data: Union[InterestCreate, Mapping[str, Any]]) -> Any:
        return unwrap(self.client.post("/api/interests", json=to_payload(data)))

    def get_sent(self, email: str) -> list[Interest]:
        return parse_many(Interest, self.client.get("/api/interests/sent", params={"email": email}))

    def get_received(self, email: str) -> list[Interest]:
        return parse_many(Interest, self.client.get("/api/interests/received", params={"email": email}))

    def update_status(self, interest_id: str, crop_id: str, status: InterestStatus) -> Any:
        body = {"interestId": interest_id, "cropId": crop_id, "status": status}
        return unwrap(self.client.put("/api/interests/status", json=body))


class UsersAPI:
    """/api/users"""

    def __init__(self, client: ApiClient):
        self.client = client

    def create(self, data: Payload) -> Any:
        return unwrap(self.client.post("/api/users", json=to_payload(data)))

    def get_by_email(self, email: str) -> UserProfile:
        return parse_one(UserProfile, self.client.get(f"/api/users/{_email_path(email)}"))

    def update(self, email: str, data: Payload) -> Any:
        return unwrap(self.client.put(f"/api/users/{_email_path(email)}", json=to_payload(data)))

    def get_all(self) -> list[UserProfile]:
        return parse_many(UserProfile, self.client.get("/api/users"))


class MarketplaceAPI:
    """All resource wrappers sharing one ApiClient."""

    def __init__(self, client: Optional[ApiClient] = None):
        self.client = client or ApiClient()
        self.crops = CropsAPI(self.client)
        self.interests = InterestsAPI(self.client)
        self.users = UsersAPI(self.client)
