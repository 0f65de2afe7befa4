"""
User profile model.
"""
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field


Role = Literal["farmer", "trader", "buyer"]
ROLES: tuple[str, ...] = get_args(Role)


class UserProfile(BaseModel):
    """Profile record stored by the API, keyed by email."""
    model_config = ConfigDict(populate_by_name=True)

    email: str
    name: str = ""
    photo_url: str = Field(default="", alias="photoURL")
    phone: str = ""
    address: str = ""
    bio: str = ""
    role: Role = "farmer"

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
