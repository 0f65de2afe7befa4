"""
Crop models - listings as served by the marketplace API.
"""
from datetime import datetime, timezone
from typing import Any, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


CropType = Literal["Vegetable", "Fruit", "Grain", "Spice", "Pulse", "Oilseed", "Fiber", "Other"]
Unit = Literal["kg", "ton", "piece", "liter", "bag"]

CROP_TYPES: tuple[str, ...] = get_args(CropType)
UNITS: tuple[str, ...] = get_args(Unit)


class CropOwner(BaseModel):
    """Who posted a crop."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    owner_email: str = Field(alias="ownerEmail")
    owner_name: str = Field(default="", alias="ownerName")


class Crop(BaseModel):
    """
    A crop-for-sale listing.
    Frozen: listings are never edited in place, updates go through the API.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(alias="_id")
    name: str
    type: CropType
    price_per_unit: float = Field(alias="pricePerUnit", ge=0)
    unit: Unit = "kg"
    quantity: float = Field(ge=0)
    description: str = ""
    location: str = ""
    image: Optional[str] = None
    owner: CropOwner
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @model_validator(mode="before")
    @classmethod
    def lift_flat_fields(cls, data: Any) -> Any:
        """Accept `imageUrl` and a flat `ownerEmail`/`ownerName` pair."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "image" not in data and "imageUrl" in data:
            data["image"] = data.pop("imageUrl")
        if "owner" not in data and "ownerEmail" in data:
            data["owner"] = {
                "ownerEmail": data.pop("ownerEmail"),
                "ownerName": data.pop("ownerName", ""),
            }
        return data

    @field_validator("image", mode="before")
    @classmethod
    def blank_image(cls, v: Any) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Naive timestamps are UTC so that every crop compares."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def owner_email(self) -> str:
        return self.owner.owner_email

    def is_owned_by(self, email: Optional[str]) -> bool:
        return bool(email) and self.owner.owner_email == email
