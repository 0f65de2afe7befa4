"""
Interest models - a buyer's offer on a crop and its status lifecycle.
"""
from datetime import datetime
from typing import Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field


InterestStatus = Literal["pending", "accepted", "rejected"]
INTEREST_STATUSES: tuple[str, ...] = get_args(InterestStatus)


class CropDetails(BaseModel):
    """Crop summary the server embeds in interest records."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    type: str = ""
    unit: str = "units"
    price_per_unit: Optional[float] = Field(default=None, alias="pricePerUnit")
    location: str = ""
    image: Optional[str] = None


class Interest(BaseModel):
    """An interest as returned by the API."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    crop_id: str = Field(alias="cropId")
    user_email: str = Field(alias="userEmail")
    user_name: str = Field(default="", alias="userName")
    quantity: int = Field(gt=0)
    message: str = ""
    status: InterestStatus = "pending"
    crop_details: Optional[CropDetails] = Field(default=None, alias="cropDetails")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"


class InterestCreate(BaseModel):
    """Payload for POST /api/interests."""
    model_config = ConfigDict(populate_by_name=True)

    crop_id: str = Field(alias="cropId")
    user_email: str = Field(alias="userEmail")
    user_name: str = Field(alias="userName")
    quantity: int = Field(gt=0)
    message: str = ""

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
