"""
Form validation shared by every entry point.

Each form is a pydantic model. Failures are collected into a
`{form_field: message}` mapping so the view can show them inline,
and they are raised before any request is made.
"""
from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError

from .models.crop import Crop, CropType, Unit
from .models.interest import InterestCreate
from .models.user import Role


T = TypeVar("T", bound=BaseModel)

# Error types whose own message is shown instead of the per-field default
_OWN_MESSAGES = {"quantity_exceeds_stock"}


class FormValidationError(ValueError):
    """A form failed validation; `errors` maps form field to message."""

    def __init__(self, errors: dict[str, str]):
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in errors.items()))
        self.errors = errors


class CropForm(BaseModel):
    """Add/edit crop form."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    type: CropType
    price_per_unit: float = Field(alias="pricePerUnit", gt=0)
    unit: Unit = "kg"
    quantity: float = Field(gt=0)
    description: str = Field(min_length=1)
    location: str = Field(min_length=1)
    image: Optional[str] = None

    @field_validator("image", mode="before")
    @classmethod
    def blank_image(cls, v: Any) -> Optional[str]:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    def to_payload(self, owner_email: str, owner_name: str) -> dict[str, Any]:
        payload = self.model_dump(by_alias=True, exclude_none=True)
        payload["owner"] = {"ownerEmail": owner_email, "ownerName": owner_name}
        return payload

    @classmethod
    def from_crop(cls, crop: Crop) -> dict[str, str]:
        """Prefill values for the edit form."""
        return {
            "name": crop.name,
            "type": crop.type,
            "pricePerUnit": str(crop.price_per_unit),
            "unit": crop.unit,
            "quantity": str(crop.quantity),
            "description": crop.description,
            "location": crop.location,
            "image": crop.image or "",
        }


CROP_MESSAGES = {
    "name": "Crop name is required",
    "type": "Crop type is required",
    "pricePerUnit": "Valid price is required",
    "unit": "Unit is not supported",
    "quantity": "Valid quantity is required",
    "description": "Description is required",
    "location": "Location is required",
    "image": "Image must be a URL",
}


class InterestForm(BaseModel):
    """Send-interest form; the crop's stock is passed as validation context."""
    model_config = ConfigDict(str_strip_whitespace=True)

    quantity: int = Field(gt=0)
    message: str = ""

    @field_validator("quantity")
    @classmethod
    def within_stock(cls, v: int, info: ValidationInfo) -> int:
        max_quantity = (info.context or {}).get("max_quantity")
        if max_quantity is not None and v > max_quantity:
            raise PydanticCustomError("quantity_exceeds_stock", "Quantity cannot exceed available stock")
        return v

    def to_create(self, crop_id: str, user_email: str, user_name: str) -> InterestCreate:
        return InterestCreate(
            crop_id=crop_id,
            user_email=user_email,
            user_name=user_name,
            quantity=self.quantity,
            message=self.message,
        )


INTEREST_MESSAGES = {
    "quantity": "Valid quantity is required",
    "message": "Message must be text",
}


class ProfileForm(BaseModel):
    """Profile edit form. The email is fixed by the session."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    photo_url: str = Field(default="", alias="photoURL")
    phone: str = ""
    address: str = ""
    bio: str = ""
    role: Role = "farmer"


PROFILE_MESSAGES = {
    "name": "Name is required",
    "role": "Role must be farmer, trader or buyer",
}


def _form_field(model: Type[BaseModel], loc: Any) -> str:
    """Report errors under the field name the form uses (the alias)."""
    field = model.model_fields.get(str(loc))
    if field is not None and field.alias:
        return field.alias
    return str(loc)


def validate_form(
    model: Type[T],
    data: Mapping[str, Any],
    messages: Mapping[str, str],
    context: Optional[dict[str, Any]] = None,
) -> T:
    """
    Validate raw form values against a form model.

    Raises:
        FormValidationError: With one message per failing field
    """
    try:
        return model.model_validate(dict(data), context=context)
    except ValidationError as e:
        errors: dict[str, str] = {}
        for err in e.errors():
            field = _form_field(model, err["loc"][0]) if err["loc"] else "form"
            if err["type"] in _OWN_MESSAGES:
                message = err["msg"]
            else:
                message = messages.get(field, err["msg"])
            errors.setdefault(field, message)
        raise FormValidationError(errors) from e


def validate_crop_form(data: Mapping[str, Any]) -> CropForm:
    return validate_form(CropForm, data, CROP_MESSAGES)


def validate_interest_form(data: Mapping[str, Any], max_quantity: Optional[float] = None) -> InterestForm:
    return validate_form(InterestForm, data, INTEREST_MESSAGES, context={"max_quantity": max_quantity})


def validate_profile_form(data: Mapping[str, Any]) -> ProfileForm:
    return validate_form(ProfileForm, data, PROFILE_MESSAGES)
