"""
Tests for Pydantic models.
"""
from datetime import timezone

import pytest
from pydantic import ValidationError

from krishilink.models import (
    Crop,
    Interest,
    InterestCreate,
    QueryState,
    Toast,
    UserProfile,
)


RAW_CROP = {
    "_id": "665f1c",
    "name": "Tomato",
    "type": "Vegetable",
    "pricePerUnit": 55,
    "unit": "kg",
    "quantity": 400,
    "description": "Fresh red tomatoes",
    "location": "Jessore",
    "image": "https://example.com/tomato.jpg",
    "owner": {"ownerEmail": "karim@example.com", "ownerName": "Karim"},
    "createdAt": "2025-03-01T10:00:00Z",
}


class TestCrop:

    def test_parses_wire_format(self):
        crop = Crop.model_validate(RAW_CROP)

        assert crop.id == "665f1c"
        assert crop.price_per_unit == 55
        assert crop.owner_email == "karim@example.com"
        assert crop.owner.owner_name == "Karim"
        assert crop.created_at.tzinfo is not None

    def test_flat_owner_and_image_url(self):
        raw = dict(RAW_CROP)
        raw.pop("owner")
        raw.pop("image")
        raw["ownerEmail"] = "flat@example.com"
        raw["imageUrl"] = "https://example.com/x.jpg"

        crop = Crop.model_validate(raw)

        assert crop.owner_email == "flat@example.com"
        assert crop.image == "https://example.com/x.jpg"

    def test_blank_image_is_none(self):
        crop = Crop.model_validate({**RAW_CROP, "image": "  "})
        assert crop.image is None

    def test_naive_timestamp_is_utc(self):
        crop = Crop.model_validate({**RAW_CROP, "createdAt": "2025-03-01T10:00:00"})
        assert crop.created_at.tzinfo == timezone.utc

    @pytest.mark.parametrize("field", ["pricePerUnit", "quantity"])
    def test_negative_amounts_rejected(self, field):
        with pytest.raises(ValidationError):
            Crop.model_validate({**RAW_CROP, field: -1})

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Crop.model_validate({**RAW_CROP, "type": "Mushroom"})

    def test_crop_is_frozen(self):
        crop = Crop.model_validate(RAW_CROP)
        with pytest.raises(ValidationError):
            crop.created_at = None

    def test_is_owned_by(self):
        crop = Crop.model_validate(RAW_CROP)
        assert crop.is_owned_by("karim@example.com")
        assert not crop.is_owned_by("other@example.com")
        assert not crop.is_owned_by(None)


class TestInterest:

    def test_parses_wire_format(self):
        interest = Interest.model_validate({
            "_id": "i1",
            "cropId": "665f1c",
            "userEmail": "buyer@example.com",
            "userName": "Rahim",
            "quantity": 20,
            "message": "Can you deliver?",
            "status": "pending",
            "cropDetails": {"name": "Tomato", "unit": "kg", "pricePerUnit": 55},
        })

        assert interest.crop_id == "665f1c"
        assert interest.is_pending
        assert interest.crop_details.price_per_unit == 55

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            Interest.model_validate({
                "_id": "i1", "cropId": "c", "userEmail": "b@example.com",
                "quantity": 1, "status": "cancelled",
            })

    def test_create_payload_uses_wire_names(self):
        payload = InterestCreate(
            crop_id="c1", user_email="b@example.com", user_name="B", quantity=3,
        ).to_payload()

        assert payload == {
            "cropId": "c1",
            "userEmail": "b@example.com",
            "userName": "B",
            "quantity": 3,
            "message": "",
        }


class TestUserProfile:

    def test_defaults(self):
        profile = UserProfile(email="a@example.com")
        assert profile.role == "farmer"
        assert profile.to_payload()["photoURL"] == ""

    def test_role_restricted(self):
        with pytest.raises(ValidationError):
            UserProfile(email="a@example.com", role="admin")


class TestQueryAndToast:

    def test_cleared_query_is_default(self):
        assert QueryState.cleared().is_default
        assert not QueryState(sort_key="price-low").is_default

    def test_toast_title(self):
        assert Toast(id="1", message="ok", duration_ms=100).title == "Success!"
        assert Toast(id="2", message="no", kind="error", duration_ms=100).title == "Error!"
