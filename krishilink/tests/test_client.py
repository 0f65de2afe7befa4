"""
Tests for the API client, with HTTP mocked by `responses`.
"""
import json

import pytest
import requests
import responses
from responses import matchers

from krishilink.client import (
    ApiClient,
    ApiError,
    MarketplaceAPI,
    TransportError,
)


BASE = "http://api.test"

CROP = {
    "_id": "c1",
    "name": "Potato",
    "type": "Vegetable",
    "pricePerUnit": 25,
    "unit": "kg",
    "quantity": 1000,
    "description": "Diamond potatoes",
    "location": "Munshiganj",
    "owner": {"ownerEmail": "farmer@example.com", "ownerName": "Farmer"},
    "createdAt": "2025-02-01T08:00:00Z",
}


@pytest.fixture
def api() -> MarketplaceAPI:
    return MarketplaceAPI(ApiClient(base_url=BASE + "/", token="dev-token", timeout=5))


class TestApiClient:

    @responses.activate
    def test_sends_json_and_bearer_token(self, api):
        responses.add(
            responses.GET,
            f"{BASE}/api/crops",
            json={"success": True, "data": []},
            match=[matchers.header_matcher({
                "Authorization": "Bearer dev-token",
                "Content-Type": "application/json",
            })],
        )
        assert api.crops.get_all() == []

    @responses.activate
    def test_token_getter_wins_over_static_token(self):
        client = ApiClient(base_url=BASE, token="dev-token", token_getter=lambda: "session-token")
        responses.add(
            responses.GET,
            f"{BASE}/api/users",
            json={"data": []},
            match=[matchers.header_matcher({"Authorization": "Bearer session-token"})],
        )
        assert client.get("/api/users") == {"data": []}

    @responses.activate
    def test_token_getter_falls_back_when_signed_out(self):
        client = ApiClient(base_url=BASE, token="dev-token", token_getter=lambda: None)
        responses.add(
            responses.GET,
            f"{BASE}/api/users",
            json={"data": []},
            match=[matchers.header_matcher({"Authorization": "Bearer dev-token"})],
        )
        client.get("/api/users")

    @responses.activate
    def test_error_message_comes_from_body(self, api):
        responses.add(
            responses.DELETE,
            f"{BASE}/api/crops/c1",
            status=403,
            body=json.dumps({"success": False, "message": "Not your crop"}),
        )
        with pytest.raises(ApiError) as exc_info:
            api.crops.delete("c1", "someone@example.com")

        assert exc_info.value.message == "Not your crop"
        assert exc_info.value.status_code == 403

    @responses.activate
    def test_error_without_message_uses_fallback(self, api):
        responses.add(responses.GET, f"{BASE}/api/crops/c1", status=500, body="<html>oops</html>")
        with pytest.raises(ApiError) as exc_info:
            api.crops.get_by_id("c1")
        assert exc_info.value.message == "Something went wrong"

    @responses.activate
    def test_transport_failure(self, api):
        responses.add(
            responses.GET,
            f"{BASE}/api/crops",
            body=requests.ConnectionError("connection refused"),
        )
        with pytest.raises(TransportError):
            api.crops.get_all()

    @responses.activate
    def test_not_found_detection(self, api):
        responses.add(
            responses.GET,
            f"{BASE}/api/users/new@example.com",
            status=404,
            json={"message": "User not found"},
        )
        with pytest.raises(ApiError) as exc_info:
            api.users.get_by_email("new@example.com")
        assert exc_info.value.is_not_found


class TestCropsAPI:

    @responses.activate
    def test_get_all_skips_invalid_records(self, api):
        broken = {**CROP, "_id": "c2", "pricePerUnit": -5}
        responses.add(responses.GET, f"{BASE}/api/crops", json={"data": [CROP, broken]})

        crops = api.crops.get_all()

        assert [c.id for c in crops] == ["c1"]

    @responses.activate
    def test_get_all_with_search(self, api):
        responses.add(
            responses.GET,
            f"{BASE}/api/crops",
            json={"data": [CROP]},
            match=[matchers.query_param_matcher({"search": "potato"})],
        )
        assert len(api.crops.get_all("potato")) == 1

    @responses.activate
    def test_get_latest(self, api):
        responses.add(responses.GET, f"{BASE}/api/crops/latest", json={"data": [CROP]})
        assert api.crops.get_latest()[0].name == "Potato"

    @responses.activate
    def test_create_sends_owner_header(self, api):
        responses.add(
            responses.POST,
            f"{BASE}/api/crops",
            json={"success": True, "data": CROP},
            status=201,
            match=[matchers.header_matcher({"user-email": "farmer@example.com"})],
        )
        crop = api.crops.create({"name": "Potato"}, "farmer@example.com")

        assert crop.id == "c1"
        assert json.loads(responses.calls[0].request.body) == {"name": "Potato"}

    @responses.activate
    def test_update(self, api):
        responses.add(
            responses.PUT,
            f"{BASE}/api/crops/c1",
            json={"success": True, "data": {"modifiedCount": 1}},
            match=[matchers.header_matcher({"user-email": "farmer@example.com"})],
        )
        assert api.crops.update("c1", {"quantity": 5}, "farmer@example.com") == {"modifiedCount": 1}


class TestInterestsAPI:

    @responses.activate
    def test_received_uses_email_query(self, api):
        responses.add(
            responses.GET,
            f"{BASE}/api/interests/received",
            json={"data": [{
                "_id": "i1", "cropId": "c1", "userEmail": "buyer@example.com",
                "userName": "Buyer", "quantity": 10, "status": "pending",
            }]},
            match=[matchers.query_param_matcher({"email": "farmer@example.com"})],
        )
        interests = api.interests.get_received("farmer@example.com")
        assert interests[0].user_name == "Buyer"

    @responses.activate
    def test_update_status_body(self, api):
        responses.add(
            responses.PUT,
            f"{BASE}/api/interests/status",
            json={"success": True},
            match=[matchers.json_params_matcher({
                "interestId": "i1", "cropId": "c1", "status": "accepted",
            })],
        )
        api.interests.update_status("i1", "c1", "accepted")


class TestUsersAPI:

    @responses.activate
    def test_get_by_email(self, api):
        responses.add(
            responses.GET,
            f"{BASE}/api/users/farmer@example.com",
            json={"data": {"email": "farmer@example.com", "name": "Farmer", "photoURL": "p.png"}},
        )
        profile = api.users.get_by_email("farmer@example.com")
        assert profile.photo_url == "p.png"

    @responses.activate
    def test_bad_profile_payload_raises_api_error(self, api):
        responses.add(
            responses.GET,
            f"{BASE}/api/users/farmer@example.com",
            json={"data": {"name": "No email"}},
        )
        with pytest.raises(ApiError):
            api.users.get_by_email("farmer@example.com")
