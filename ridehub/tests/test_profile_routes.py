"""
Functional tests for the /api/profile endpoints.
"""

import pytest

from ridehub.common.auth.user import UserStatus
from ridehub.tests.conftest import auth_header


class TestProfile:
    def test_rider_profile(self, client, rider):
        response = client.get("/api/profile", headers=auth_header(rider["accessToken"]))

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == rider["user"]["id"]
        assert body["role"] == "rider"
        assert body["riderProfile"]["userId"] == rider["user"]["id"]
        assert "driverProfile" not in body
        assert body["createdAt"] is not None

    def test_driver_profile_is_nested(self, client, driver):
        body = client.get("/api/profile", headers=auth_header(driver["accessToken"])).json()

        assert body["driverProfile"]["status"] == "pending_approval"
        assert "riderProfile" not in body

    def test_update_profile(self, client, rider):
        headers = auth_header(rider["accessToken"])
        response = client.patch(
            "/api/profile",
            json={"firstName": "Renamed", "phoneNumber": "5559876543", "role": "admin"},
            headers=headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["firstName"] == "Renamed"
        assert body["lastName"] == "Rider"
        assert body["phoneNumber"] == "5559876543"
        assert body["role"] == "rider"

        assert client.get("/api/profile", headers=headers).json()["firstName"] == "Renamed"

    def test_update_profile_validation(self, client, rider):
        response = client.patch(
            "/api/profile",
            json={"phoneNumber": "12345"},
            headers=auth_header(rider["accessToken"]),
        )

        assert response.status_code == 400
        assert response.json()["details"] == [
            {"field": "phoneNumber", "message": "Phone number must be at least 10 digits"},
        ]

    def test_requires_authentication(self, client):
        assert client.get("/api/profile").status_code == 401
        assert client.patch("/api/profile", json={"firstName": "X"}).status_code == 401

    def test_malformed_body_checked_after_authentication(self, client, store, rider):
        headers = {"Content-Type": "application/json"}

        response = client.patch("/api/profile", content=b"{bad", headers=headers)
        assert response.status_code == 401

        store.update_user(rider["user"]["id"], status=UserStatus.INACTIVE)
        response = client.patch(
            "/api/profile",
            content=b"{bad",
            headers={**headers, **auth_header(rider["accessToken"])},
        )
        assert response.status_code == 403

    @pytest.mark.parametrize("status", [UserStatus.INACTIVE, UserStatus.PENDING, UserStatus.REJECTED])
    def test_inactive_account_blocked_despite_valid_token(self, client, store, rider, status):
        store.update_user(rider["user"]["id"], status=status)

        response = client.get("/api/profile", headers=auth_header(rider["accessToken"]))

        assert response.status_code == 403
        assert response.json() == {"error": "Account is not active"}

    def test_authentication_checked_before_validation(self, client):
        response = client.patch("/api/profile", json={"phoneNumber": "1"})
        assert response.status_code == 401


class TestDriverProfile:
    def test_update_driver_profile(self, client, driver):
        response = client.patch(
            "/api/profile/driver",
            json={
                "licenseNumber": "DL-12345",
                "licenseExpiry": "2030-01-01T00:00:00Z",
                "vehicleType": "sedan",
                "vehicleNumber": "ABC-123",
                "status": "approved",
            },
            headers=auth_header(driver["accessToken"]),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["licenseNumber"] == "DL-12345"
        assert body["licenseExpiry"].startswith("2030-01-01T00:00:00")
        assert body["vehicleType"] == "sedan"
        assert body["vehicleNumber"] == "ABC-123"
        assert body["status"] == "pending_approval"

    def test_rider_cannot_use_driver_routes(self, client, rider):
        headers = auth_header(rider["accessToken"])
        responses = [
            client.get("/api/profile/driver", headers=headers),
            client.patch("/api/profile/driver", json={"vehicleType": "sedan"}, headers=headers),
            client.post("/api/profile/driver/documents", json={"type": "license"}, headers=headers),
            client.get("/api/profile/driver/documents", headers=headers),
            client.patch("/api/profile/driver/availability", json={"isAvailable": True}, headers=headers),
        ]

        for response in responses:
            assert response.status_code == 403
            assert response.json() == {"error": "Insufficient permissions"}

    def test_role_checked_before_validation(self, client, rider):
        response = client.patch(
            "/api/profile/driver/availability",
            json={"isAvailable": "yes"},
            headers=auth_header(rider["accessToken"]),
        )
        assert response.status_code == 403

    def test_rejected_driver_blocked(self, client, store, driver):
        store.reject_driver(driver["user"]["id"], "expired license", "admin-1")

        response = client.get("/api/profile/driver", headers=auth_header(driver["accessToken"]))

        assert response.status_code == 403
        assert response.json() == {"error": "Account is not active"}

    def test_license_expiry_must_be_iso_string(self, client, driver):
        headers = auth_header(driver["accessToken"])

        for value in (0, 1893456000, "1893456000"):
            response = client.patch("/api/profile/driver", json={"licenseExpiry": value}, headers=headers)
            assert response.status_code == 400
            assert response.json()["details"] == [
                {"field": "licenseExpiry", "message": "licenseExpiry must be an ISO-8601 datetime string"},
            ]

        assert client.get("/api/profile/driver", headers=headers).json()["licenseExpiry"] is None


class TestDocuments:
    def test_add_and_list_documents(self, client, driver):
        headers = auth_header(driver["accessToken"])

        first = client.post(
            "/api/profile/driver/documents",
            json={"type": "license", "url": "https://files.ridehub.test/license.pdf"},
            headers=headers,
        )
        second = client.post("/api/profile/driver/documents", json={"type": "insurance"}, headers=headers)

        assert first.status_code == 201
        document = first.json()
        assert document["type"] == "license"
        assert document["status"] == "pending"
        assert document["url"] == "https://files.ridehub.test/license.pdf"
        assert document["uploadedAt"] is not None
        assert second.status_code == 201

        listed = client.get("/api/profile/driver/documents", headers=headers)
        assert listed.status_code == 200
        assert [d["type"] for d in listed.json()] == ["license", "insurance"]
        assert listed.json()[0]["id"] == document["id"]

        profile = client.get("/api/profile/driver", headers=headers).json()
        assert len(profile["documents"]) == 2

    def test_unknown_document_type(self, client, driver):
        response = client.post(
            "/api/profile/driver/documents",
            json={"type": "passport"},
            headers=auth_header(driver["accessToken"]),
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "type"


class TestAvailability:
    def test_toggle(self, client, driver):
        headers = auth_header(driver["accessToken"])

        response = client.patch("/api/profile/driver/availability", json={"isAvailable": True}, headers=headers)
        assert response.status_code == 200
        assert response.json() == {"isAvailable": True}
        assert client.get("/api/profile/driver", headers=headers).json()["isAvailable"] is True

        response = client.patch("/api/profile/driver/availability", json={"isAvailable": False}, headers=headers)
        assert response.json() == {"isAvailable": False}

    @pytest.mark.parametrize("value", ["true", 1, None])
    def test_non_boolean_rejected(self, client, driver, value):
        headers = auth_header(driver["accessToken"])

        response = client.patch("/api/profile/driver/availability", json={"isAvailable": value}, headers=headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Validation error"
        assert response.json()["details"][0]["field"] == "isAvailable"
        assert client.get("/api/profile/driver", headers=headers).json()["isAvailable"] is False
