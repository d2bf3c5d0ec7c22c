"""
Functional tests for the /api/auth endpoints.
"""

from ridehub.common.auth.jwt import verify_access_token
from ridehub.common.auth.password import set_hash_iterations
from ridehub.common.auth.user import UserStatus
from ridehub.services.accounts import unknown_user_hash
from ridehub.tests.conftest import PASSWORD, auth_header, sign_up, signup_payload


class TestSignup:
    def test_rider_signup(self, client):
        response = client.post("/api/auth/signup", json=signup_payload("rider", email="Rider@Example.com"))

        assert response.status_code == 201
        body = response.json()
        assert set(body) == {"accessToken", "refreshToken", "user"}
        assert set(body["user"]) == {"id", "email", "firstName", "lastName", "role", "status"}
        assert body["user"]["email"] == "rider@example.com"
        assert body["user"]["role"] == "rider"
        assert body["user"]["status"] == "active"

        claims = verify_access_token(body["accessToken"])
        assert claims.id == body["user"]["id"]
        assert claims.role.value == "rider"

    def test_driver_signup_creates_pending_profile(self, client):
        body = sign_up(client, "driver")

        response = client.get("/api/profile/driver", headers=auth_header(body["accessToken"]))
        assert response.status_code == 200
        profile = response.json()
        assert profile["status"] == "pending_approval"
        assert profile["isAvailable"] is False
        assert profile["documents"] == []

    def test_duplicate_email_is_case_insensitive(self, client, store):
        sign_up(client, "rider", email="jane@example.com")

        response = client.post("/api/auth/signup", json=signup_payload("driver", email="JANE@example.com"))

        assert response.status_code == 409
        assert response.json() == {"error": "Email already registered"}
        assert len(store.list_users()) == 2  # bootstrap admin plus the first signup

    def test_validation_errors(self, client, store):
        response = client.post(
            "/api/auth/signup",
            json=signup_payload("rider", password="short", phoneNumber="123"),
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation error"
        assert {d["field"] for d in body["details"]} == {"password", "phoneNumber"}
        assert len(store.list_users()) == 1

    def test_admin_signup_refused(self, client):
        response = client.post("/api/auth/signup", json=signup_payload("admin"))
        assert response.status_code == 400

    def test_malformed_json(self, client):
        response = client.post(
            "/api/auth/signup",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {
            "error": "Validation error",
            "details": [{"field": "body", "message": "Request body must be valid JSON"}],
        }

    def test_password_never_returned(self, client):
        body = sign_up(client, "rider")
        me = client.get("/api/auth/me", headers=auth_header(body["accessToken"])).json()
        profile = client.get("/api/profile", headers=auth_header(body["accessToken"])).json()

        for projection in (body["user"], me, profile):
            assert "password" not in projection
        assert PASSWORD not in str(me)


class TestLogin:
    def test_login(self, client, rider):
        response = client.post(
            "/api/auth/login",
            json={"email": rider["user"]["email"].upper(), "password": PASSWORD},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["id"] == rider["user"]["id"]
        assert verify_access_token(body["accessToken"]).id == rider["user"]["id"]

    def test_unknown_email_and_wrong_password_are_indistinguishable(self, client, rider):
        unknown = client.post("/api/auth/login", json={"email": "nobody@ridehub.test", "password": PASSWORD})
        wrong = client.post(
            "/api/auth/login",
            json={"email": rider["user"]["email"], "password": "wrong-password"},
        )

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json() == {"error": "Invalid email or password"}

    def test_inactive_account_refused(self, client, store, rider):
        store.update_user(rider["user"]["id"], status=UserStatus.INACTIVE)

        response = client.post("/api/auth/login", json={"email": rider["user"]["email"], "password": PASSWORD})

        assert response.status_code == 403
        assert response.json() == {"error": "Account is not active"}

    def test_inactive_account_with_wrong_password_gets_credentials_error(self, client, store, rider):
        store.update_user(rider["user"]["id"], status=UserStatus.INACTIVE)

        response = client.post(
            "/api/auth/login",
            json={"email": rider["user"]["email"], "password": "wrong-password"},
        )

        assert response.status_code == 401

    def test_unknown_email_check_follows_configured_iterations(self, client, settings):
        rounds = int(unknown_user_hash().split("$")[1])
        assert rounds == settings.PASSWORD_HASH_ITERATIONS

        set_hash_iterations(2000)
        try:
            assert unknown_user_hash().split("$")[1] == "2000"
        finally:
            set_hash_iterations(settings.PASSWORD_HASH_ITERATIONS)

    def test_missing_password(self, client):
        response = client.post("/api/auth/login", json={"email": "a@b.co"})
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "password"


class TestRefresh:
    def test_refresh(self, client, rider):
        response = client.post("/api/auth/refresh", json={"refreshToken": rider["refreshToken"]})

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"accessToken", "refreshToken"}
        assert verify_access_token(body["accessToken"]).id == rider["user"]["id"]

    def test_access_token_cannot_refresh(self, client, rider):
        response = client.post("/api/auth/refresh", json={"refreshToken": rider["accessToken"]})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired refresh token"}

    def test_refresh_carries_current_stored_status(self, client, store, rider):
        store.update_user(rider["user"]["id"], status=UserStatus.INACTIVE)

        response = client.post("/api/auth/refresh", json={"refreshToken": rider["refreshToken"]})

        assert response.status_code == 200
        assert verify_access_token(response.json()["accessToken"]).status.value == "inactive"

    def test_required(self, client):
        response = client.post("/api/auth/refresh", json={})
        assert response.status_code == 400
        assert response.json()["details"] == [{"field": "refreshToken", "message": "Field required"}]


class TestMe:
    def test_me(self, client, rider):
        response = client.get("/api/auth/me", headers=auth_header(rider["accessToken"]))

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == rider["user"]["id"]
        assert body["emailVerified"] is False
        assert body["phoneNumber"] == "5551234567"

    def test_missing_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json() == {"error": "No authentication token provided"}

    def test_invalid_token(self, client, rider):
        for header in (
            {"Authorization": "Bearer not-a-token"},
            auth_header(rider["refreshToken"]),
        ):
            response = client.get("/api/auth/me", headers=header)
            assert response.status_code == 401
            assert response.json() == {"error": "Invalid or expired token"}

    def test_non_bearer_scheme(self, client, rider):
        response = client.get("/api/auth/me", headers={"Authorization": f"Token {rider['accessToken']}"})
        assert response.status_code == 401
        assert response.json() == {"error": "No authentication token provided"}
