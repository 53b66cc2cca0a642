"""
Tests for authentication endpoints.
"""

from datetime import timedelta

from cuehall.core.security import (
    build_token_payload,
    create_access_token,
    create_refresh_token,
    get_password_hash,
    verify_password,
)

# Password every conftest profile is seeded with
TEST_PASSWORD = "testpass123"


class TestPasswordHashing:

    def test_hash_verifies(self):
        hashed = get_password_hash("s3cret-pass")

        assert hashed != "s3cret-pass"
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("wrong-pass", hashed)


class TestLogin:

    def test_login_success(self, client, seed_admin):
        response = client.post("/v1/auth/login", json={"email": "admin@poolhall.io", "password": TEST_PASSWORD})

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["expires_in"] > 0

    def test_login_wrong_password(self, client, seed_admin):
        response = client.post("/v1/auth/login", json={"email": "admin@poolhall.io", "password": "nope-nope"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_login_unknown_email(self, client, db_session):
        response = client.post("/v1/auth/login", json={"email": "ghost@poolhall.io", "password": TEST_PASSWORD})
        assert response.status_code == 401

    def test_login_inactive_profile(self, client, db_session, seed_admin):
        seed_admin.active = False
        db_session.commit()

        response = client.post("/v1/auth/login", json={"email": "admin@poolhall.io", "password": TEST_PASSWORD})
        assert response.status_code == 401

    def test_login_malformed_body(self, client, db_session):
        response = client.post("/v1/auth/login", json={"email": "not-an-email"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request data"


class TestCurrentUser:

    def test_me(self, client, admin_headers, seed_company):
        response = client.get("/v1/auth/me", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "admin@poolhall.io"
        assert data["role"] == "ADMIN"
        assert data["company_name"] == "Corner Pocket"
        assert data["is_superadmin"] is False

    def test_missing_token(self, client, db_session):
        response = client.get("/v1/auth/me")

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_garbage_token(self, client, db_session):
        response = client.get("/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_expired_token(self, client, seed_admin):
        token = create_access_token(build_token_payload(seed_admin), expires_delta=timedelta(minutes=-1))

        response = client.get("/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_refresh_token_rejected_as_access(self, client, seed_admin):
        token = create_refresh_token({"user_id": str(seed_admin.id)})

        response = client.get("/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token type"}

    def test_deactivated_profile_loses_access(self, client, db_session, seed_admin, admin_headers):
        seed_admin.active = False
        db_session.commit()

        response = client.get("/v1/auth/me", headers=admin_headers)
        assert response.status_code == 401


class TestRefresh:

    def test_refresh_issues_new_pair(self, client, seed_seller):
        login = client.post(
            "/v1/auth/login", json={"email": "seller@poolhall.io", "password": TEST_PASSWORD}
        ).json()

        response = client.post("/v1/auth/refresh", json={"refresh_token": login["refresh_token"]})

        assert response.status_code == 200
        access = response.json()["access_token"]
        me = client.get("/v1/auth/me", headers={"Authorization": f"Bearer {access}"})
        assert me.json()["role"] == "SELLER"

    def test_access_token_cannot_refresh(self, client, seed_seller):
        token = create_access_token(build_token_payload(seed_seller))

        response = client.post("/v1/auth/refresh", json={"refresh_token": token})
        assert response.status_code == 401
