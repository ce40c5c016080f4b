"""Tests for registration, login, token refresh and the current user."""

from tests.fixtures.data_fixtures import API, PASSWORD, bearer, login, register_user


class TestRegister:
    """Tests for POST /auth/register."""

    def test_register(self, client):
        data = register_user(client, "new.user@greenfields.io", "New User")

        assert data["email"] == "new.user@greenfields.io"
        assert data["full_name"] == "New User"
        assert data["message"] == "User registered successfully"
        assert "password" not in data and "password_hash" not in data

    def test_duplicate_email(self, client):
        register_user(client, "dup@greenfields.io")

        response = client.post(
            f"{API}/auth/register",
            json={"email": "dup@greenfields.io", "password": PASSWORD, "full_name": "Again"},
        )

        assert response.status_code == 400
        assert response.json() == {"detail": "Email already registered", "code": "BAD_REQUEST"}

    def test_short_password(self, client):
        response = client.post(
            f"{API}/auth/register",
            json={"email": "short@greenfields.io", "password": "short", "full_name": "Short"},
        )

        assert response.status_code == 422


class TestLogin:
    """Tests for POST /auth/login."""

    def test_login_returns_tokens_and_memberships(self, client, tenant):
        data = login(client, "owner@greenfields.io")

        assert data["token_type"] == "bearer"
        assert data["access_token"] and data["refresh_token"]
        assert data["expires_in"] == 30 * 60
        assert [m["tenant_id"] for m in data["memberships"]] == [tenant["id"]]
        assert data["memberships"][0]["role"] == "superadmin"

    def test_wrong_password(self, client):
        register_user(client, "careful@greenfields.io")

        response = client.post(
            f"{API}/auth/login", json={"email": "careful@greenfields.io", "password": "not-the-password"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_unknown_email(self, client):
        response = client.post(f"{API}/auth/login", json={"email": "ghost@greenfields.io", "password": PASSWORD})

        assert response.status_code == 401


class TestRefresh:
    """Tests for POST /auth/refresh."""

    def test_refresh(self, client):
        register_user(client, "refresh@greenfields.io")
        tokens = login(client, "refresh@greenfields.io")

        response = client.post(f"{API}/auth/refresh", json={"refresh_token": tokens["refresh_token"]})

        assert response.status_code == 200
        new_access = response.json()["access_token"]
        assert client.get(f"{API}/users/me", headers=bearer(new_access)).status_code == 200

    def test_access_token_cannot_refresh(self, client):
        register_user(client, "refresh2@greenfields.io")
        tokens = login(client, "refresh2@greenfields.io")

        response = client.post(f"{API}/auth/refresh", json={"refresh_token": tokens["access_token"]})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token type"

    def test_garbage_refresh_token(self, client):
        response = client.post(f"{API}/auth/refresh", json={"refresh_token": "not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired refresh token"


class TestCurrentUser:
    """Tests for /users/me."""

    def test_missing_header(self, client):
        response = client.get(f"{API}/users/me")

        assert response.status_code == 401
        assert response.json() == {"detail": "Authorization header is required", "code": "UNAUTHORIZED"}

    def test_refresh_token_is_not_a_bearer(self, client):
        register_user(client, "bearer@greenfields.io")
        tokens = login(client, "bearer@greenfields.io")

        response = client.get(f"{API}/users/me", headers=bearer(tokens["refresh_token"]))

        assert response.status_code == 401
        assert response.json()["detail"] == "Cannot use refresh token for authentication"

    def test_invalid_token(self, client):
        response = client.get(f"{API}/users/me", headers=bearer("abc.def.ghi"))

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"

    def test_profile(self, client, owner_headers, tenant):
        response = client.get(f"{API}/users/me", headers=owner_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "owner@greenfields.io"
        assert data["full_name"] == "Olivia Owner"
        assert data["memberships"][0]["tenant_name"] == "Green Fields Farming"

    def test_update_name(self, client, owner_headers):
        response = client.patch(f"{API}/users/me", json={"full_name": "Olivia O."}, headers=owner_headers)

        assert response.status_code == 200
        assert response.json()["full_name"] == "Olivia O."

    def test_change_password(self, client, owner_headers):
        response = client.put(
            f"{API}/users/me/password",
            json={"current_password": PASSWORD, "new_password": "An0ther-secret"},
            headers=owner_headers,
        )

        assert response.status_code == 200
        assert login(client, "owner@greenfields.io", "An0ther-secret")["access_token"]

    def test_change_password_requires_current(self, client, owner_headers):
        response = client.put(
            f"{API}/users/me/password",
            json={"current_password": "wrong-password", "new_password": "An0ther-secret"},
            headers=owner_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Current password is incorrect"
