"""Users, tenants and authorization headers for route tests."""

import pytest

API = "/api/v1"
PASSWORD = "Sup3r-secret-pass"

OWNER_EMAIL = "owner@greenfields.io"
MEMBER_EMAIL = "analyst@greenfields.io"
OUTSIDER_EMAIL = "someone@elsewhere.io"


def register_user(client, email: str, full_name: str = "Test User", password: str = PASSWORD) -> dict:
    response = client.post(
        f"{API}/auth/register",
        json={"email": email, "password": password, "full_name": full_name},
    )
    assert response.status_code == 201, response.text
    return response.json()


def login(client, email: str, password: str = PASSWORD) -> dict:
    response = client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def signup_headers(client, email: str, full_name: str = "Test User") -> dict:
    """Register a user and return headers carrying their access token."""
    register_user(client, email, full_name)
    return bearer(login(client, email)["access_token"])


@pytest.fixture
def owner_headers(client):
    return signup_headers(client, OWNER_EMAIL, "Olivia Owner")


@pytest.fixture
def outsider_headers(client):
    return signup_headers(client, OUTSIDER_EMAIL, "Oscar Outsider")


@pytest.fixture
def tenant(client, owner_headers):
    """A tenant created by the owner, who becomes its superadmin."""
    response = client.post(
        f"{API}/tenants", json={"name": "Green Fields Farming"}, headers=owner_headers
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def member_headers(client, tenant, owner_headers):
    """A second user who joined the tenant through an invitation."""
    response = client.post(
        f"{API}/tenants/{tenant['id']}/invitations",
        json={"email": MEMBER_EMAIL, "role": "member"},
        headers=owner_headers,
    )
    assert response.status_code == 201, response.text
    token = response.json()["invitation"]["token"]

    response = client.post(
        f"{API}/invitations/accept-with-signup",
        json={
            "token": token,
            "email": MEMBER_EMAIL,
            "password": PASSWORD,
            "full_name": "Ana Analyst",
        },
    )
    assert response.status_code == 200, response.text
    return bearer(response.json()["access_token"])
