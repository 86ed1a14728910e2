"""Auth API tests — registration and login.

Learn: Tests cover:
1. Registration + duplicate prevention + required fields
2. Login → user + token, bad credentials → 401
3. The returned token works on a protected route
4. The password hash never appears in a response
"""

import uuid

import pytest

from conftest import TEST_PASSWORD, bearer


def _email(prefix="user"):
    return f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"


# ═══════════════════════════════════════════════════════════
# Registration
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_register_user(client):
    email = _email("reg")
    r = await client.post(
        "/auth/register",
        json={"name": "Test User", "email": email, "password": TEST_PASSWORD, "phone": "+1-555-0101"},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Registration successful"
    assert body["user"]["email"] == email
    assert body["user"]["name"] == "Test User"
    assert body["user"]["phone"] == "+1-555-0101"
    assert body["token"]
    assert "password" not in body["user"]
    assert "password_hash" not in body["user"]


@pytest.mark.asyncio
async def test_register_duplicate_email(client):
    body = {"name": "User 1", "email": _email("dup"), "password": TEST_PASSWORD}
    r1 = await client.post("/auth/register", json=body)
    assert r1.status_code == 201

    r2 = await client.post("/auth/register", json=body)
    assert r2.status_code == 400
    assert r2.json()["detail"] == "Email is already in use"


@pytest.mark.asyncio
async def test_register_email_is_case_sensitive(client):
    """Emails match exactly as stored: a different case is a different account."""
    local = uuid.uuid4().hex[:8]
    r1 = await client.post(
        "/auth/register",
        json={"name": "Lower", "email": f"{local}@example.com", "password": TEST_PASSWORD},
    )
    r2 = await client.post(
        "/auth/register",
        json={"name": "Upper", "email": f"{local.upper()}@EXAMPLE.COM", "password": TEST_PASSWORD},
    )
    assert r1.status_code == 201
    assert r2.status_code == 201


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["name", "email", "password"])
async def test_register_missing_field(client, missing):
    body = {"name": "User", "email": _email("missing"), "password": TEST_PASSWORD}
    del body[missing]
    r = await client.post("/auth/register", json=body)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_register_short_password(client):
    r = await client.post(
        "/auth/register",
        json={"name": "Short", "email": _email("short"), "password": "abc"},
    )
    assert r.status_code == 400
    assert "at least 6" in r.json()["detail"]


# ═══════════════════════════════════════════════════════════
# Login
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_login_success(client, register_user):
    user, _ = await register_user(name="Login User")

    r = await client.post(
        "/auth/login", json={"email": user["email"], "password": TEST_PASSWORD}
    )
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Login successful"
    assert body["user"]["id"] == user["id"]
    assert "password_hash" not in body["user"]
    assert body["token"]


@pytest.mark.asyncio
async def test_login_wrong_password(client, register_user):
    user, _ = await register_user()
    r = await client.post(
        "/auth/login", json={"email": user["email"], "password": "wrong_password"}
    )
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid email or password"
    assert r.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_login_nonexistent_user(client):
    """Unknown email gets the same answer as a wrong password."""
    r = await client.post(
        "/auth/login", json={"email": "nobody@example.com", "password": "whatever"}
    )
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid email or password"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"email": "a@example.com"}, {"password": "x"}])
async def test_login_missing_fields(client, body):
    r = await client.post("/auth/login", json=body)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_login_token_authenticates(client, register_user):
    """Full flow: register → login → use the login token."""
    user, _ = await register_user()
    r = await client.post(
        "/auth/login", json={"email": user["email"], "password": TEST_PASSWORD}
    )
    token = r.json()["token"]

    r = await client.get("/user/profile", headers=bearer(token))
    assert r.status_code == 200
    assert r.json()["id"] == user["id"]


@pytest.mark.asyncio
async def test_malformed_json_is_400(client):
    r = await client.post(
        "/auth/login",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field, value",
    [
        ("name", "n" * 101),
        ("email", "e" * 250 + "@example.com"),
        ("phone", "5" * 51),
    ],
)
async def test_register_rejects_oversized_fields(client, field, value):
    body = {"name": "Long", "email": _email("long"), "password": TEST_PASSWORD}
    body[field] = value
    r = await client.post("/auth/register", json=body)
    assert r.status_code == 400
