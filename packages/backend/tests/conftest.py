"""Test fixtures — a fresh app and database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test builds its own app through create_app() with test settings
   (in-memory SQLite, bcrypt rounds=4 so hashing takes milliseconds).
2. Tables are created on that app's engine before the test and dropped
   after, so nothing leaks between tests.
3. Requests go through httpx's ASGITransport: no server, no sockets,
   and the real auth pipeline runs on every call.

Point HOMELIST_TEST_DATABASE_URL at a PostgreSQL database to run the same
suite against asyncpg.
"""

import os
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from homelist.config import Settings
from homelist.db.models import Base
from homelist.main import create_app

TEST_DB_URL = os.environ.get(
    "HOMELIST_TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:"
)
TEST_JWT_SECRET = "test-signing-key-0123456789abcdef0123456789"
TEST_PASSWORD = "password123"


@pytest.fixture()
def settings():
    return Settings(
        database_url=TEST_DB_URL,
        environment="test",
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
    )


@pytest_asyncio.fixture()
async def app(settings):
    """App with its own engine and freshly created tables."""
    application = create_app(settings)
    db = application.state.db
    await db.create_all()
    try:
        yield application
    finally:
        async with db.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await db.dispose()


@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture()
async def db_session(app):
    """Direct session on the test database, for arranging state the API can't."""
    async with app.state.db.session_factory() as session:
        yield session


@pytest.fixture()
def register_user(client):
    """Register an account through the API.

    Returns an async callable → (user dict, auth headers).
    """

    async def _register(name="Test User", email=None, password=TEST_PASSWORD, **extra):
        email = email or f"user-{uuid.uuid4().hex[:8]}@example.com"
        r = await client.post(
            "/auth/register",
            json={"name": name, "email": email, "password": password, **extra},
        )
        assert r.status_code == 201, r.text
        body = r.json()
        return body["user"], bearer(body["token"])

    return _register


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def listing_payload(**overrides) -> dict:
    payload = {
        "title": "Modern 2BR Apartment in Downtown",
        "description": "City views, updated kitchen, in-unit laundry.",
        "price": "2500.00",
        "location": "New York, NY",
        "type": "apartment",
        "bedrooms": 2,
        "bathrooms": 2,
        "area": 1200,
        "images": [
            "https://images.example.com/living-room.jpg",
            "https://images.example.com/kitchen.jpg",
        ],
    }
    payload.update(overrides)
    return payload
