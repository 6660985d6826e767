import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from storyhub.config import Settings
from storyhub.core.db import Store
from storyhub.core.security import hash_password
from storyhub.main import close_services, create_app, open_services
from storyhub.models.user import User


TEST_DB_URL = "sqlite://:memory:"


def make_settings(**overrides) -> Settings:
    """Settings pointing at a throwaway in-memory database."""
    values = {
        "database_url": TEST_DB_URL,
        "jwt_secret": "test-secret",
        "admin_password": None,
        "checkout_base_url": "https://checkout.test/pay",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture
def settings_factory():
    return make_settings


@pytest_asyncio.fixture
async def app(test_settings):
    """
    FastAPI app with every service wired against a fresh in-memory store.
    Lifespan is not run by ASGITransport, so services are opened here.
    """
    application = create_app(test_settings)
    await open_services(application)
    yield application
    await close_services(application)


@pytest_asyncio.fixture
async def client(app):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest_asyncio.fixture
async def store():
    """A bare opened store, for service-level tests."""
    s = Store(TEST_DB_URL)
    await s.open()
    yield s
    await s.close()


@pytest_asyncio.fixture
async def create_user():
    """
    Factory fixture to create regular users directly via ORM.
    """

    async def _create_user(password: str = "UserPass!23", username: str | None = None) -> tuple[User, str]:
        tag = uuid.uuid4().hex[:6]
        user = await User.create(
            email=f"user_{tag}@example.com",
            username=username,
            password_hash=hash_password(password),
            role="user",
        )
        return user, password

    return _create_user


@pytest_asyncio.fixture
async def create_admin():
    """
    Factory fixture to create admin users directly via ORM for privileged endpoints.
    """

    async def _create_admin(password: str = "AdminPass!23") -> tuple[User, str]:
        tag = uuid.uuid4().hex[:6]
        user = await User.create(
            email=f"admin_{tag}@example.com",
            username=f"admin_{tag}",
            password_hash=hash_password(password),
            role="admin",
        )
        return user, password

    return _create_admin


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(email: str, password: str) -> dict[str, str]:
        resp = await client.post(
            "/api/v1/auth/login",
            json={"email": email, "password": password},
        )
        assert resp.status_code == 200, resp.text
        token = resp.json()["data"]["token"]
        return {"Authorization": f"Bearer {token}"}

    return _get_headers
