import os

# Test configuration must be in place before signet reads its settings.
os.environ["APP_ENV"] = "test"
os.environ["JWT_SECRET"] = "test-secret-key-for-signet-0123456789abcdef"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_JSON"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from signet.client import MemoryTokenStore, RequestCoordinator
from signet.infrastructure.database.async_db import create_db_and_tables, get_async_db
from signet.main import app as application
from signet.utils.i18n import setup_i18n

API_BASE = "http://testserver/authentication"


@pytest.fixture(scope="session", autouse=True)
def i18n():
    setup_i18n()


@pytest_asyncio.fixture
async def db_engine():
    """A private in-memory database per test; every session shares its one connection."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_db_and_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(session_factory):
    async def _get_test_db():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_async_db] = _get_test_db
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest_asyncio.fixture
async def coordinator(app):
    """A client coordinator talking to the in-process API."""
    async with RequestCoordinator(
        API_BASE,
        MemoryTokenStore(),
        transport=ASGITransport(app=app),
    ) as client:
        yield client


@pytest_asyncio.fixture
async def registered_user(async_client):
    """Registers ada@example.com / password1 and returns the credentials."""
    credentials = {"email": "ada@example.com", "password": "password1", "name": "Ada Lovelace"}
    response = await async_client.post("/authentication/register", json=credentials)
    assert response.status_code == 201
    return credentials


@pytest_asyncio.fixture
async def auth_headers(async_client, registered_user):
    response = await async_client.post(
        "/authentication/login",
        json={"email": registered_user["email"], "password": registered_user["password"]},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}
