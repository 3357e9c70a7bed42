"""
Test infrastructure for the Blog API.

Strategy
--------
- SQLite in-memory via aiosqlite removes the need for a running Postgres
  instance, keeping the suite fast and self-contained.
- StaticPool forces every session onto the same connection, which is
  required because an in-memory SQLite database is connection-scoped.
- The app's ``get_db`` dependency is overridden to hand out sessions of a
  test ``Database``; the production lifespan (and its Postgres engine) never
  runs because ASGITransport does not send lifespan events.
- All tables are created fresh before each test and dropped after.
- bcrypt runs with the minimum cost so hashing does not dominate the suite.
"""
import os

os.environ.setdefault("BCRYPT_SALT_ROUNDS", "4")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from blog_api.database import Database, get_db  # noqa: E402
from blog_api.main import app  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

test_database = Database(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


async def override_get_db():
    async with test_database.session() as session:
        yield session


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    await test_database.create_all()
    yield
    await test_database.drop_all()


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """A live session for tests that call services or repositories directly."""
    async with test_database.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
