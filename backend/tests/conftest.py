"""Root conftest — shared test configuration, in-memory database and app client.

Invariants:
    - Every test gets a fresh in-memory SQLite database built from Base.metadata
    - Apps are built with create_app(settings, database): no lifespan, no network
    - ASGITransport does not raise app exceptions: the pipeline renders them

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so every query()
      transaction sees the same tables (ADR: PostgreSQL-specific features not exercised)
"""

import os

# Mandatory settings must exist before anything builds Settings()
os.environ.setdefault("CORS_ORIGIN", "https://landing.example.com")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.base import Base
import app.models  # noqa: F401
from app.infrastructure.database import Database
from app.main import create_app
from tests.factories import make_settings


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def database(test_engine):
    return Database(test_engine)


@pytest.fixture
async def empty_database():
    """Reachable store without any tables: every store query fails."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    yield Database(engine)
    await engine.dispose()


@pytest.fixture
def build_app(database):
    """Factory: app built from settings overrides, on the test database by default."""

    def _build(db=None, **overrides):
        return create_app(make_settings(**overrides), db or database)

    return _build


@pytest.fixture
async def open_client():
    """Factory: AsyncClient for an app, as seen from client_ip. Closed at teardown."""
    clients = []

    def _open(app, client_ip="127.0.0.1") -> AsyncClient:
        c = AsyncClient(
            transport=ASGITransport(
                app=app, raise_app_exceptions=False, client=(client_ip, 4000),
            ),
            base_url="http://test",
        )
        clients.append(c)
        return c

    yield _open
    for c in clients:
        await c.aclose()


@pytest.fixture
async def client(build_app, open_client):
    """Client for the default test app."""
    return open_client(build_app())
