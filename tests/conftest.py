"""
pytest configuration and shared fixtures for the Location Tracker API tests.

Tests run against an in-memory SQLite database (aiosqlite), so no Postgres
server is needed. The engine is disposed after every test that uses the
database, which drops the in-memory database and gives each test an empty table.
"""
import os

import pytest
from httpx import ASGITransport, AsyncClient

# Set env vars BEFORE importing the app so Settings picks them up correctly
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.pop("POSTGRES_URL", None)


@pytest.fixture()
async def database():
    """Fresh tables for each test"""
    from app.models import init_db, close_db

    await init_db()
    yield
    await close_db()


@pytest.fixture()
async def session(database):  # noqa: ARG001
    from app.models.database import async_session_maker

    async with async_session_maker() as db:
        yield db


@pytest.fixture()
async def client(database):  # noqa: ARG001
    """
    HTTPX async test client wired to the FastAPI app.
    The lifespan is not run; the database fixture creates the tables.
    """
    from app.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
