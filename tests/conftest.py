"""
Shared fixtures: an in-memory SQLite store and an app wired to it.
"""

import httpx
import pytest
import pytest_asyncio

from app.core.config import Settings
from app.core.database import Database
from main import create_app


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        ENFORCE_CAMPAIGN_STATUS=True,
        CAMPAIGN_STATUSES=["active", "upcoming", "completed"],
        CAMPAIGNS_API_URL="",
    )


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings.DATABASE_URL)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest_asyncio.fixture
async def http_client(app):
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def spring_sale():
    return {
        "name": "Spring Sale",
        "budget": "1500",
        "startDate": "2024-03-01",
        "endDate": "2024-03-31",
        "status": "active",
    }
