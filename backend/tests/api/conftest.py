"""API test fixtures - app wired to a fresh SQLite-backed store per test."""

import pytest
from httpx import ASGITransport, AsyncClient

from trouver.config import Settings
from trouver.main import create_app


@pytest.fixture
def settings():
    return Settings(environment="test")

@pytest.fixture
async def client(settings, sql_store):
    app = create_app(settings, store=sql_store)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as ac:
        yield ac
