"""API test fixtures: FastAPI app wired to the in-memory database.

Invariants:
    - The app under test gets its DatabaseSessionManager on app.state, exactly as the
      lifespan would install it (ASGITransport does not run the lifespan)
    - dependency_overrides cleared after each test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from proptrack.config import Settings
from proptrack.infrastructure.database import DatabaseSessionManager
from proptrack.main import create_app


@pytest.fixture
def app(test_engine):
    app = create_app(Settings(database_url="sqlite+aiosqlite:///:memory:"))
    app.state.db_manager = DatabaseSessionManager.from_engine(test_engine)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
