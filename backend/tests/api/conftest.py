"""API test fixtures — FastAPI test client wired to the in-memory store.

Invariants:
    - get_db_service dependency overridden to the per-test DatabaseService
    - Lifespan is not run (ASGITransport), so no real database is contacted
"""

import pytest
from httpx import ASGITransport, AsyncClient

from users_backend.infrastructure.database import get_db_service
from users_backend.main import app


@pytest.fixture
async def client(db_service):
    app.dependency_overrides[get_db_service] = lambda: db_service
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def user_payload():
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "age": 36,
        "email": "ada@example.com",
    }
