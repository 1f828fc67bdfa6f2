"""Root conftest — shared test configuration and store fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the users table
    - Settings never reach a real PostgreSQL server (DATABASE_URL defaulted)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, supports UNIQUE and RETURNING,
      which is everything the data access service relies on
"""

import os

# Ensure tests don't accidentally use a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from users_backend.db.session import create_schema  # noqa: E402
from users_backend.infrastructure.database import DatabaseService  # noqa: E402
from users_backend.schemas.user import UserCreate  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_service(test_engine):
    service = DatabaseService(test_engine, health_timeout=1.0)
    yield service
    await service.close()


@pytest.fixture
def new_user():
    """Factory for valid create payloads; override any field per test."""
    def _make(**overrides) -> UserCreate:
        fields = {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "age": 36,
            "email": "ada@example.com",
        }
        fields.update(overrides)
        return UserCreate(**fields)
    return _make
