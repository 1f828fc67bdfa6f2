"""Schema Bootstrap — creates the users table on a bare database.

Invariants:
    - Uses Base.metadata, so the table matches models/user.py exactly
    - Idempotent: create_all skips tables that already exist

Design Decisions:
    - No migration tool: schema evolution is out of scope; this is for local
      development and test fixtures only
"""

from sqlalchemy.ext.asyncio import AsyncEngine

from users_backend.db.base import Base
import users_backend.models  # noqa: F401


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables registered on Base.metadata."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
