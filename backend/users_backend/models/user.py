"""User ORM — the `users` table contract.

Invariants:
    - id is a string primary key minted by the service (UUID4 text), never updated
    - email is UNIQUE NOT NULL — uniqueness enforced by the store, not by validation
    - created set by server default at insert, never written by the service
    - Column order first_name, last_name, age, email matches UPDATABLE_FIELDS,
      so rendered SET clauses follow the same order

Design Decisions:
    - VARCHAR(255) for text columns: mirrors the deployed table definition
"""

from datetime import datetime

from sqlalchemy import String, Integer, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from users_backend.db.base import Base


class UserRow(Base):
    """Persistence model for users."""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    created: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now(),
    )
