"""User Schemas — entity, create input and sparse patch.

Invariants:
    - User.id is minted by the store layer, never taken from UserCreate
    - UserCreate ignores unknown keys (a client-sent id is dropped silently)
    - UserUpdate field is present iff its value is not None (omitted or null = absent)
    - age >= 0 at the type level; core validation never inspects age

Design Decisions:
    - None-as-absent over model_fields_set: JSON null and omission both mean
      "leave untouched", so the store never receives a NULL for a NOT NULL column
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from users_backend.core.domain_types import UPDATABLE_FIELDS


class UserCreate(BaseModel):
    """Create input — identity is minted server-side."""
    first_name: str
    last_name: str
    age: int = Field(ge=0)
    email: str


class User(BaseModel):
    """Persisted user entity."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    age: int = Field(ge=0)
    email: str
    created: datetime | None = None


class UserUpdate(BaseModel):
    """Sparse patch — only present (non-None) fields are applied."""
    first_name: str | None = None
    last_name: str | None = None
    age: int | None = Field(None, ge=0)
    email: str | None = None

    def present_fields(self) -> list[str]:
        return [name for name in UPDATABLE_FIELDS if getattr(self, name) is not None]

    @property
    def is_empty(self) -> bool:
        return not self.present_fields()
