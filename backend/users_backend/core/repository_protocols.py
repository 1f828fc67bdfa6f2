"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: the store does IO, while validation and update assembly
      stay pure and synchronous
"""

from typing import Protocol

from users_backend.schemas.health import HealthReport
from users_backend.schemas.user import User, UserCreate, UserUpdate


class UserStore(Protocol):
    """Contract for user persistence — implemented by infrastructure.database."""
    async def health(self) -> HealthReport: ...
    async def close(self) -> None: ...
    async def create_user(self, user: UserCreate) -> User: ...
    async def get_user_by_id(self, user_id: str) -> User: ...
    async def update_user_by_id(self, user_id: str, update: UserUpdate) -> User: ...
