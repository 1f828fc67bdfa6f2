"""User Statements — SQLAlchemy Core statements for the users table.

Invariants:
    - Every statement is parameterized (values never interpolated into SQL text)
    - INSERT and UPDATE return the persisted row in the same round trip
    - UPDATE sets only present fields, in UPDATABLE_FIELDS order, and never sets id
    - build_update_by_id raises EmptyUpdateError instead of emitting an empty SET

Design Decisions:
    - Core statements over ORM unit-of-work: each operation is exactly one statement,
      no identity map, no implicit flush ordering
"""

from typing import Any

from sqlalchemy import Insert, Select, Update, insert, select, update

from users_backend.core.build_update import build_update_assignments
from users_backend.core.errors import EmptyUpdateError, ErrorContext
from users_backend.models.user import UserRow

users = UserRow.__table__

USER_COLUMNS = (
    users.c.id,
    users.c.first_name,
    users.c.last_name,
    users.c.email,
    users.c.age,
    users.c.created,
)


def build_insert(user_id: str, user: Any) -> Insert:
    """INSERT a new row under a freshly minted identity."""
    return (
        insert(users)
        .values(
            id=user_id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            age=user.age,
        )
        .returning(*USER_COLUMNS)
    )


def build_select_by_id(user_id: str) -> Select:
    return select(*USER_COLUMNS).where(users.c.id == user_id)


def build_update_by_id(user_id: str, patch: Any) -> Update:
    """UPDATE only the present fields of patch, returning the post-update row."""
    assignments = build_update_assignments(patch)
    if not assignments:
        raise EmptyUpdateError(ErrorContext(user_id=user_id, operation="update"))
    return (
        update(users)
        .where(users.c.id == user_id)
        .values(dict(assignments))
        .returning(*USER_COLUMNS)
    )
