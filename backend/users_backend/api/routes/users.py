"""User Routes — create, read and patch users over REST.

Invariants:
    - Bodies are validated by core/validate_user.py before the store is touched
    - Routes contain no SQL; every store call goes through the UserStore capability set
    - POST returns the persisted entity (identity minted server-side)

Design Decisions:
    - PATCH over PUT: the body is a sparse patch, absent fields are left untouched
    - Validation descriptors raised as UserValidationError so the global handler
      renders the uniform error envelope
"""

import logging

from fastapi import APIRouter, Depends, status

from users_backend.core.errors import ErrorContext, UserValidationError
from users_backend.core.repository_protocols import UserStore
from users_backend.core.validate_user import validate_user, validate_user_update
from users_backend.infrastructure.database import get_db_service
from users_backend.schemas.user import User, UserCreate, UserUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


def _raise_if_invalid(error: dict | None, user_id: str | None = None) -> None:
    if error:
        raise UserValidationError(
            error["message"], error["field"], ErrorContext(user_id=user_id),
            code=error["error_code"],
        )


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate, store: UserStore = Depends(get_db_service),
):
    """Create a user; the response carries the minted id."""
    _raise_if_invalid(validate_user(body))
    return await store.create_user(body)


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: str, store: UserStore = Depends(get_db_service),
):
    return await store.get_user_by_id(user_id)


@router.patch("/{user_id}", response_model=User)
async def update_user(
    user_id: str, body: UserUpdate, store: UserStore = Depends(get_db_service),
):
    """Apply the present fields of the patch; returns the updated user."""
    _raise_if_invalid(validate_user_update(body), user_id)
    return await store.update_user_by_id(user_id, body)
