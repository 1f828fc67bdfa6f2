"""User Validation — structural checks on users and partial updates before persistence.

Invariants:
    - validate_user and validate_user_update are PURE: return error descriptor or None
    - Checks run in fixed order (first_name, last_name, email); first failure wins
    - Absent update fields (None) are never validated
    - age and email uniqueness are NOT checked here (schema type and store own them)

Design Decisions:
    - Error descriptor dicts over raising: shell decides how to surface
      (ADR: functional core, imperative shell)
    - EMAIL_PATTERN is a conservative syntactic filter, not RFC 5322 — known limitation
    - fullmatch over `$` anchor: `$` would accept a trailing newline
"""

import re
from typing import Protocol


EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


class UserFields(Protocol):
    first_name: str
    last_name: str
    email: str


class UserUpdateFields(Protocol):
    first_name: str | None
    last_name: str | None
    email: str | None


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def _error(error_code: str, field: str, message: str) -> dict:
    return {
        "status": "error",
        "error_code": error_code,
        "field": field,
        "message": message,
    }


def _check_first_name(value: str) -> dict | None:
    if value == "":
        return _error("FIRST_NAME_REQUIRED", "first_name", "first name is required")
    return None


def _check_last_name(value: str) -> dict | None:
    if value == "":
        return _error("LAST_NAME_REQUIRED", "last_name", "last name is required")
    return None


def _check_email(value: str) -> dict | None:
    if not is_valid_email(value):
        return _error("INVALID_EMAIL", "email", "invalid email address")
    return None


def validate_user(user: UserFields) -> dict | None:
    """Validate a full user. Returns error descriptor or None."""
    return (
        _check_first_name(user.first_name)
        or _check_last_name(user.last_name)
        or _check_email(user.email)
    )


def validate_user_update(update: UserUpdateFields) -> dict | None:
    """Validate only the present fields of a partial update."""
    if update.first_name is not None:
        error = _check_first_name(update.first_name)
        if error:
            return error
    if update.last_name is not None:
        error = _check_last_name(update.last_name)
        if error:
            return error
    if update.email is not None:
        return _check_email(update.email)
    return None
