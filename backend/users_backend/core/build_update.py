"""Update Assembly — ordered (column, value) pairs for the present fields of a patch.

Invariants:
    - Output order follows UPDATABLE_FIELDS (first_name, last_name, age, email)
    - Absent fields (None) never appear
    - id is never assignable (not in UPDATABLE_FIELDS)
    - PURE: no IO, no statement rendering (shell renders SQL)
"""

from typing import Any

from users_backend.core.domain_types import UPDATABLE_FIELDS


def build_update_assignments(update: Any) -> list[tuple[str, Any]]:
    """Collect assignments for every present field, in fixed column order."""
    assignments: list[tuple[str, Any]] = []
    for column in UPDATABLE_FIELDS:
        value = getattr(update, column, None)
        if value is not None:
            assignments.append((column, value))
    return assignments
