"""Update Assembly — tests for ordered (column, value) pairs.

Tests cover:
    - Only present fields are emitted
    - Order is first_name, last_name, age, email regardless of input order
    - Empty patch yields no assignments
"""

from users_backend.core.build_update import build_update_assignments
from users_backend.core.domain_types import UPDATABLE_FIELDS
from users_backend.schemas.user import UserUpdate


def test_all_fields_in_fixed_order():
    update = UserUpdate(email="e@x.io", age=3, last_name="L", first_name="F")
    assert build_update_assignments(update) == [
        ("first_name", "F"),
        ("last_name", "L"),
        ("age", 3),
        ("email", "e@x.io"),
    ]


def test_absent_fields_are_skipped():
    update = UserUpdate(last_name="Turing", email="alan@bletchley.uk")
    assert build_update_assignments(update) == [
        ("last_name", "Turing"),
        ("email", "alan@bletchley.uk"),
    ]


def test_age_zero_is_present():
    assert build_update_assignments(UserUpdate(age=0)) == [("age", 0)]


def test_empty_patch_has_no_assignments():
    assert build_update_assignments(UserUpdate()) == []


def test_id_is_never_assignable():
    assert "id" not in UPDATABLE_FIELDS
    update = UserUpdate.model_validate({"id": "other", "age": 1})
    assert [column for column, _ in build_update_assignments(update)] == ["age"]
