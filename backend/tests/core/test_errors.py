"""Error Hierarchy — verifies codes, categories, statuses and REST envelope."""

from users_backend.core.errors import (
    ConflictError,
    DatabaseError,
    EmptyUpdateError,
    ErrorCategory,
    ErrorContext,
    ResourceNotFoundError,
    UserValidationError,
    UsersBackendError,
)


def test_validation_error_is_400_with_field():
    err = UserValidationError("invalid email address", "email")
    assert err.http_status == 400
    assert err.category is ErrorCategory.VALIDATION
    body = err.to_response()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["field"] == "email"


def test_empty_update_is_a_validation_error():
    err = EmptyUpdateError()
    assert isinstance(err, UserValidationError)
    assert err.code == "EMPTY_UPDATE"
    assert err.http_status == 400


def test_not_found_message_and_status():
    err = ResourceNotFoundError("User", "abc")
    assert err.message == "User 'abc' not found"
    assert err.http_status == 404
    assert err.resource_id == "abc"


def test_conflict_is_409():
    assert ConflictError("dup").http_status == 409


def test_database_error_is_critical_503():
    err = DatabaseError("Connection or operational error", "read")
    assert err.http_status == 503
    assert err.message == "Database read failed: Connection or operational error"
    assert err.to_response()["error"]["severity"] == "critical"


def test_context_surfaces_in_envelope():
    err = ResourceNotFoundError(
        "User", "abc", ErrorContext(user_id="abc", operation="update"),
    )
    context = err.to_response()["error"]["context"]
    assert context == {"user_id": "abc", "operation": "update"}


def test_all_errors_share_base():
    for err in (
        UserValidationError("m", "f"), EmptyUpdateError(),
        ResourceNotFoundError("User", "x"), ConflictError("m"),
        DatabaseError("m", "op"),
    ):
        assert isinstance(err, UsersBackendError)
