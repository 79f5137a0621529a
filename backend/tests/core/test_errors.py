"""Error Hierarchy - tests for codes, statuses and response envelopes.

Tests cover:
    - each error maps to its own code and HTTP status
    - ValidationError carries every violation into the response
    - PersistenceError never renders the store's reason
"""

import pytest

from trouver.core.errors import (
    ForbiddenError, NotFoundError, OperationTimeoutError, PersistenceError,
    TrouverError, UnauthenticatedError, ValidationError,
)


@pytest.mark.parametrize("error,code,status", [
    (ValidationError([{"field": "title", "message": "m", "type": "t"}]), "VALIDATION_ERROR", 400),
    (UnauthenticatedError(), "UNAUTHENTICATED", 401),
    (ForbiddenError("Place", "p1", "u2"), "FORBIDDEN", 403),
    (NotFoundError("Place", "p1"), "RESOURCE_NOT_FOUND", 404),
    (PersistenceError("boom", "insert"), "PERSISTENCE_ERROR", 500),
    (OperationTimeoutError("read place", 5.0), "OPERATION_TIMEOUT", 504),
])
def test_codes_and_statuses(error, code, status):
    assert isinstance(error, TrouverError)
    assert error.code == code
    assert error.http_status == status
    assert error.to_response()["error"]["code"] == code


def test_validation_error_lists_all_fields():
    violations = [
        {"field": "title", "message": "too short", "type": "string_too_short"},
        {"field": "categories", "message": "too long", "type": "too_long"},
    ]
    error = ValidationError(violations)
    assert error.fields == ["title", "categories"]
    assert error.to_response()["error"]["details"] == violations


def test_persistence_error_hides_reason_from_response():
    error = PersistenceError("duplicate key value violates uq_documents", "insert")
    rendered = str(error.to_response())
    assert "duplicate key" not in rendered
    assert error.reason == "duplicate key value violates uq_documents"
    assert error.context.debug_info["reason"] == error.reason


def test_not_found_and_forbidden_are_distinct():
    assert not issubclass(ForbiddenError, NotFoundError)
    assert not issubclass(NotFoundError, ForbiddenError)


def test_timeout_is_not_a_persistence_error():
    assert not isinstance(OperationTimeoutError("list places", 5), PersistenceError)
