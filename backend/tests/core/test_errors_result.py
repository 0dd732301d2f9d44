"""Error Model & Result — tests for error construction, envelopes and result narrowing."""

import pytest

from chickquita.core.errors import (
    Error, ErrorCode, FieldViolation, UniquenessViolation,
)
from chickquita.core.result import Failure, Success


def test_failure_message_is_generic():
    error = Error.failure("create", "daily record")
    assert error.code == ErrorCode.FAILURE
    assert error.message == "Failed to create daily record"


def test_to_response_envelope():
    error = Error.from_violations([
        FieldViolation("name", "Coop name is required."),
        FieldViolation(None, "At least one animal type must have a count greater than 0."),
    ])
    body = error.to_response()
    assert body["error"]["code"] == "Error.Validation"
    assert body["error"]["violations"][1] == {
        "field": None,
        "message": "At least one animal type must have a count greater than 0.",
    }


def test_success_and_failure_narrowing():
    ok = Success(3)
    bad = Failure(Error.not_found("Flock not found"))
    assert ok.ok and ok.value == 3 and ok.error is None
    assert not bad.ok
    assert bad.code == ErrorCode.NOT_FOUND
    with pytest.raises(AttributeError):
        bad.value


def test_uniqueness_violation_keeps_constraint():
    exc = UniquenessViolation("uq_flocks_coop_id_identifier", "insert flock")
    assert exc.constraint == "uq_flocks_coop_id_identifier"
    assert exc.operation == "insert flock"
