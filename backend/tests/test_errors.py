"""Tests for the error taxonomy and its rendering."""

from __future__ import annotations

import pytest

from blogapi.errors import (
    ApiError,
    Forbidden,
    InternalError,
    InvalidInput,
    NotFound,
    Unauthorized,
    UnknownOperation,
    UserExists,
    raise_if_invalid,
    render_error,
)


@pytest.mark.parametrize(
    "exc, status",
    [
        (Unauthorized("not authenticated"), 401),
        (Forbidden("not authorized"), 403),
        (NotFound("no post found"), 404),
        (UserExists(), 409),
        (UnknownOperation("unknown operation 'x'"), 400),
        (InternalError("not authenticated"), 500),
    ],
)
def test_status_codes(exc, status):
    payload = render_error(exc)
    assert payload["status"] == status
    assert payload["message"] == exc.message
    assert "data" not in payload


def test_invalid_input_carries_field_errors():
    errors = [{"message": "invalid email"}, {"message": "short password"}]
    assert render_error(InvalidInput(errors)) == {
        "message": "invalid input",
        "status": 422,
        "data": errors,
    }


def test_explicit_status_override():
    assert ApiError("teapot", status=418).to_payload() == {"message": "teapot", "status": 418}


def test_unexpected_exception_becomes_bare_500():
    assert render_error(RuntimeError("db exploded")) == {
        "message": "internal server error",
        "status": 500,
    }


def test_raise_if_invalid():
    raise_if_invalid([])
    with pytest.raises(InvalidInput) as info:
        raise_if_invalid([{"message": "invalid title"}])
    assert info.value.data == [{"message": "invalid title"}]
