"""Unit tests for the exception hierarchy and driver error wrapping."""

import sqlite3

import pytest

from sqlchain.exceptions import (
    DriverError,
    InvalidArgumentError,
    InvalidQueryError,
    MissingParameterError,
    NoDriverError,
    ParameterCollisionError,
    SQLChainError,
    UnknownTypeError,
    driver_error_code,
    wrap_driver_exceptions,
)


@pytest.mark.parametrize(
    "exc_type",
    [InvalidArgumentError, UnknownTypeError, InvalidQueryError, NoDriverError],
    ids=["invalid_argument", "unknown_type", "invalid_query", "no_driver"],
)
def test_default_messages(exc_type: type[SQLChainError]) -> None:
    """Test errors raised without arguments carry a default message."""
    error = exc_type()

    assert isinstance(error, SQLChainError)
    assert str(error)


def test_invalid_argument_is_value_error() -> None:
    """Test invalid-argument errors can be caught as ValueError."""
    with pytest.raises(ValueError):
        raise InvalidArgumentError("bad")


def test_collision_error_names_placeholder() -> None:
    """Test the collision error reports the placeholder."""
    error = ParameterCollisionError("_id")

    assert error.name == "_id"
    assert ":_id" in str(error)
    assert isinstance(error, InvalidArgumentError)


def test_missing_parameter_error_includes_sql() -> None:
    """Test missing parameters are listed with the statement."""
    error = MissingParameterError(("_id", "_name"), "SELECT 1")

    assert error.names == ("_id", "_name")
    assert ":_id, :_name" in str(error)
    assert "SQL: SELECT 1" in str(error)


def test_driver_error_code_fallback() -> None:
    """Test errors without a SQLSTATE get the generic code."""
    assert driver_error_code(RuntimeError("boom")) == "HY000"


def test_driver_error_code_from_attribute() -> None:
    """Test a SQLSTATE attribute is used when the driver provides one."""

    class PgError(Exception):
        pgcode = "23505"

    assert driver_error_code(PgError()) == "23505"


def test_wrap_driver_exceptions() -> None:
    """Test driver errors are wrapped with the driver exception chained."""
    driver_exc = sqlite3.OperationalError("no such table: ghosts")

    with pytest.raises(DriverError) as exc_info, wrap_driver_exceptions((sqlite3.Error,)):
        raise driver_exc

    assert exc_info.value.__cause__ is driver_exc
    assert exc_info.value.error_code
    assert "no such table" in str(exc_info.value)


def test_wrap_driver_exceptions_passes_library_errors() -> None:
    """Test sqlchain errors are not wrapped twice."""
    with pytest.raises(InvalidQueryError), wrap_driver_exceptions():
        raise InvalidQueryError


def test_wrap_driver_exceptions_ignores_other_errors() -> None:
    """Test exceptions outside the driver error types propagate unchanged."""
    with pytest.raises(KeyError), wrap_driver_exceptions((sqlite3.Error,)):
        raise KeyError("x")
