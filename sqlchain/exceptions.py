from collections.abc import Generator
from contextlib import contextmanager
from typing import Any, Optional

__all__ = (
    "DriverError",
    "ImproperConfigurationError",
    "InvalidArgumentError",
    "InvalidQueryError",
    "MissingParameterError",
    "NoDriverError",
    "ParameterCollisionError",
    "ParameterError",
    "SQLChainError",
    "UnknownTypeError",
    "driver_error_code",
    "wrap_driver_exceptions",
)


class SQLChainError(Exception):
    """Base exception class from which all sqlchain exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLChainError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class ImproperConfigurationError(SQLChainError):
    """Raised when a builder configuration is inconsistent."""


class InvalidArgumentError(SQLChainError, ValueError):
    """Malformed input given to a builder method.

    Raised by the call that receives the input, never deferred to render time.
    """

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Invalid argument."
        super().__init__(message)


class UnknownTypeError(InvalidArgumentError):
    """A value's type cannot be mapped to a parameter type."""

    value_type: Optional[type]

    def __init__(self, message: Optional[str] = None, value_type: Optional[type] = None) -> None:
        if message is None:
            message = "Unknown type, please set it explicitly."
        super().__init__(message)
        self.value_type = value_type


class InvalidQueryError(SQLChainError):
    """The statement does not hold enough state to be rendered."""

    detail = "Query is invalid or incomplete."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.detail)


class NoDriverError(SQLChainError):
    """An operation needs a database connection but the statement has none."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "No database connection specified."
        super().__init__(message)


# -- Parameter Errors --
class ParameterError(SQLChainError):
    """Base class for parameter-related errors."""

    sql: Optional[str]

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        """Initialize with optional SQL context."""
        detail_message = message
        if sql:
            detail_message = f"{message}\nSQL: {sql}"
        super().__init__(detail=detail_message)
        self.sql = sql


class ParameterCollisionError(InvalidArgumentError):
    """A placeholder name was registered twice with different values."""

    name: str

    def __init__(self, name: str) -> None:
        super().__init__(f"Parameter ':{name}' is already bound to a different value.")
        self.name = name


class MissingParameterError(ParameterError):
    """Raised when a placeholder in the SQL has no bound value."""

    names: "tuple[str, ...]"

    def __init__(self, names: "tuple[str, ...]", sql: Optional[str] = None) -> None:
        listed = ", ".join(f":{name}" for name in names)
        super().__init__(f"No value bound for parameter(s): {listed}", sql)
        self.names = names


class DriverError(SQLChainError):
    """An error raised by the underlying database driver."""

    error_code: Optional[str]

    def __init__(self, message: str, error_code: Optional[str] = None) -> None:
        super().__init__(message)
        self.error_code = error_code


def driver_error_code(exc: BaseException) -> str:
    """Best-effort SQLSTATE (or driver specific error name) for a DB-API error."""
    for attribute in ("sqlstate", "pgcode", "sqlite_errorname"):
        code = getattr(exc, attribute, None)
        if code:
            return str(code)
    return "HY000"


@contextmanager
def wrap_driver_exceptions(
    error_types: "tuple[type[BaseException], ...]" = (Exception,),
) -> Generator[None, None, None]:
    """Re-raise driver errors as :class:`DriverError`.

    Args:
        error_types: Exception classes raised by the driver, usually the
            module level ``Error`` of a DB-API driver.
    """
    try:
        yield
    except SQLChainError:
        raise
    except error_types as exc:
        code = driver_error_code(exc)
        msg = f"Database driver error: {exc}"
        raise DriverError(msg, error_code=code) from exc
