# ruff: noqa: SLF001
"""Statement base class with parameter registration and execution plumbing.

A statement accumulates clause state and renders it on demand. When a driver
connection is attached, the rendered SQL is prepared lazily on the first
driver operation and cached until a clause changes.
"""

from abc import ABC, abstractmethod
from collections.abc import Generator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from typing_extensions import Self

from sqlchain.config import BuilderConfig, get_global_config
from sqlchain.driver import DriverConnection, PreparedStatement, ensure_connection
from sqlchain.exceptions import (
    InvalidArgumentError,
    InvalidQueryError,
    NoDriverError,
    ParameterCollisionError,
    SQLChainError,
)
from sqlchain.parameters import ParameterType, classify, materialize, normalize_parameter_name, placeholder_name
from sqlchain.typing import FetchMode, StatementParameters
from sqlchain.utils.logging import get_logger

__all__ = (
    "SafeQuery",
    "Statement",
)

logger = get_logger("builder")


@dataclass(frozen=True)
class SafeQuery:
    """A rendered SQL statement with its bound parameters."""

    sql: str
    parameters: dict[str, Any] = field(default_factory=dict)


def _same_value(left: Any, right: Any) -> bool:
    if left is right:
        return True
    return type(left) is type(right) and left == right


@dataclass
class Statement(ABC):
    """Abstract base class for SQL statements.

    Provides table handling, parameter registration and the execute and
    fetch primitives shared by every statement kind.
    """

    table: Optional[str] = None
    connection: Any = field(default=None, repr=False, compare=False)
    config: Optional[BuilderConfig] = field(default=None, repr=False, compare=False)
    _parameters: dict[str, Any] = field(default_factory=dict, init=False, repr=False, compare=False)
    _bindings: "dict[str, tuple[Any, Optional[ParameterType]]]" = field(
        default_factory=dict, init=False, repr=False, compare=False
    )
    _statement: Optional[PreparedStatement] = field(default=None, init=False, repr=False, compare=False)
    _executed: bool = field(default=False, init=False, repr=False, compare=False)
    _fetch_mode: Optional[FetchMode] = field(default=None, init=False, repr=False, compare=False)
    _schema_type: Optional[type] = field(default=None, init=False, repr=False, compare=False)
    _column_converters: "dict[Union[str, int], Callable[[Any], Any]]" = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.config is None:
            self.config = get_global_config()
        self.connection = ensure_connection(self.connection, self.config.parameter_style)
        if self.table is not None:
            table, self.table = self.table, None
            self.set_table(table)

    def set_table(self, table: str) -> Self:
        """Set the table the statement works on.

        Raises:
            InvalidArgumentError: If ``table`` is not a non-empty string.
        """
        if not isinstance(table, str) or not table.strip():
            msg = f"Table name must be a non-empty string, got {table!r}"
            raise InvalidArgumentError(msg)
        self.table = table
        self._invalidate_statement()
        return self

    @abstractmethod
    def validate(self) -> bool:
        """Check that the statement holds enough state to be rendered.

        Raises:
            InvalidQueryError: If the statement is incomplete.
        """

    @abstractmethod
    def to_sql(self) -> str:
        """Render the statement. Implementations call :meth:`validate` first."""

    def _require_table(self) -> None:
        if not self.table:
            msg = f"{type(self).__name__} statement has no table"
            raise InvalidQueryError(msg)

    def to_params(self) -> "dict[str, Any]":
        """Return the parameters registered on the statement.

        Values given to :meth:`set_param` override registered values of the
        same name.
        """
        parameters = dict(self._parameters)
        parameters.update({name: value for name, (value, _) in self._bindings.items()})
        return parameters

    def build(self) -> SafeQuery:
        """Render the statement together with its parameters.

        Returns:
            SafeQuery: A frozen snapshot of the SQL string and parameters.
        """
        return SafeQuery(sql=self.to_sql(), parameters=self.to_params())

    def register_parameter(self, column: str, value: Any) -> str:
        """Register the value of a column under its placeholder name.

        Args:
            column: Column the value belongs to.
            value: The value to bind.

        Raises:
            ParameterCollisionError: If the placeholder already holds a different value.
            InvalidArgumentError: If the value cannot be bound.

        Returns:
            The placeholder name, without the leading colon.
        """
        if not isinstance(column, str) or not column.strip():
            msg = f"Column name must be a non-empty string, got {column!r}"
            raise InvalidArgumentError(msg)
        classify(value)
        value = materialize(value)
        name = placeholder_name(column)
        if name in self._parameters:
            if not _same_value(self._parameters[name], value):
                raise ParameterCollisionError(name)
            return name
        self._parameters[name] = value
        return name

    @contextmanager
    def _registering(self) -> "Generator[None, None, None]":
        """Undo the parameters registered in the block if it raises.

        A mutator rejected halfway through its arguments leaves the
        statement as it was before the call.
        """
        snapshot = dict(self._parameters)
        try:
            yield
        except Exception:
            self._parameters = snapshot
            raise

    def _invalidate_statement(self) -> None:
        """Drop the prepared statement after a clause change."""
        if self._statement is not None:
            logger.debug("Clause changed, discarding prepared statement", extra={"sql": self._statement.sql})
            self._statement.close()
            self._statement = None
        self._executed = False

    def _require_connection(self) -> DriverConnection:
        if self.connection is None:
            raise NoDriverError
        return self.connection

    def get_statement(self) -> PreparedStatement:
        """Return the prepared statement, preparing it from :meth:`to_sql` if needed.

        Raises:
            NoDriverError: If no driver connection is attached.
        """
        connection = self._require_connection()
        if self._statement is None:
            statement = connection.prepare(self.to_sql(), self.config)
            for name, value in self._parameters.items():
                statement.bind(name, value)
            for name, (value, parameter_type) in self._bindings.items():
                statement.bind(name, value, parameter_type)
            if self._fetch_mode is not None:
                statement.set_fetch_mode(self._fetch_mode, self._schema_type)
            for column, converter in self._column_converters.items():
                statement.bind_column(column, converter)
            self._statement = statement
        return self._statement

    def set_param(self, name: str, value: Any, parameter_type: Optional[ParameterType] = None) -> Self:
        """Bind a value to a placeholder written into the statement.

        The statement must already render: binding happens against the
        prepared statement when a driver is attached, and the binding is
        replayed if the statement is prepared again.

        Args:
            name: Placeholder name, with or without the leading colon.
            value: Value to bind.
            parameter_type: Binding type. Inferred from the value when omitted.

        Raises:
            InvalidQueryError: If the statement cannot be rendered yet.
            InvalidArgumentError: If the value cannot be bound.
        """
        name = normalize_parameter_name(name)
        if parameter_type is None:
            classify(value)
        value = materialize(value)
        if self.connection is None:
            self.to_sql()
        else:
            self.get_statement().bind(name, value, parameter_type)
        self._bindings[name] = (value, parameter_type)
        return self

    def set_params(self, parameters: StatementParameters, parameter_type: Optional[ParameterType] = None) -> Self:
        """Bind several placeholder values.

        Raises:
            InvalidArgumentError: If ``parameters`` is not a mapping.
        """
        if not isinstance(parameters, Mapping):
            msg = f"Parameters must be a mapping, got {type(parameters).__name__}"
            raise InvalidArgumentError(msg)
        for name, value in parameters.items():
            self.set_param(name, value, parameter_type)
        return self

    def set_fetch_mode(self, mode: FetchMode, schema_type: Optional[type] = None) -> Self:
        """Set the row shape returned by :meth:`fetch` and :meth:`fetch_all`."""
        mode = FetchMode(mode)
        if mode is FetchMode.CLASS and schema_type is None and self.config.schema_type is None:
            msg = "Fetch mode CLASS requires a schema type"
            raise InvalidArgumentError(msg)
        self._fetch_mode = mode
        self._schema_type = schema_type
        if self._statement is not None:
            self._statement.set_fetch_mode(mode, schema_type)
        return self

    def bind_column(self, column: "Union[str, int]", converter: "Callable[[Any], Any]") -> Self:
        """Apply ``converter`` to a result column of every fetched row.

        Args:
            column: Column name, or 1-based column position.
            converter: Callable receiving the raw value.
        """
        if not callable(converter):
            msg = f"Column converter must be callable, got {type(converter).__name__}"
            raise InvalidArgumentError(msg)
        self._column_converters[column] = converter
        if self._statement is not None:
            self._statement.bind_column(column, converter)
        return self

    def execute(self, parameters: "Optional[StatementParameters]" = None) -> bool:
        """Execute the statement through the attached driver.

        Args:
            parameters: Extra values for this execution only.

        Raises:
            NoDriverError: If no driver connection is attached.
            DriverError: If the driver rejects the statement.
        """
        self._require_connection()
        result = self.get_statement().execute(parameters)
        self._executed = True
        return result

    def _ensure_executed(self) -> PreparedStatement:
        if not self._executed:
            self.execute()
        return self.get_statement()

    def fetch(self, mode: Optional[FetchMode] = None, schema_type: Optional[type] = None) -> Any:
        """Fetch the next row, executing the statement first if it has not run."""
        return self._ensure_executed().fetch(mode, schema_type)

    def fetch_all(self, mode: Optional[FetchMode] = None, schema_type: Optional[type] = None) -> "list[Any]":
        """Fetch all rows, executing the statement first if it has not run."""
        return self._ensure_executed().fetch_all(mode, schema_type)

    def row_count(self) -> int:
        """Rows affected by the statement, executing it first if it has not run."""
        return self._ensure_executed().row_count()

    def error_code(self) -> Optional[str]:
        if self._statement is None:
            return None
        return self._statement.error_code()

    def close(self) -> None:
        """Close the cursor of the prepared statement."""
        if self._statement is not None:
            self._statement.close()
        self._executed = False

    def __str__(self) -> str:
        """Return the SQL string of the statement.

        Returns:
            str: The rendered SQL, or the default representation while the
            statement is incomplete.
        """
        try:
            return self.to_sql()
        except SQLChainError:
            return super().__str__()
