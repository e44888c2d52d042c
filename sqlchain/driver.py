"""DB-API driver plumbing for executing built statements.

:class:`DriverConnection` wraps any PEP 249 connection and hands out
:class:`PreparedStatement` objects. A prepared statement owns one cursor,
keeps the values bound to its placeholders and shapes fetched rows according
to a :class:`~sqlchain.typing.FetchMode`.
"""

import sys
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from sqlchain.config import BuilderConfig, get_global_config
from sqlchain.exceptions import (
    DriverError,
    InvalidArgumentError,
    MissingParameterError,
    wrap_driver_exceptions,
)
from sqlchain.parameters import (
    ParameterStyle,
    ParameterType,
    classify,
    coerce,
    convert_placeholders,
    extract_placeholders,
    normalize_parameter_name,
)
from sqlchain.protocols import DBAPIConnectionProtocol
from sqlchain.typing import FetchMode, StatementParameters
from sqlchain.utils.logging import get_logger
from sqlchain.utils.schema import shape_row

if TYPE_CHECKING:
    from types import ModuleType

__all__ = (
    "DriverConnection",
    "PreparedStatement",
    "ensure_connection",
)

logger = get_logger("driver")

SUCCESS_CODE = "00000"

_PARAMSTYLE_MAP: "dict[str, ParameterStyle]" = {
    "named": ParameterStyle.NAMED_COLON,
    "pyformat": ParameterStyle.NAMED_PYFORMAT,
    "qmark": ParameterStyle.QMARK,
}


def _driver_module(connection: Any) -> "Optional[ModuleType]":
    module_name = type(connection).__module__.split(".")[0]
    return sys.modules.get(module_name)


class DriverConnection:
    """A DB-API connection used to execute statements."""

    __slots__ = ("_connection", "_last_insert_id", "error_types", "parameter_style")

    def __init__(self, connection: Any, parameter_style: Optional[ParameterStyle] = None) -> None:
        """Wrap a DB-API connection.

        Args:
            connection: Any PEP 249 connection.
            parameter_style: Placeholder style of the driver. Detected from the
                driver module's ``paramstyle`` when omitted.

        Raises:
            InvalidArgumentError: If ``connection`` cannot create cursors.
        """
        if not isinstance(connection, DBAPIConnectionProtocol):
            msg = f"Expected a DB-API connection, got {type(connection).__name__}"
            raise InvalidArgumentError(msg)
        module = _driver_module(connection)
        if parameter_style is None:
            paramstyle = getattr(module, "paramstyle", None)
            parameter_style = _PARAMSTYLE_MAP.get(paramstyle or "", ParameterStyle.NAMED_COLON)
        module_error = getattr(module, "Error", None)
        if isinstance(module_error, type) and issubclass(module_error, Exception):
            self.error_types: tuple[type[Exception], ...] = (module_error,)
        else:
            self.error_types = (Exception,)
        self._connection = connection
        self._last_insert_id: Optional[int] = None
        self.parameter_style = parameter_style

    @property
    def connection(self) -> Any:
        """The wrapped DB-API connection."""
        return self._connection

    def prepare(self, sql: str, config: Optional[BuilderConfig] = None) -> "PreparedStatement":
        """Create a prepared statement for ``sql``."""
        return PreparedStatement(self, sql, config)

    def last_insert_id(self) -> Optional[int]:
        """Row id reported by the last statement executed through this connection."""
        return self._last_insert_id

    def _record_last_insert_id(self, cursor: Any) -> None:
        row_id = getattr(cursor, "lastrowid", None)
        if row_id is not None:
            self._last_insert_id = int(row_id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._connection!r}, parameter_style={self.parameter_style!s})"


def ensure_connection(
    obj: Any, parameter_style: Optional[ParameterStyle] = None
) -> Optional[DriverConnection]:
    """Wrap ``obj`` in a :class:`DriverConnection` unless it already is one.

    ``None`` is passed through so that statements can stay unbound.
    """
    if obj is None or isinstance(obj, DriverConnection):
        return obj
    return DriverConnection(obj, parameter_style)


class PreparedStatement:
    """A statement bound to a driver connection.

    Values bound with :meth:`bind` stay attached across executions. Rows are
    shaped by the fetch mode set with :meth:`set_fetch_mode` unless a mode is
    given to the fetch call.
    """

    def __init__(self, driver: DriverConnection, sql: str, config: Optional[BuilderConfig] = None) -> None:
        self.driver = driver
        self.sql = sql
        self.config = config or get_global_config()
        self.fetch_mode = self.config.fetch_mode
        self.schema_type = self.config.schema_type
        self._bound: dict[str, Any] = {}
        self._converters: dict[Union[str, int], Callable[[Any], Any]] = {}
        self._cursor: Any = None
        self._error_code: Optional[str] = None

    def bind(self, name: str, value: Any, parameter_type: Optional[ParameterType] = None) -> None:
        """Bind a value to a placeholder.

        Args:
            name: Placeholder name, with or without the leading colon.
            value: Value to bind.
            parameter_type: Binding type. Inferred from the value when omitted.

        Raises:
            InvalidArgumentError: If the value cannot be bound.
        """
        if parameter_type is None:
            parameter_type = classify(value)
        self._bound[normalize_parameter_name(name)] = coerce(value, parameter_type)

    @property
    def parameters(self) -> "dict[str, Any]":
        """Values currently bound to the statement."""
        return dict(self._bound)

    def _merged_parameters(self, parameters: "Optional[StatementParameters]") -> "dict[str, Any]":
        merged = dict(self._bound)
        if parameters is None:
            return merged
        if not isinstance(parameters, Mapping):
            msg = f"Parameters must be a mapping, got {type(parameters).__name__}"
            raise InvalidArgumentError(msg)
        for name, value in parameters.items():
            merged[normalize_parameter_name(name)] = coerce(value, classify(value))
        return merged

    def _check_placeholders(self, parameters: "Mapping[str, Any]") -> None:
        missing = tuple(
            dict.fromkeys(p.name for p in extract_placeholders(self.sql) if p.name not in parameters)
        )
        if missing:
            raise MissingParameterError(missing, self.sql)

    def execute(self, parameters: "Optional[StatementParameters]" = None) -> bool:
        """Execute the statement.

        Args:
            parameters: Extra values for this execution only, keyed by
                placeholder name.

        Raises:
            MissingParameterError: If a placeholder has no value.
            DriverError: If the driver rejects the statement.

        Returns:
            True once the statement has been executed.
        """
        merged = self._merged_parameters(parameters)
        if self.config.check_placeholders:
            self._check_placeholders(merged)
        sql, driver_parameters = convert_placeholders(self.sql, merged, self.driver.parameter_style)

        log = logger.info if self.config.log_statements else logger.debug
        log("Executing statement", extra={"sql": sql, "parameter_count": len(merged)})
        try:
            with wrap_driver_exceptions(self.driver.error_types):
                if self._cursor is None:
                    self._cursor = self.driver.connection.cursor()
                self._cursor.execute(sql, driver_parameters)
        except DriverError as e:
            self._error_code = e.error_code
            logger.warning("Statement failed", extra={"sql": sql, "error_code": self._error_code})
            raise
        self._error_code = SUCCESS_CODE
        self.driver._record_last_insert_id(self._cursor)
        return True

    def set_fetch_mode(self, mode: FetchMode, schema_type: Optional[type] = None) -> None:
        """Set the default row shape of :meth:`fetch` and :meth:`fetch_all`."""
        mode = FetchMode(mode)
        if mode is FetchMode.CLASS and schema_type is None and self.schema_type is None:
            msg = "Fetch mode CLASS requires a schema type"
            raise InvalidArgumentError(msg)
        self.fetch_mode = mode
        if schema_type is not None:
            self.schema_type = schema_type

    def bind_column(self, column: "Union[str, int]", converter: "Callable[[Any], Any]") -> None:
        """Apply ``converter`` to a result column of every fetched row.

        Args:
            column: Column name, or 1-based column position.
            converter: Callable receiving the raw value.
        """
        if not callable(converter):
            msg = f"Column converter must be callable, got {type(converter).__name__}"
            raise InvalidArgumentError(msg)
        if isinstance(column, bool) or not isinstance(column, (str, int)):
            msg = f"Column must be a name or a 1-based position, got {column!r}"
            raise InvalidArgumentError(msg)
        if isinstance(column, int) and column < 1:
            msg = f"Column positions start at 1, got {column}"
            raise InvalidArgumentError(msg)
        self._converters[column] = converter

    def _column_names(self) -> "list[str]":
        description = getattr(self._cursor, "description", None) or ()
        return [column[0] for column in description]

    def _shape(
        self, columns: "list[str]", row: Any, mode: Optional[FetchMode], schema_type: Optional[type]
    ) -> Any:
        values = list(row)
        for position, name in enumerate(columns):
            converter = self._converters.get(name) or self._converters.get(position + 1)
            if converter is not None:
                values[position] = converter(values[position])
        return shape_row(
            columns,
            tuple(values),
            FetchMode(mode) if mode is not None else self.fetch_mode,
            schema_type or self.schema_type,
        )

    def fetch(self, mode: Optional[FetchMode] = None, schema_type: Optional[type] = None) -> Any:
        """Fetch the next row, or ``None`` when the result set is exhausted."""
        if self._cursor is None or self._cursor.description is None:
            return None
        with wrap_driver_exceptions(self.driver.error_types):
            row = self._cursor.fetchone()
        if row is None:
            return None
        return self._shape(self._column_names(), row, mode, schema_type)

    def fetch_all(self, mode: Optional[FetchMode] = None, schema_type: Optional[type] = None) -> "list[Any]":
        """Fetch the remaining rows."""
        if self._cursor is None or self._cursor.description is None:
            return []
        with wrap_driver_exceptions(self.driver.error_types):
            rows = self._cursor.fetchall()
        columns = self._column_names()
        return [self._shape(columns, row, mode, schema_type) for row in rows]

    def row_count(self) -> int:
        """Number of rows affected by the last execution, as reported by the driver."""
        if self._cursor is None:
            return 0
        return int(getattr(self._cursor, "rowcount", -1))

    def error_code(self) -> Optional[str]:
        """SQLSTATE of the last execution.

        ``None`` before the statement runs, ``"00000"`` after a success.
        """
        return self._error_code

    def close(self) -> None:
        if self._cursor is not None:
            with wrap_driver_exceptions(self.driver.error_types):
                self._cursor.close()
            self._cursor = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.sql!r})"
