"""Statement factory bound to a shared driver connection.

This module provides the :class:`QueryBuilder` entry point and the unbound
``sql`` factory used for rendering-only work::

    from sqlchain import sql

    query = sql.select("id", "name").from_("users").where({"city": "Paris"})
    query.to_sql()  # SELECT id, name FROM users WHERE (city = :_city)
"""

from typing import Any, Optional

from sqlchain.builder import Delete, Insert, Select, Update
from sqlchain.config import BuilderConfig, get_global_config, set_global_config
from sqlchain.driver import DriverConnection, ensure_connection
from sqlchain.exceptions import NoDriverError
from sqlchain.typing import ColumnArgument, FetchMode
from sqlchain.utils.logging import get_logger

__all__ = ("QueryBuilder", "sql")

logger = get_logger("builder")


class QueryBuilder:
    """Creates statements that share one driver connection."""

    __slots__ = ("_config", "_connection")

    def __init__(self, connection: Any = None, config: Optional[BuilderConfig] = None) -> None:
        """Create a statement factory.

        Args:
            connection: A DB-API connection or :class:`DriverConnection`. Without
                one, statements can be rendered but not executed.
            config: Configuration for the created statements. Statements use the
                global configuration current at their creation when omitted.
        """
        self._config = config
        parameter_style = (config or get_global_config()).parameter_style
        self._connection: Optional[DriverConnection] = ensure_connection(connection, parameter_style)

    @property
    def connection(self) -> Optional[DriverConnection]:
        """The driver connection shared by the created statements."""
        return self._connection

    def select(self, *columns: ColumnArgument) -> Select:
        """Start a SELECT statement. No columns selects ``*``."""
        return Select(connection=self._connection, config=self._config).set_columns(*columns)

    def insert_into(self, table: str) -> Insert:
        return Insert(table, connection=self._connection, config=self._config)

    def update(self, table: str) -> Update:
        return Update(table, connection=self._connection, config=self._config)

    def delete_from(self, table: str) -> Delete:
        return Delete(table, connection=self._connection, config=self._config)

    def last_insert_id(self) -> Optional[int]:
        """Row id generated by the last INSERT executed through the connection.

        Raises:
            NoDriverError: If the builder has no connection.
        """
        if self._connection is None:
            raise NoDriverError
        return self._connection.last_insert_id()

    @classmethod
    def set_default_fetch_mode(cls, mode: FetchMode, schema_type: Optional[type] = None) -> None:
        """Set the fetch mode of statements created from now on, process wide.

        Args:
            mode: Default row shape.
            schema_type: Class instantiated for :attr:`FetchMode.CLASS` rows.

        Raises:
            ImproperConfigurationError: If ``mode`` is CLASS without a schema type.
        """
        config = get_global_config().replace(fetch_mode=FetchMode(mode), schema_type=schema_type)
        set_global_config(config)
        logger.debug("Default fetch mode set to %s", config.fetch_mode)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(connection={self._connection!r})"


sql = QueryBuilder()
