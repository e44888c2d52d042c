"""SELECT statement builder."""

from dataclasses import dataclass, field
from typing import Optional

from typing_extensions import Self

from sqlchain.builder._base import Statement
from sqlchain.builder.column import ColumnSpec, columns_from
from sqlchain.builder.mixins import (
    GroupByClause,
    GroupByClauseMixin,
    LimitClauseMixin,
    OrderByClause,
    OrderByClauseMixin,
    WhereClause,
    WhereClauseMixin,
)
from sqlchain.builder.mixins._limit import check_row_count
from sqlchain.exceptions import InvalidArgumentError, InvalidQueryError
from sqlchain.typing import ColumnArgument

__all__ = ("Select",)


@dataclass
class Select(Statement, WhereClauseMixin, GroupByClauseMixin, OrderByClauseMixin, LimitClauseMixin):
    """Builds SELECT statements.

    A new statement has no columns; call :meth:`set_columns` (with no
    arguments for ``*``) before rendering.
    """

    _columns: "list[ColumnSpec]" = field(default_factory=list, init=False)
    _alias: Optional[str] = field(default=None, init=False)
    _where: WhereClause = field(default_factory=WhereClause, init=False, repr=False)
    _group_by: GroupByClause = field(default_factory=GroupByClause, init=False, repr=False)
    _order_by: OrderByClause = field(default_factory=OrderByClause, init=False, repr=False)
    _limit: Optional[int] = field(default=None, init=False)
    _offset: Optional[int] = field(default=None, init=False)

    def set_columns(self, *columns: ColumnArgument) -> Self:
        """Replace the selected columns.

        Args:
            *columns: Column names, ``(name, alias)`` tuples, mappings of
                names to aliases or lists of names. No argument selects ``*``.

        Raises:
            InvalidArgumentError: If an argument has an unsupported shape.

        Returns:
            The current statement for method chaining.
        """
        specs: list[ColumnSpec] = []
        for column in columns:
            specs.extend(columns_from(column))
        self._columns = specs or [ColumnSpec("*")]
        self._invalidate_statement()
        return self

    select = set_columns

    def set_table(self, table: str) -> Self:
        """Set the table to select from. Any alias of the previous table is dropped."""
        super().set_table(table)
        self._alias = None
        return self

    def from_(self, table: str, alias: Optional[str] = None) -> Self:
        """Set the table to select from, optionally aliased."""
        if alias is not None and (not isinstance(alias, str) or not alias.strip()):
            msg = f"Table alias must be a non-empty string, got {alias!r}"
            raise InvalidArgumentError(msg)
        self.set_table(table)
        self._alias = alias
        return self

    def offset(self, value: int) -> Self:
        """Set the number of rows to skip. Zero renders no OFFSET."""
        self._offset = check_row_count(value, "Offset")
        self._invalidate_statement()
        return self

    @property
    def columns(self) -> "list[ColumnSpec]":
        return list(self._columns)

    def validate(self) -> bool:
        self._require_table()
        if not self._columns:
            msg = "Select statement has no columns"
            raise InvalidQueryError(msg)
        return True

    def to_sql(self) -> str:
        self.validate()
        table = f"{self.table} AS {self._alias}" if self._alias else self.table
        parts = [f"SELECT {', '.join(column.render() for column in self._columns)} FROM {table}"]
        if self._where:
            parts.append(self._where.render())
        if self._group_by:
            parts.append(self._group_by.render())
        if self._order_by:
            parts.append(self._order_by.render())
        limit = self._render_limit()
        if limit:
            parts.append(limit)
        if self._offset:
            parts.append(f"OFFSET {self._offset}")
        return " ".join(parts)
