"""INSERT statement builder."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from typing_extensions import Self

from sqlchain.builder._base import Statement
from sqlchain.exceptions import InvalidArgumentError, InvalidQueryError
from sqlchain.utils.type_guards import is_associative

__all__ = ("Insert",)


@dataclass
class Insert(Statement):
    """Builds single-row INSERT statements from a column to value mapping."""

    _columns: "list[str]" = field(default_factory=list, init=False)
    _placeholders: "list[str]" = field(default_factory=list, init=False, repr=False)

    def into(self, table: str) -> Self:
        """Set the target table."""
        return self.set_table(table)

    def values(self, row: "Mapping[str, Any]") -> Self:
        """Add column values to the inserted row.

        Args:
            row: Mapping of column names to values. Each value is registered
                as the parameter of its column.

        Raises:
            InvalidArgumentError: If ``row`` is not a mapping keyed by column names.

        Returns:
            The current statement for method chaining.
        """
        if not is_associative(row):
            msg = f"Insert values must be a mapping of column names to values, got {type(row).__name__}"
            raise InvalidArgumentError(msg)
        with self._registering():
            registered = [(column, self.register_parameter(column, value)) for column, value in row.items()]
        for column, name in registered:
            if column not in self._columns:
                self._columns.append(column)
                self._placeholders.append(name)
        self._invalidate_statement()
        return self

    def validate(self) -> bool:
        self._require_table()
        if not self._columns:
            msg = "Insert statement has no values"
            raise InvalidQueryError(msg)
        return True

    def to_sql(self) -> str:
        self.validate()
        columns = ", ".join(self._columns)
        placeholders = ", ".join(f":{name}" for name in self._placeholders)
        return f"INSERT INTO {self.table} ({columns}) VALUES ({placeholders})"
