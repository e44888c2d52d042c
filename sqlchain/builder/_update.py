"""UPDATE statement builder."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from typing_extensions import Self

from sqlchain.builder._base import Statement
from sqlchain.builder.mixins import LimitClauseMixin, OrderByClause, OrderByClauseMixin, WhereClause, WhereClauseMixin
from sqlchain.exceptions import InvalidArgumentError, InvalidQueryError

__all__ = ("Update",)


@dataclass
class Update(Statement, WhereClauseMixin, OrderByClauseMixin, LimitClauseMixin):
    """Builds UPDATE statements."""

    _assignments: "list[str]" = field(default_factory=list, init=False)
    _where: WhereClause = field(default_factory=WhereClause, init=False, repr=False)
    _order_by: OrderByClause = field(default_factory=OrderByClause, init=False, repr=False)
    _limit: Optional[int] = field(default=None, init=False)

    def set(self, *values: "Union[str, Mapping[str, Any]]") -> Self:
        """Add assignments to the SET clause.

        Args:
            *values: Literal assignments such as ``"hits = hits + 1"``, kept
                verbatim, or mappings of column to value rendered
                ``column = :_column``.

        Raises:
            InvalidArgumentError: If an argument is neither a string nor a mapping.

        Returns:
            The current statement for method chaining.
        """
        assignments: list[str] = []
        with self._registering():
            for value in values:
                if isinstance(value, str):
                    if value.strip():
                        assignments.append(value)
                elif isinstance(value, Mapping):
                    for column, column_value in value.items():
                        name = self.register_parameter(column, column_value)
                        assignments.append(f"{column} = :{name}")
                else:
                    msg = f"Assignment must be a string or a mapping, got {type(value).__name__}"
                    raise InvalidArgumentError(msg)
        if assignments:
            self._assignments.extend(assignments)
            self._invalidate_statement()
        return self

    def set_value(self, column: str, value: Any) -> Self:
        """Assign a single parameterized value."""
        return self.set({column: value})

    def validate(self) -> bool:
        self._require_table()
        if not self._assignments:
            msg = "Update statement has no assignments"
            raise InvalidQueryError(msg)
        return True

    def to_sql(self) -> str:
        self.validate()
        parts = [f"UPDATE {self.table} SET {', '.join(self._assignments)}"]
        if self._where:
            parts.append(self._where.render())
        if self._order_by:
            parts.append(self._order_by.render())
        limit = self._render_limit()
        if limit:
            parts.append(limit)
        return " ".join(parts)
