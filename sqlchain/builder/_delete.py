"""DELETE statement builder."""

from dataclasses import dataclass, field
from typing import Optional

from typing_extensions import Self

from sqlchain.builder._base import Statement
from sqlchain.builder.mixins import LimitClauseMixin, OrderByClause, OrderByClauseMixin, WhereClause, WhereClauseMixin

__all__ = ("Delete",)


@dataclass
class Delete(Statement, WhereClauseMixin, OrderByClauseMixin, LimitClauseMixin):
    """Builds DELETE statements."""

    _where: WhereClause = field(default_factory=WhereClause, init=False, repr=False)
    _order_by: OrderByClause = field(default_factory=OrderByClause, init=False, repr=False)
    _limit: Optional[int] = field(default=None, init=False)

    def from_(self, table: str) -> Self:
        """Set the table to delete from."""
        return self.set_table(table)

    def validate(self) -> bool:
        self._require_table()
        return True

    def to_sql(self) -> str:
        self.validate()
        parts = [f"DELETE FROM {self.table}"]
        if self._where:
            parts.append(self._where.render())
        if self._order_by:
            parts.append(self._order_by.render())
        limit = self._render_limit()
        if limit:
            parts.append(limit)
        return " ".join(parts)
