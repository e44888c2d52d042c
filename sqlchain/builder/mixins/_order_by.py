from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Union, cast

from sqlchain.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from sqlchain.builder.protocols import BuilderProtocol

__all__ = ("OrderByClause", "OrderByClauseMixin")

DIRECTIONS = frozenset({"ASC", "DESC"})


def _direction(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str) or value.upper() not in DIRECTIONS:
        msg = f"Invalid sort direction {value!r}, expected ASC or DESC"
        raise InvalidArgumentError(msg)
    return value.upper()


@dataclass
class OrderByClause:
    """Sort keys of an ORDER BY clause."""

    items: "list[tuple[str, Optional[str]]]" = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.items)

    def render(self) -> str:
        return "ORDER BY " + ", ".join(
            f"{column} {direction}" if direction else column for column, direction in self.items
        )


class OrderByClauseMixin:
    """Mixin providing the ORDER BY clause."""

    _order_by: OrderByClause

    def order_by(self, column: "Union[str, Mapping[str, Optional[str]]]", direction: Optional[str] = None) -> Any:
        """Add sort keys.

        Args:
            column: A column name, or a mapping of column names to directions.
            direction: ``ASC`` or ``DESC`` in any case, for a single column.

        Raises:
            InvalidArgumentError: If a direction is not ASC or DESC, or the
                column argument has an unsupported type.

        Returns:
            The current statement for method chaining.
        """
        items: list[tuple[str, Optional[str]]] = []
        if isinstance(column, str) and column.strip():
            items.append((column, _direction(direction)))
        elif isinstance(column, Mapping):
            for name, value in column.items():
                if not isinstance(name, str) or not name.strip():
                    msg = f"Column name must be a non-empty string, got {name!r}"
                    raise InvalidArgumentError(msg)
                items.append((name, _direction(value)))
        else:
            msg = f"Order by column must be a string or a mapping, got {column!r}"
            raise InvalidArgumentError(msg)
        if items:
            self._order_by.items.extend(items)
            cast("BuilderProtocol", self)._invalidate_statement()
        return self
