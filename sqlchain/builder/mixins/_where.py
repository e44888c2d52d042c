from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union, cast

from sqlchain.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from sqlchain.builder.protocols import BuilderProtocol

__all__ = ("WhereClause", "WhereClauseMixin")


@dataclass
class WhereClause:
    """Condition groups of a WHERE clause.

    Conditions inside a group are joined with AND, groups with OR.
    """

    groups: "list[list[str]]" = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.groups)

    def render(self) -> str:
        return "WHERE " + " OR ".join(f"({' AND '.join(group)})" for group in self.groups)


class WhereClauseMixin:
    """Mixin providing WHERE clause methods for SELECT, UPDATE, and DELETE statements."""

    _where: WhereClause

    def _expand_conditions(self, conditions: "tuple[Any, ...]") -> "list[str]":
        builder = cast("BuilderProtocol", self)
        group: list[str] = []
        with builder._registering():
            for condition in conditions:
                if isinstance(condition, str):
                    if condition.strip():
                        group.append(condition)
                elif isinstance(condition, Mapping):
                    for column, value in condition.items():
                        name = builder.register_parameter(column, value)
                        group.append(f"{column} = :{name}")
                else:
                    msg = f"Condition must be a string or a mapping, got {type(condition).__name__}"
                    raise InvalidArgumentError(msg)
        return group

    def where(self, *conditions: "Union[str, Mapping[str, Any]]") -> Any:
        """Add a group of conditions joined with AND.

        Args:
            *conditions: Literal condition strings, or mappings of column to
                value expanded to ``column = :_column`` with the value
                registered as a parameter.

        Raises:
            InvalidArgumentError: If a condition is neither a string nor a mapping.

        Returns:
            The current statement for method chaining.
        """
        group = self._expand_conditions(conditions)
        if group:
            self._where.groups.append(group)
            cast("BuilderProtocol", self)._invalidate_statement()
        return self

    def or_where(self, *conditions: "Union[str, Mapping[str, Any]]") -> Any:
        """Add a group of conditions, joined to the previous groups with OR."""
        return self.where(*conditions)
