from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union, cast

from sqlchain.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from sqlchain.builder.protocols import BuilderProtocol

__all__ = ("GroupByClause", "GroupByClauseMixin")


@dataclass
class GroupByClause:
    """Grouping terms of a GROUP BY clause."""

    terms: "list[str]" = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.terms)

    def render(self) -> str:
        return "GROUP BY " + ", ".join(self.terms)


class GroupByClauseMixin:
    """Mixin providing the GROUP BY clause for SELECT statements."""

    _group_by: GroupByClause

    def group_by(self, *columns: "Union[str, Mapping[str, str]]") -> Any:
        """Add grouping terms.

        A mapping entry renders ``column modifier`` and registers the modifier
        as the parameter of the column.

        Raises:
            InvalidArgumentError: If an argument is neither a string nor a mapping.

        Returns:
            The current statement for method chaining.
        """
        builder = cast("BuilderProtocol", self)
        terms: list[str] = []
        with builder._registering():
            for column in columns:
                if isinstance(column, str):
                    if column.strip():
                        terms.append(column)
                elif isinstance(column, Mapping):
                    for name, modifier in column.items():
                        if not isinstance(modifier, str):
                            msg = f"Group by modifier must be a string, got {type(modifier).__name__}"
                            raise InvalidArgumentError(msg)
                        builder.register_parameter(name, modifier)
                        terms.append(f"{name} {modifier}".rstrip())
                else:
                    msg = f"Group by column must be a string or a mapping, got {type(column).__name__}"
                    raise InvalidArgumentError(msg)
        if terms:
            self._group_by.terms.extend(terms)
            builder._invalidate_statement()
        return self
