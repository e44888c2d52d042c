"""Column references used by the SELECT column list.

Caller arguments come in several shapes; :func:`columns_from` turns each of
them into :class:`ColumnSpec` values when the builder method is called, so
rendering never has to inspect raw arguments.
"""

from collections.abc import Mapping
from typing import Any, NamedTuple, Optional

from sqlchain.exceptions import InvalidArgumentError
from sqlchain.utils.type_guards import is_column_pair, is_string_sequence

__all__ = ("ColumnSpec", "columns_from")


class ColumnSpec(NamedTuple):
    """A selected column, optionally aliased."""

    name: str
    alias: Optional[str] = None

    def render(self) -> str:
        if self.alias:
            return f"{self.name} AS {self.alias}"
        return self.name

    def __str__(self) -> str:
        return self.render()


def _checked_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        msg = f"Column name must be a non-empty string, got {name!r}"
        raise InvalidArgumentError(msg)
    return name


def columns_from(arg: Any) -> "list[ColumnSpec]":
    """Normalize one column argument.

    Args:
        arg: A column name, a :class:`ColumnSpec`, a ``(name, alias)`` tuple,
            a mapping of names to aliases or a list of names.

    Raises:
        InvalidArgumentError: If the argument has none of these shapes.

    Returns:
        The column specs, in argument order.
    """
    if isinstance(arg, ColumnSpec):
        return [ColumnSpec(_checked_name(arg.name), arg.alias)]
    if isinstance(arg, str):
        return [ColumnSpec(_checked_name(arg))]
    if is_column_pair(arg):
        return [ColumnSpec(_checked_name(arg[0]), _checked_name(arg[1]))]
    if isinstance(arg, Mapping):
        return [ColumnSpec(_checked_name(name), _checked_name(alias)) for name, alias in arg.items()]
    if is_string_sequence(arg):
        return [ColumnSpec(_checked_name(name)) for name in arg]
    msg = f"Unsupported column argument: {type(arg).__name__}"
    raise InvalidArgumentError(msg)
