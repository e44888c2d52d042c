from collections.abc import Mapping
from enum import Enum
from typing import Any, Union

from typing_extensions import TypeAlias, TypeVar

__all__ = (
    "ColumnArgument",
    "DictRow",
    "FetchMode",
    "SchemaT",
    "StatementParameters",
)


class FetchMode(str, Enum):
    """Shape of the rows returned by ``fetch`` and ``fetch_all``.

    - DICT: a ``dict`` keyed by column name
    - TUPLE: the row as a tuple, in column order
    - OBJECT: a :class:`types.SimpleNamespace` with one attribute per column
    - CLASS: an instance of a schema type (dataclass, ``msgspec.Struct`` or any
      class accepting the columns as keyword arguments)
    """

    DICT = "dict"
    TUPLE = "tuple"
    OBJECT = "object"
    CLASS = "class"

    def __str__(self) -> str:
        return self.value


DictRow: TypeAlias = "dict[str, Any]"
"""Row returned with :attr:`FetchMode.DICT`."""

StatementParameters: TypeAlias = "Mapping[str, Any]"
"""Parameter values keyed by placeholder name."""

ColumnArgument: TypeAlias = Union[str, "tuple[str, str]", "Mapping[str, str]", "list[str]"]
"""Forms accepted for a column argument of ``Select.set_columns``."""

SchemaT = TypeVar("SchemaT", default=Any)
"""Schema type instantiated for :attr:`FetchMode.CLASS` rows."""
