"""Row conversion to the shapes selected by a fetch mode."""

from types import SimpleNamespace
from typing import Any, Optional

import msgspec

from sqlchain.exceptions import ImproperConfigurationError, SQLChainError
from sqlchain.typing import DictRow, FetchMode, SchemaT
from sqlchain.utils.type_guards import is_dataclass, is_msgspec_struct

__all__ = (
    "shape_row",
    "to_schema",
)


def to_schema(data: DictRow, schema_type: "type[SchemaT]") -> SchemaT:
    """Convert a row mapping to an instance of ``schema_type``.

    ``msgspec.Struct`` types and dataclasses go through
    :func:`msgspec.convert` so that field types are checked. Other classes
    receive the columns as keyword arguments.

    Raises:
        SQLChainError: If the row does not fit the schema type.
    """
    if is_msgspec_struct(schema_type) or is_dataclass(schema_type):
        try:
            return msgspec.convert(dict(data), type=schema_type, strict=False)
        except msgspec.ValidationError as e:
            msg = f"Row cannot be converted to {schema_type.__name__}: {e}"
            raise SQLChainError(msg) from e
    if isinstance(schema_type, type):
        try:
            return schema_type(**data)
        except TypeError as e:
            msg = f"Row cannot be converted to {schema_type.__name__}: {e}"
            raise SQLChainError(msg) from e
    msg = f"Unsupported schema type: {schema_type!r}"
    raise ImproperConfigurationError(msg)


def shape_row(
    columns: "list[str]",
    values: "tuple[Any, ...]",
    mode: FetchMode,
    schema_type: "Optional[type]" = None,
) -> Any:
    """Build a result row in the requested fetch mode.

    Args:
        columns: Column names from the cursor description.
        values: Row values in column order.
        mode: Target fetch mode.
        schema_type: Class used by :attr:`FetchMode.CLASS`.

    Returns:
        The shaped row.
    """
    if mode is FetchMode.TUPLE:
        return tuple(values)
    data: DictRow = dict(zip(columns, values))
    if mode is FetchMode.DICT:
        return data
    if mode is FetchMode.OBJECT:
        return SimpleNamespace(**data)
    if schema_type is None:
        msg = "Fetch mode CLASS requires a schema type"
        raise ImproperConfigurationError(msg)
    return to_schema(data, schema_type)
