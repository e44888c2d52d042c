"""Type guard functions for the argument shapes builder methods accept.

Builder methods take strings, column/alias pairs and mappings. These guards
decide which form an argument has at the call site, so that clause state only
ever holds normalized values.
"""

from collections.abc import Mapping, Sequence
from typing import Any

import msgspec
from typing_extensions import TypeGuard

__all__ = (
    "is_associative",
    "is_column_pair",
    "is_dataclass",
    "is_msgspec_struct",
    "is_string_sequence",
)


def is_associative(obj: Any) -> "TypeGuard[Mapping[str, Any]]":
    """Check if a value is a mapping keyed by column names.

    Args:
        obj: Value to check.

    Returns:
        True for a mapping whose keys are all strings. An empty mapping counts.
    """
    return isinstance(obj, Mapping) and all(isinstance(key, str) for key in obj)


def is_column_pair(obj: Any) -> "TypeGuard[tuple[str, str]]":
    """Check if a value is a ``(name, alias)`` tuple."""
    return isinstance(obj, tuple) and len(obj) == 2 and all(isinstance(item, str) for item in obj)


def is_string_sequence(obj: Any) -> "TypeGuard[Sequence[str]]":
    """Check if a value is a list or tuple of strings."""
    return isinstance(obj, (list, tuple)) and all(isinstance(item, str) for item in obj)


def is_dataclass(obj: Any) -> bool:
    """Check if a value is a dataclass type or instance.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    return hasattr(obj, "__dataclass_fields__")


def is_msgspec_struct(obj: Any) -> bool:
    """Check if a value is a msgspec struct type or instance.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    if isinstance(obj, type):
        return issubclass(obj, msgspec.Struct)
    return isinstance(obj, msgspec.Struct)
