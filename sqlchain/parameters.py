"""Parameter typing, naming and placeholder handling.

Values registered on a statement are bound to named ``:name`` placeholders.
This module maps runtime values to the :class:`ParameterType` tag used when
binding, derives placeholder names from column names, and locates the
placeholders of a rendered statement with the ``sqlglot`` tokenizer so that
they can be checked and rewritten for drivers using another parameter style.
"""

import io
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, NamedTuple, Union

from sqlglot.errors import TokenError
from sqlglot.tokens import Tokenizer, TokenType

from sqlchain.exceptions import InvalidArgumentError, InvalidQueryError, UnknownTypeError

__all__ = (
    "ParameterStyle",
    "ParameterType",
    "Placeholder",
    "classify",
    "coerce",
    "convert_placeholders",
    "extract_placeholders",
    "materialize",
    "normalize_parameter_name",
    "placeholder_name",
)

_IDENTIFIER_RE = re.compile(r"^[^\W\d]\w*$")
_NON_WORD_RE = re.compile(r"\W")


class ParameterType(Enum):
    """Binding type tag of a parameter value."""

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    NULL = "null"
    BLOB = "blob"

    def __str__(self) -> str:
        return self.value


class ParameterStyle(str, Enum):
    """Placeholder syntax expected by a driver.

    - NAMED_COLON: :name placeholders (native form of rendered statements)
    - NAMED_PYFORMAT: %(name)s placeholders
    - QMARK: ? placeholders
    """

    NAMED_COLON = "named_colon"
    NAMED_PYFORMAT = "named_pyformat"
    QMARK = "qmark"

    def __str__(self) -> str:
        return self.value


class Placeholder(NamedTuple):
    """A ``:name`` placeholder located in a SQL string."""

    name: str
    start: int
    end: int
    """Offset one past the last character of the placeholder."""


def _is_binary_stream(value: Any) -> bool:
    if isinstance(value, (io.BufferedIOBase, io.RawIOBase)):
        return True
    return isinstance(value, io.IOBase) and "b" in getattr(value, "mode", "")


def classify(value: Any) -> ParameterType:
    """Get the binding type of a value.

    Args:
        value: The value to classify.

    Raises:
        InvalidArgumentError: If the value is a composite (mapping, sequence, object).
        UnknownTypeError: If the type is not recognised.

    Returns:
        The :class:`ParameterType` for the value.
    """
    if value is None:
        return ParameterType.NULL
    if isinstance(value, bool):
        return ParameterType.BOOL
    if isinstance(value, int):
        return ParameterType.INT
    if isinstance(value, (str, float)):
        return ParameterType.STRING
    if isinstance(value, (bytes, bytearray, memoryview)) or _is_binary_stream(value):
        return ParameterType.BLOB
    if isinstance(value, (Mapping, list, tuple, set, frozenset)) or hasattr(value, "__dict__"):
        msg = f"Incorrect type: {type(value).__name__} values cannot be bound as parameters"
        raise InvalidArgumentError(msg)
    msg = f"Unknown type {type(value).__name__}, please set it explicitly"
    raise UnknownTypeError(msg, value_type=type(value))


def materialize(value: Any) -> Any:
    """Read a binary stream into ``bytes``. Other values are returned unchanged."""
    if _is_binary_stream(value):
        return bytes(value.read())
    return value


def coerce(value: Any, parameter_type: ParameterType) -> Any:
    """Convert a value to what a DB-API driver accepts for a binding type."""
    if parameter_type is ParameterType.NULL:
        return None
    if parameter_type is ParameterType.BOOL:
        return int(bool(value))
    if parameter_type is ParameterType.INT:
        return int(value)
    if parameter_type is ParameterType.BLOB:
        if hasattr(value, "read"):
            return bytes(value.read())
        return bytes(value)
    if isinstance(value, (str, float)):
        return value
    return str(value)


def placeholder_name(column: str) -> str:
    """Derive the placeholder name registered for a column.

    ``id`` gives ``_id`` (rendered ``:_id``); characters that cannot appear in
    a placeholder are replaced, so ``users.id`` gives ``_users_id``.
    """
    return "_" + _NON_WORD_RE.sub("_", column)


def normalize_parameter_name(name: str) -> str:
    """Strip the leading colon of a ``:name`` style parameter name."""
    if not isinstance(name, str) or not name.lstrip(":"):
        msg = f"Parameter name must be a non-empty string, got {name!r}"
        raise InvalidArgumentError(msg)
    return name[1:] if name.startswith(":") else name


def extract_placeholders(sql: str) -> "list[Placeholder]":
    """Locate the ``:name`` placeholders of a statement.

    Colons inside string literals, quoted identifiers and ``::`` casts are
    not placeholders.

    Raises:
        InvalidQueryError: If the statement cannot be tokenized.
    """
    try:
        tokens = Tokenizer().tokenize(sql)
    except TokenError as e:
        msg = f"Unable to tokenize statement: {e}"
        raise InvalidQueryError(msg) from e

    placeholders: list[Placeholder] = []
    for current, following in zip(tokens, tokens[1:]):
        if current.token_type != TokenType.COLON:
            continue
        if following.start != current.end + 1 or not _IDENTIFIER_RE.match(following.text):
            continue
        placeholders.append(Placeholder(following.text, current.start, following.end + 1))
    return placeholders


def convert_placeholders(
    sql: str,
    parameters: "Mapping[str, Any]",
    style: ParameterStyle,
) -> "tuple[str, Union[dict[str, Any], tuple[Any, ...]]]":
    """Rewrite ``:name`` placeholders for a driver's parameter style.

    Args:
        sql: Statement using ``:name`` placeholders.
        parameters: Values keyed by placeholder name (without the colon).
        style: Target parameter style.

    Returns:
        The rewritten statement and the parameters in the shape the style
        expects: a mapping for named styles, a tuple ordered by occurrence
        for ``QMARK``.
    """
    if style is ParameterStyle.NAMED_COLON:
        return sql, dict(parameters)

    pieces: list[str] = []
    positional: list[Any] = []
    cursor = 0
    for placeholder in extract_placeholders(sql):
        segment = sql[cursor : placeholder.start]
        if style is ParameterStyle.NAMED_PYFORMAT:
            pieces.append(segment.replace("%", "%%"))
            pieces.append(f"%({placeholder.name})s")
        else:
            pieces.append(segment)
            pieces.append("?")
            positional.append(parameters.get(placeholder.name))
        cursor = placeholder.end
    tail = sql[cursor:]
    pieces.append(tail.replace("%", "%%") if style is ParameterStyle.NAMED_PYFORMAT else tail)

    if style is ParameterStyle.QMARK:
        return "".join(pieces), tuple(positional)
    return "".join(pieces), dict(parameters)
