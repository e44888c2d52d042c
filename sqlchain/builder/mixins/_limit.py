from typing import TYPE_CHECKING, Any, Optional, cast

from sqlchain.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from sqlchain.builder.protocols import BuilderProtocol

__all__ = ("LimitClauseMixin", "check_row_count")


def check_row_count(value: Any, clause: str) -> int:
    """Check a LIMIT or OFFSET value.

    Raises:
        InvalidArgumentError: If the value is not a non-negative integer.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        msg = f"{clause} must be a non-negative integer, got {value!r}"
        raise InvalidArgumentError(msg)
    return value


class LimitClauseMixin:
    """Mixin providing the LIMIT clause."""

    _limit: Optional[int]

    def limit(self, value: int) -> Any:
        """Set the maximum number of rows.

        Args:
            value: The maximum number of rows.

        Raises:
            InvalidArgumentError: If ``value`` is not a non-negative integer.

        Returns:
            The current statement for method chaining.
        """
        self._limit = check_row_count(value, "Limit")
        cast("BuilderProtocol", self)._invalidate_statement()
        return self

    def _render_limit(self) -> Optional[str]:
        if self._limit is None:
            return None
        return f"LIMIT {self._limit}"
