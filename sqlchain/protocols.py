"""Runtime-checkable protocols for the DB-API objects sqlchain drives.

Any PEP 249 connection works as a driver handle: sqlchain only needs a
connection able to hand out cursors and cursors able to execute and fetch.
"""

from collections.abc import Sequence
from typing import Any, Optional, Protocol, runtime_checkable

__all__ = (
    "DBAPIConnectionProtocol",
    "DBAPICursorProtocol",
)


@runtime_checkable
class DBAPICursorProtocol(Protocol):
    """Subset of a PEP 249 cursor used by prepared statements."""

    description: "Optional[Sequence[Sequence[Any]]]"
    rowcount: int

    def execute(self, operation: Any, parameters: Any = ...) -> Any: ...

    def fetchone(self) -> Any: ...

    def fetchall(self) -> "Sequence[Any]": ...

    def close(self) -> Any: ...


@runtime_checkable
class DBAPIConnectionProtocol(Protocol):
    """Subset of a PEP 249 connection used as a driver handle."""

    def cursor(self) -> Any: ...
