from contextlib import AbstractContextManager
from typing import Any, Optional, Protocol

from sqlchain.config import BuilderConfig
from sqlchain.driver import DriverConnection

__all__ = ("BuilderProtocol",)


class BuilderProtocol(Protocol):
    table: Optional[str]
    connection: Optional[DriverConnection]
    config: BuilderConfig
    _parameters: dict[str, Any]

    def register_parameter(self, column: str, value: Any) -> str: ...

    def _registering(self) -> AbstractContextManager[None]: ...

    def _invalidate_statement(self) -> None: ...
