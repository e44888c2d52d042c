"""Builder configuration and the process-wide defaults.

Statements take a snapshot of the global :class:`BuilderConfig` when they are
created, unless a configuration is passed explicitly. Setting the global
configuration is expected to happen once at startup.

Environment Variables Supported:
- SQLCHAIN_FETCH_MODE: Default fetch mode (dict, tuple, object)
- SQLCHAIN_PARAMETER_STYLE: Default parameter style (named_colon, named_pyformat, qmark)
- SQLCHAIN_CHECK_PLACEHOLDERS: Check placeholders before executing (true/false)
- SQLCHAIN_LOG_STATEMENTS: Log every executed statement at INFO level (true/false)
"""

import os
import threading
from dataclasses import dataclass, replace
from typing import Any, Optional

from sqlchain.exceptions import ImproperConfigurationError
from sqlchain.parameters import ParameterStyle
from sqlchain.typing import FetchMode
from sqlchain.utils.logging import get_logger

__all__ = (
    "BuilderConfig",
    "get_global_config",
    "load_config_from_env",
    "reset_global_config",
    "set_global_config",
)

logger = get_logger("config")


@dataclass(frozen=True)
class BuilderConfig:
    """Settings shared by the statements of a builder."""

    fetch_mode: FetchMode = FetchMode.DICT
    """Row shape used when ``fetch`` is called without a mode."""
    schema_type: Optional[type] = None
    """Schema type for :attr:`FetchMode.CLASS` rows."""
    parameter_style: Optional[ParameterStyle] = None
    """Placeholder style of the driver. ``None`` detects it from the driver module."""
    check_placeholders: bool = True
    """Raise before executing when a placeholder has no bound value."""
    log_statements: bool = False
    """Log executed statements at INFO level instead of DEBUG."""

    def replace(self, **changes: Any) -> "BuilderConfig":
        """Return a copy of the configuration with ``changes`` applied."""
        return replace(self, **changes)

    def validate(self) -> "list[str]":
        """Check the configuration for inconsistent settings.

        Returns:
            A list of problems, empty when the configuration is valid.
        """
        errors: list[str] = []
        if self.fetch_mode is FetchMode.CLASS and self.schema_type is None:
            errors.append("fetch_mode CLASS requires a schema_type")
        if self.schema_type is not None and not isinstance(self.schema_type, type):
            errors.append(f"schema_type must be a class, got {self.schema_type!r}")
        return errors


_global_config: BuilderConfig = BuilderConfig()
_config_lock = threading.Lock()


def get_global_config() -> BuilderConfig:
    """Get the process-wide default configuration."""
    return _global_config


def set_global_config(config: BuilderConfig) -> None:
    """Replace the process-wide default configuration.

    Args:
        config: New configuration to set globally.

    Raises:
        ImproperConfigurationError: If the configuration is invalid.
    """
    global _global_config
    validation_errors = config.validate()
    if validation_errors:
        msg = f"Invalid configuration: {', '.join(validation_errors)}"
        raise ImproperConfigurationError(msg)
    with _config_lock:
        _global_config = config
    logger.debug("Global builder configuration updated", extra={"fetch_mode": str(config.fetch_mode)})


def reset_global_config() -> None:
    """Restore the default configuration."""
    set_global_config(BuilderConfig())


def load_config_from_env() -> BuilderConfig:
    """Load a configuration from ``SQLCHAIN_*`` environment variables.

    Returns:
        BuilderConfig built from the environment, defaults elsewhere.
    """
    return BuilderConfig(
        fetch_mode=_env_enum("SQLCHAIN_FETCH_MODE", FetchMode, FetchMode.DICT),
        parameter_style=_env_enum("SQLCHAIN_PARAMETER_STYLE", ParameterStyle, None),
        check_placeholders=_env_bool("SQLCHAIN_CHECK_PLACEHOLDERS", True),
        log_statements=_env_bool("SQLCHAIN_LOG_STATEMENTS", False),
    )


def _env_bool(key: str, default: bool) -> bool:
    """Get boolean value from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on", "enabled")


def _env_enum(key: str, enum_type: Any, default: Any) -> Any:
    """Get an enum member from an environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return enum_type(value.lower())
    except ValueError:
        logger.warning("Invalid value for %s: %s, using default %s", key, value, default)
        return default
