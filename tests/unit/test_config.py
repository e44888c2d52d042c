"""Unit tests for the builder configuration."""

from dataclasses import dataclass

import pytest

from sqlchain.config import (
    BuilderConfig,
    get_global_config,
    load_config_from_env,
    reset_global_config,
    set_global_config,
)
from sqlchain.exceptions import ImproperConfigurationError
from sqlchain.parameters import ParameterStyle
from sqlchain.typing import FetchMode


@dataclass
class User:
    id: int
    name: str
    city: str


def test_default_config() -> None:
    """Test the defaults of a new configuration."""
    config = BuilderConfig()

    assert config.fetch_mode is FetchMode.DICT
    assert config.schema_type is None
    assert config.parameter_style is None
    assert config.check_placeholders is True
    assert config.log_statements is False
    assert config.validate() == []


def test_replace_returns_copy() -> None:
    """Test replace leaves the source configuration untouched."""
    config = BuilderConfig()
    updated = config.replace(fetch_mode=FetchMode.TUPLE)

    assert updated.fetch_mode is FetchMode.TUPLE
    assert config.fetch_mode is FetchMode.DICT


def test_validate_class_mode_requires_schema() -> None:
    """Test CLASS fetch mode needs a schema type."""
    assert BuilderConfig(fetch_mode=FetchMode.CLASS).validate()
    assert BuilderConfig(fetch_mode=FetchMode.CLASS, schema_type=User).validate() == []


def test_validate_schema_must_be_class() -> None:
    """Test a schema type that is not a class is reported."""
    assert BuilderConfig(schema_type="User").validate()  # type: ignore[arg-type]


def test_set_and_reset_global_config() -> None:
    """Test the global configuration can be replaced and restored."""
    config = BuilderConfig(fetch_mode=FetchMode.OBJECT)
    set_global_config(config)

    assert get_global_config() is config

    reset_global_config()
    assert get_global_config() == BuilderConfig()


def test_set_invalid_global_config() -> None:
    """Test an invalid configuration is rejected and not installed."""
    with pytest.raises(ImproperConfigurationError):
        set_global_config(BuilderConfig(fetch_mode=FetchMode.CLASS))

    assert get_global_config().fetch_mode is FetchMode.DICT


def test_load_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test SQLCHAIN_* variables are read."""
    monkeypatch.setenv("SQLCHAIN_FETCH_MODE", "TUPLE")
    monkeypatch.setenv("SQLCHAIN_PARAMETER_STYLE", "qmark")
    monkeypatch.setenv("SQLCHAIN_CHECK_PLACEHOLDERS", "false")
    monkeypatch.setenv("SQLCHAIN_LOG_STATEMENTS", "yes")

    config = load_config_from_env()

    assert config.fetch_mode is FetchMode.TUPLE
    assert config.parameter_style is ParameterStyle.QMARK
    assert config.check_placeholders is False
    assert config.log_statements is True


def test_load_config_from_env_invalid_value(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test an unknown value falls back to the default."""
    monkeypatch.setenv("SQLCHAIN_FETCH_MODE", "matrix")
    monkeypatch.delenv("SQLCHAIN_PARAMETER_STYLE", raising=False)

    config = load_config_from_env()

    assert config.fetch_mode is FetchMode.DICT
    assert config.parameter_style is None
