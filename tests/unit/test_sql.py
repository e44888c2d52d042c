"""Unit tests for the statement factory."""

from unittest.mock import MagicMock

import pytest

from sqlchain import QueryBuilder, sql
from sqlchain.builder import Delete, Insert, Select, Update
from sqlchain.config import BuilderConfig, get_global_config
from sqlchain.driver import DriverConnection
from sqlchain.exceptions import ImproperConfigurationError, NoDriverError
from sqlchain.parameters import ParameterStyle
from sqlchain.typing import FetchMode


class Row:
    def __init__(self, **columns: object) -> None:
        self.__dict__.update(columns)


def test_factory_creates_statements() -> None:
    """Test each factory method returns the matching statement."""
    assert isinstance(sql.select(), Select)
    assert isinstance(sql.insert_into("users"), Insert)
    assert isinstance(sql.update("users"), Update)
    assert isinstance(sql.delete_from("users"), Delete)
    assert sql.delete_from("users").table == "users"


def test_unbound_factory() -> None:
    """Test the module factory has no connection."""
    assert sql.connection is None
    with pytest.raises(NoDriverError):
        sql.last_insert_id()


def test_bound_factory_shares_connection() -> None:
    """Test statements share the builder connection."""
    raw = MagicMock()
    raw.cursor.return_value.lastrowid = 7
    builder = QueryBuilder(raw, BuilderConfig(parameter_style=ParameterStyle.NAMED_COLON))

    assert isinstance(builder.connection, DriverConnection)
    assert builder.connection.parameter_style is ParameterStyle.NAMED_COLON
    assert builder.insert_into("users").connection is builder.connection
    assert builder.last_insert_id() is None

    builder.insert_into("users").values({"name": "Kim"}).execute()

    assert builder.last_insert_id() == 7


def test_set_default_fetch_mode() -> None:
    """Test the default fetch mode applies to statements created afterwards."""
    before = sql.select().from_("users")

    QueryBuilder.set_default_fetch_mode(FetchMode.CLASS, Row)

    assert get_global_config().fetch_mode is FetchMode.CLASS
    assert get_global_config().schema_type is Row
    assert sql.select().from_("users").config.fetch_mode is FetchMode.CLASS
    assert before.config.fetch_mode is FetchMode.DICT


def test_set_default_fetch_mode_class_needs_schema() -> None:
    """Test CLASS mode without a schema type is rejected."""
    with pytest.raises(ImproperConfigurationError):
        QueryBuilder.set_default_fetch_mode(FetchMode.CLASS)
