"""Unit tests for UPDATE statements."""

import pytest

from sqlchain import sql
from sqlchain.builder import Update
from sqlchain.exceptions import InvalidArgumentError, InvalidQueryError


def test_update_with_mapping_and_where() -> None:
    """Test mapping assignments become placeholders."""
    query = sql.update("users").set({"name": "X"}).where("id = 9")

    assert query.to_sql() == "UPDATE users SET name = :_name WHERE (id = 9)"
    assert query.to_params() == {"_name": "X"}


def test_literal_assignments_are_kept() -> None:
    """Test string assignments are rendered verbatim."""
    query = sql.update("counters").set("hits = hits + 1", {"label": "home"})

    assert query.to_sql() == "UPDATE counters SET hits = hits + 1, label = :_label"


def test_set_value() -> None:
    """Test a single parameterized assignment."""
    query = sql.update("users").set_value("city", "Lyon").set_value("name", "Ivan")

    assert query.to_sql() == "UPDATE users SET city = :_city, name = :_name"
    assert query.to_params() == {"_city": "Lyon", "_name": "Ivan"}


def test_update_order_and_limit() -> None:
    """Test ORDER BY and LIMIT follow WHERE."""
    query = sql.update("users").set({"city": "Lille"}).where({"name": "Bob"}).order_by("id", "DESC").limit(1)

    assert query.to_sql() == "UPDATE users SET city = :_city WHERE (name = :_name) ORDER BY id DESC LIMIT 1"


@pytest.mark.parametrize("value", [5, ["name = 'X'"], None], ids=["int", "list", "none"])
def test_set_rejects_other_types(value: object) -> None:
    """Test assignments are strings or mappings."""
    with pytest.raises(InvalidArgumentError):
        sql.update("users").set(value)  # type: ignore[arg-type]


def test_rejected_set_registers_nothing() -> None:
    """Test a rejected set call leaves no parameters or assignments behind."""
    query = sql.update("users")

    with pytest.raises(InvalidArgumentError):
        query.set({"name": "X"}, 5)  # type: ignore[arg-type]

    assert query.to_params() == {}

    query.set_value("name", "Y")

    assert query.to_sql() == "UPDATE users SET name = :_name"
    assert query.to_params() == {"_name": "Y"}


def test_update_requires_assignments() -> None:
    """Test an update without assignments cannot be rendered."""
    with pytest.raises(InvalidQueryError):
        sql.update("users").where("id = 1").to_sql()


def test_update_requires_table() -> None:
    """Test an update without a table cannot be rendered."""
    with pytest.raises(InvalidQueryError):
        Update().set({"name": "X"}).to_sql()
