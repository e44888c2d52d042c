"""Unit tests for INSERT statements."""

import pytest

from sqlchain import sql
from sqlchain.builder import Insert
from sqlchain.exceptions import InvalidArgumentError, InvalidQueryError, ParameterCollisionError


def test_insert_renders_placeholders() -> None:
    """Test each value becomes a column and a placeholder."""
    query = sql.insert_into("users").values({"username": "Bob", "id": 5})

    assert query.to_sql() == "INSERT INTO users (username, id) VALUES (:_username, :_id)"
    assert query.to_params() == {"_username": "Bob", "_id": 5}


def test_into_sets_table() -> None:
    """Test into() and set_table() both set the target."""
    assert Insert().into("users").values({"id": 1}).to_sql() == "INSERT INTO users (id) VALUES (:_id)"
    assert Insert().set_table("users").values({"id": 1}).to_sql() == "INSERT INTO users (id) VALUES (:_id)"


def test_repeated_values_add_columns() -> None:
    """Test later calls extend the inserted row."""
    query = sql.insert_into("users").values({"id": 11}).values({"name": "Kim", "id": 11})

    assert query.to_sql() == "INSERT INTO users (id, name) VALUES (:_id, :_name)"


def test_conflicting_values_raise() -> None:
    """Test a column cannot receive two different values."""
    query = sql.insert_into("users").values({"id": 11})

    with pytest.raises(ParameterCollisionError):
        query.values({"id": 12})


def test_rejected_values_registers_nothing() -> None:
    """Test a row with an unbindable value leaves the statement unchanged."""
    query = sql.insert_into("users")

    with pytest.raises(InvalidArgumentError):
        query.values({"name": "Bob", "tags": ["a"]})

    assert query.to_params() == {}

    query.values({"name": "Alice"})

    assert query.to_sql() == "INSERT INTO users (name) VALUES (:_name)"
    assert query.to_params() == {"_name": "Alice"}


def test_colliding_values_keeps_earlier_columns() -> None:
    """Test a collision in a later row does not add its other columns."""
    query = sql.insert_into("users").values({"id": 11})

    with pytest.raises(ParameterCollisionError):
        query.values({"name": "Kim", "id": 12})

    assert query.to_sql() == "INSERT INTO users (id) VALUES (:_id)"
    assert query.to_params() == {"_id": 11}


@pytest.mark.parametrize("row", [["Bob", 5], {0: "Bob"}, "id=5", None], ids=["list", "int_keys", "str", "none"])
def test_values_requires_column_mapping(row: object) -> None:
    """Test positional rows are refused."""
    with pytest.raises(InvalidArgumentError):
        sql.insert_into("users").values(row)  # type: ignore[arg-type]


def test_insert_requires_table() -> None:
    """Test an insert without a table cannot be rendered."""
    with pytest.raises(InvalidQueryError):
        Insert().values({"id": 1}).to_sql()


def test_insert_requires_values() -> None:
    """Test an insert without values cannot be rendered."""
    with pytest.raises(InvalidQueryError):
        sql.insert_into("users").to_sql()
