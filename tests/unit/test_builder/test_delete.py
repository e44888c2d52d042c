"""Unit tests for DELETE statements."""

import pytest

from sqlchain import sql
from sqlchain.builder import Delete, Insert, Select, Update
from sqlchain.exceptions import InvalidQueryError


def test_delete_all_rows() -> None:
    """Test a delete without conditions."""
    assert sql.delete_from("users").to_sql() == "DELETE FROM users"


def test_delete_with_clauses() -> None:
    """Test WHERE, ORDER BY and LIMIT on a delete."""
    query = Delete().from_("users").where("id < 5").order_by("id").limit(2)

    assert query.to_sql() == "DELETE FROM users WHERE (id < 5) ORDER BY id LIMIT 2"


def test_delete_with_mapping_condition() -> None:
    """Test mapping conditions register parameters."""
    query = sql.delete_from("users").where({"city": "Lyon"})

    assert query.to_sql() == "DELETE FROM users WHERE (city = :_city)"
    assert query.build().parameters == {"_city": "Lyon"}


@pytest.mark.parametrize(
    "statement",
    [
        Select().set_columns(),
        Select().set_columns("id").where("id = 1").order_by("id").limit(1),
        Insert().values({"id": 1}),
        Update().set({"name": "X"}).where("id = 1"),
        Delete(),
        Delete().where("id = 1").limit(3),
    ],
    ids=["select", "select_clauses", "insert", "update", "delete", "delete_clauses"],
)
def test_statements_require_table(statement: object) -> None:
    """Test rendering without a table always fails."""
    with pytest.raises(InvalidQueryError):
        statement.to_sql()  # type: ignore[attr-defined]
