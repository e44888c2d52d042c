from __future__ import annotations

import sqlite3
from collections.abc import Generator
from pathlib import Path

import pytest

from sqlchain.config import reset_global_config

here = Path(__file__).parent
root_path = here.parent

USERS = [
    (0, "Alice", "Paris"),
    (1, "Bob", "Lyon"),
    (2, "Carol", "Paris"),
    (3, "Dave", "Nantes"),
    (4, "Eve", "Lyon"),
    (5, "Frank", "Paris"),
    (6, "Grace", "Lille"),
    (7, "Heidi", "Nantes"),
    (8, "Ivan", "Lyon"),
    (9, "Judy", "Paris"),
]


@pytest.fixture(autouse=True)
def reset_config() -> Generator[None, None, None]:
    """Restore the global builder configuration around each test."""
    reset_global_config()
    yield
    reset_global_config()


@pytest.fixture
def sqlite_connection() -> Generator[sqlite3.Connection, None, None]:
    """In-memory database with a ``users`` table seeded with ten rows."""
    connection = sqlite3.connect(":memory:")
    connection.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, city TEXT)")
    connection.executemany("INSERT INTO users (id, name, city) VALUES (?, ?, ?)", USERS)
    connection.commit()
    yield connection
    connection.close()
