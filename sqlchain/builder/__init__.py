"""Fluent builders for SELECT, INSERT, UPDATE and DELETE statements.

Each statement accumulates clause state and renders a SQL string with named
``:_column`` placeholders for the values it registers.
"""

from sqlchain.builder._base import SafeQuery, Statement
from sqlchain.builder._delete import Delete
from sqlchain.builder._insert import Insert
from sqlchain.builder._select import Select
from sqlchain.builder._update import Update
from sqlchain.builder.column import ColumnSpec, columns_from
from sqlchain.builder.mixins import GroupByClauseMixin, LimitClauseMixin, OrderByClauseMixin, WhereClauseMixin

__all__ = (
    "ColumnSpec",
    "Delete",
    "GroupByClauseMixin",
    "Insert",
    "LimitClauseMixin",
    "OrderByClauseMixin",
    "SafeQuery",
    "Select",
    "Statement",
    "Update",
    "WhereClauseMixin",
    "columns_from",
)
