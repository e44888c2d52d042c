"""SQL statement clause mixins."""

from sqlchain.builder.mixins._group_by import GroupByClause, GroupByClauseMixin
from sqlchain.builder.mixins._limit import LimitClauseMixin
from sqlchain.builder.mixins._order_by import OrderByClause, OrderByClauseMixin
from sqlchain.builder.mixins._where import WhereClause, WhereClauseMixin

__all__ = (
    "GroupByClause",
    "GroupByClauseMixin",
    "LimitClauseMixin",
    "OrderByClause",
    "OrderByClauseMixin",
    "WhereClause",
    "WhereClauseMixin",
)
