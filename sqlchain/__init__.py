"""sqlchain: a fluent, parameterized SQL statement builder."""

from sqlchain import builder, config, driver, exceptions, parameters, typing, utils
from sqlchain.__metadata__ import __version__
from sqlchain._sql import QueryBuilder, sql
from sqlchain.builder import ColumnSpec, Delete, Insert, SafeQuery, Select, Statement, Update
from sqlchain.config import BuilderConfig, get_global_config, load_config_from_env, set_global_config
from sqlchain.driver import DriverConnection, PreparedStatement
from sqlchain.exceptions import (
    DriverError,
    ImproperConfigurationError,
    InvalidArgumentError,
    InvalidQueryError,
    MissingParameterError,
    NoDriverError,
    ParameterCollisionError,
    SQLChainError,
    UnknownTypeError,
)
from sqlchain.parameters import ParameterStyle, ParameterType, classify
from sqlchain.typing import FetchMode

__all__ = (
    "BuilderConfig",
    "ColumnSpec",
    "Delete",
    "DriverConnection",
    "DriverError",
    "FetchMode",
    "ImproperConfigurationError",
    "Insert",
    "InvalidArgumentError",
    "InvalidQueryError",
    "MissingParameterError",
    "NoDriverError",
    "ParameterCollisionError",
    "ParameterStyle",
    "ParameterType",
    "PreparedStatement",
    "QueryBuilder",
    "SQLChainError",
    "SafeQuery",
    "Select",
    "Statement",
    "Update",
    "UnknownTypeError",
    "__version__",
    "builder",
    "classify",
    "config",
    "driver",
    "exceptions",
    "get_global_config",
    "load_config_from_env",
    "parameters",
    "set_global_config",
    "sql",
    "typing",
    "utils",
)
