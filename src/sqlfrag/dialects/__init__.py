"""Dialects render a CompiledSql into what a particular driver expects."""

from .base import Dialect
from .emitter import emit_sql
from .mysql import MySqlDialect, MySqlQuery, to_mysql_query
from .postgres import PostgresDialect, PostgresQuery, to_postgres_query
from .registry import available, get, register
from .unsafe import UnsafeDialect, to_unsafe_string

__all__ = [
    "Dialect",
    "emit_sql",
    "MySqlDialect",
    "MySqlQuery",
    "to_mysql_query",
    "PostgresDialect",
    "PostgresQuery",
    "to_postgres_query",
    "UnsafeDialect",
    "to_unsafe_string",
    "available",
    "get",
    "register",
]
