"""DB-API adapter and dialect exports."""

from .async_database import AsyncDatabase
from .database import Database
from .dialects import (
    Dialect,
    MSSQLDialect,
    MySQLDialect,
    OracleDialect,
    PostgresDialect,
    SQLiteDialect,
    connection_product_name,
    dialect_for_connection,
    dialect_for_vendor,
)

__all__ = [
    "AsyncDatabase",
    "Database",
    "Dialect",
    "MSSQLDialect",
    "MySQLDialect",
    "OracleDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "connection_product_name",
    "dialect_for_connection",
    "dialect_for_vendor",
]
