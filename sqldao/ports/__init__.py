"""Public port exports for concrete adapter implementations."""

from .db_api import (
    AsyncDatabase,
    Database,
    Dialect,
    MSSQLDialect,
    MySQLDialect,
    OracleDialect,
    PostgresDialect,
    SQLiteDialect,
)

__all__ = [
    "Database",
    "AsyncDatabase",
    "Dialect",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
    "MSSQLDialect",
    "OracleDialect",
]
