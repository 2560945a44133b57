"""Concrete SQL dialect implementations for DB-API adapters."""

from __future__ import annotations

import importlib
from typing import Any

from ...core.procedures import SqlTypes
from ...core.vendors import detect_vendor

SQL_DBMS_NAME = 17


class Dialect:
    """Base dialect that defines placeholder, paging, and call behavior."""

    name: str = "generic"
    paramstyle: str = "qmark"
    named_paramstyle: str = "named"
    default_paging: str = "offset_fetch"
    call_template: str = "{{ call {signature} }}"

    def placeholder(self, key: str) -> str:
        """Return positional parameter placeholder for current param style."""

        return _render_placeholder(self.paramstyle, key)

    def named_placeholder(self, key: str) -> str:
        """Return named parameter placeholder for current named style."""

        return _render_placeholder(self.named_paramstyle, key)

    def input_size(self, sql_type: SqlTypes) -> Any:
        """Return a `cursor.setinputsizes()` entry for a procedure argument.

        `None` means no predefinition; override to map type codes to driver
        type objects.
        """

        return None


def _render_placeholder(style: str, key: str) -> str:
    if style == "named":
        return f":{key}"
    if style == "qmark":
        return "?"
    if style == "format":
        return "%s"
    if style == "pyformat":
        return f"%({key})s"
    raise ValueError(f"Unsupported paramstyle: {style}")


class SQLiteDialect(Dialect):
    """SQLite dialect (`?` and `:name` parameters, `LIMIT`/`OFFSET` paging)."""

    name = "sqlite"
    paramstyle = "qmark"
    named_paramstyle = "named"
    default_paging = "limit_offset"


class MySQLDialect(Dialect):
    """MySQL dialect (`%s`/`%(name)s` parameters, `LIMIT`/`OFFSET` paging)."""

    name = "mysql"
    paramstyle = "format"
    named_paramstyle = "pyformat"
    default_paging = "limit_offset"
    call_template = "CALL {signature}"


class PostgresDialect(Dialect):
    """PostgreSQL dialect (`%s`/`%(name)s` parameters, `LIMIT`/`OFFSET` paging)."""

    name = "postgres"
    paramstyle = "format"
    named_paramstyle = "pyformat"
    default_paging = "limit_offset"
    call_template = "CALL {signature}"


class MSSQLDialect(Dialect):
    """SQL Server dialect (`?` parameters, `OFFSET`/`FETCH` paging, ODBC call escape).

    pyodbc binds positional `?` parameters only; use `IndexParameter` (or a
    list) with this dialect. `NameParameter` renders `:name` placeholders
    that the driver rejects.
    """

    name = "mssql"
    paramstyle = "qmark"
    named_paramstyle = "named"
    default_paging = "offset_fetch"


class OracleDialect(Dialect):
    """Oracle dialect (`:name` parameters bound by position or name, `ROWNUM` paging).

    Procedure argument types are predefined with `oracledb` database types,
    imported on first use.
    """

    name = "oracle"
    paramstyle = "named"
    named_paramstyle = "named"
    default_paging = "rownum"
    call_template = "BEGIN {signature}; END;"
    input_type_names = {
        SqlTypes.VARCHAR: "DB_TYPE_VARCHAR",
        SqlTypes.CHAR: "DB_TYPE_CHAR",
        SqlTypes.NUMERIC: "DB_TYPE_NUMBER",
        SqlTypes.DECIMAL: "DB_TYPE_NUMBER",
        SqlTypes.INTEGER: "DB_TYPE_NUMBER",
        SqlTypes.DATE: "DB_TYPE_DATE",
        SqlTypes.TIMESTAMP: "DB_TYPE_TIMESTAMP",
        SqlTypes.BLOB: "DB_TYPE_BLOB",
        SqlTypes.CLOB: "DB_TYPE_CLOB",
        SqlTypes.CURSOR: "DB_TYPE_CURSOR",
    }

    def input_size(self, sql_type: SqlTypes) -> Any:
        type_name = self.input_type_names.get(sql_type)
        if type_name is None:
            return None
        oracledb = importlib.import_module("oracledb")
        return getattr(oracledb, type_name)


_DIALECTS = {
    "oracle": OracleDialect,
    "mysql": MySQLDialect,
    "mssql": MSSQLDialect,
    "postgres": PostgresDialect,
    "sqlite": SQLiteDialect,
}


def connection_product_name(conn: Any) -> str:
    """Return a database product name for an open DB-API connection.

    Uses ODBC `SQL_DBMS_NAME` when the connection exposes `getinfo()`
    (pyodbc), otherwise the driver module name.
    """

    getinfo = getattr(conn, "getinfo", None)
    if callable(getinfo):
        product = getinfo(SQL_DBMS_NAME)
        if product:
            return str(product)
    return type(conn).__module__.split(".")[0]


def dialect_for_vendor(vendor: str) -> Dialect:
    """Return a dialect instance for a vendor name from `detect_vendor()`."""

    try:
        return _DIALECTS[vendor.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown vendor {vendor!r}. Use one of: {', '.join(sorted(_DIALECTS))}."
        ) from None


def dialect_for_connection(conn: Any) -> Dialect:
    """Pick a dialect for an open connection, falling back to the generic one."""

    vendor = detect_vendor(connection_product_name(conn))
    if vendor is None:
        return Dialect()
    return dialect_for_vendor(vendor)
