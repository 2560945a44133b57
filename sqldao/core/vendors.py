"""Database vendor detection from product or driver names."""

from __future__ import annotations

from typing import Optional

ORACLE = "oracle"
MYSQL = "mysql"
MSSQL = "mssql"
POSTGRES = "postgres"
SQLITE = "sqlite"

_VENDOR_MARKERS = (
    (ORACLE, ("oracle", "cx_oracle", "oracledb")),
    (MYSQL, ("mysql", "mariadb", "pymysql")),
    (MSSQL, ("microsoft sql server", "sql server", "mssql", "pymssql")),
    (POSTGRES, ("postgres", "psycopg")),
    (SQLITE, ("sqlite",)),
)


def detect_vendor(product_name: Optional[str]) -> Optional[str]:
    """Map a product or driver name to `oracle`, `mysql`, `mssql`, `postgres`, or `sqlite`.

    Returns `None` for unknown products.
    """

    if not product_name:
        return None
    lowered = product_name.lower()
    for vendor, markers in _VENDOR_MARKERS:
        if any(marker in lowered for marker in markers):
            return vendor
    return None
