"""Show paging and procedure-call SQL across vendor dialects.

Nothing is executed; a connection stub only satisfies the adapter.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "sqldao").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sqldao import (
    Criteria,
    Database,
    MSSQLDialect,
    MySQLDialect,
    NameParameter,
    OracleDialect,
    PostgresDialect,
    ProcedureCriteria,
    SqlDao,
    SqlTypes,
)


class _PreviewConnection:
    def cursor(self):  # noqa: ANN201
        raise RuntimeError("preview only")


def show_for_dialect(name: str, dialect) -> None:  # noqa: ANN001
    print(f"\n===== {name} =====")
    dao = SqlDao(Database(_PreviewConnection(), dialect))
    criteria = Criteria(page=3, size=20, sorts={"created_at": "DESC"})

    sql, params = dao.build_paging_sql(
        f"SELECT id, status FROM orders WHERE status = {dialect.placeholder('status')}",
        ["open"],
        criteria,
    )
    print("Paging strategy:", dao.paging.name)
    print("Positional SQL:", sql)
    print("Positional params:", params.to_array_parameter())

    sql, params = dao.build_paging_sql(
        f"SELECT id, status FROM orders WHERE status = {dialect.named_placeholder('status')}",
        NameParameter(status="open"),
        criteria,
    )
    print("Named SQL:", sql)
    print("Named params:", params.to_map_parameter())

    proc = ProcedureCriteria("archive_orders")
    proc.add_param(2024, sql_type=SqlTypes.INTEGER).add_param(None)
    call_sql, values, _ = dao._procedure_call(proc)  # noqa: SLF001
    print("Procedure call:", call_sql, values)


def main() -> None:
    show_for_dialect("MSSQLDialect", MSSQLDialect())
    show_for_dialect("MySQLDialect", MySQLDialect())
    show_for_dialect("PostgresDialect", PostgresDialect())
    show_for_dialect("OracleDialect", OracleDialect())


if __name__ == "__main__":
    main()
