"""SQL fragment builders for paging, sorting, counting, and procedure calls.

This module centralizes SQL string assembly. It keeps `SqlDao` focused on
orchestration while making the generated SQL easy to test in isolation.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Optional

PAGE_ALIAS = "TB"
COUNT_COLUMN = "TOTAL"
DEFAULT_CALL_TEMPLATE = "{{ call {signature} }}"


def wrap_for_paging(sql: str) -> str:
    """Wrap an arbitrary query so sorting and paging apply to its result set."""

    return f"SELECT * FROM ({sql}) {PAGE_ALIAS}"


def count_sql(sql: str) -> str:
    """Build the total-row query used by paged reads."""

    return f"SELECT COUNT(*) AS {COUNT_COLUMN} FROM ({sql}) {PAGE_ALIAS}"


def append_order_by(sql: str, sorts: Optional[Mapping[str, str]]) -> str:
    """Append an `ORDER BY` clause for an ordered column-to-direction mapping.

    Directions are emitted verbatim. Callers must not pass untrusted input
    as column names or directions.

    Args:
        sql: SQL to extend.
        sorts: Ordered mapping such as `{"name": "ASC", "id": "DESC"}`.

    Returns:
        `sql` with the clause appended, or `sql` unchanged for no sorts.
    """

    if not sorts:
        return sql

    ordered_cols = ", ".join(f"{col} {direction}" for col, direction in sorts.items())
    return f"{sql} ORDER BY {ordered_cols}"


def procedure_signature(
    name: str,
    placeholders: Sequence[str] = (),
    *,
    template: str = DEFAULT_CALL_TEMPLATE,
) -> str:
    """Build a callable statement such as `{ call pkg.proc(?, ?) }`.

    Args:
        name: Procedure name, optionally schema/package qualified.
        placeholders: One placeholder per positional argument.
        template: Format string with a `{signature}` field.
    """

    return template.format(signature=f"{name}({', '.join(placeholders)})")


def sql_like_contain(value: Optional[str]) -> Optional[str]:
    """`computer` -> `%computer%`."""

    if value is None:
        return None
    return f"%{value}%"


def sql_like_start(value: Optional[str]) -> Optional[str]:
    """`computer` -> `computer%` (starts with)."""

    if value is None:
        return None
    return f"{value}%"


def sql_like_end(value: Optional[str]) -> Optional[str]:
    """`computer` -> `%computer` (ends with)."""

    if value is None:
        return None
    return f"%{value}"
