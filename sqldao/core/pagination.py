"""Vendor-specific paging rewrites.

Each strategy receives SQL already shaped as
`SELECT * FROM (<base>) TB [ORDER BY ...]`, appends (or wraps with) its
vendor syntax, and adds the bind values it needs to the parameter container
it is given. Positional values are appended in placeholder emission order,
named values use the reserved names below.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple, cast

from .contracts import DialectPort, PagingStrategy
from .criteria import Criteria
from .errors import DaoConfigurationError, PagingParameterConflictError
from .parameters import IndexParameter, NameParameter, ParamKind, Parameter

P_ROW_START = "P_ROW_START"
P_ROW_TOTAL = "P_ROW_TOTAL"
P_PAGE_ROW_NUM = "P_PAGE_ROW_NUM"
RESERVED_PARAM_NAMES = frozenset({P_ROW_START, P_ROW_TOTAL, P_PAGE_ROW_NUM})


def bind_value(params: Parameter, dialect: DialectPort, name: str, value: Any) -> str:
    """Add one paging value to `params` and return its placeholder.

    Raises:
        PagingParameterConflictError: `name` is already bound by the caller.
    """

    if params.kind is ParamKind.NAMED:
        named = cast(NameParameter, params)
        if name in named:
            raise PagingParameterConflictError(
                f"Bind name {name!r} is reserved for paging; rename the caller parameter."
            )
        named.add(name, value)
        return dialect.named_placeholder(name)
    if params.kind is ParamKind.INDEXED:
        cast(IndexParameter, params).add(value)
        return dialect.placeholder(name.lower())
    raise TypeError(f"Unsupported parameter kind: {params.kind!r}")


class OffsetFetchPaging:
    """`OFFSET n ROWS FETCH NEXT m ROWS ONLY` (SQL Server 2012+, ANSI)."""

    name = "offset_fetch"

    def rewrite(
        self,
        sql: str,
        criteria: Criteria,
        params: Parameter,
        dialect: DialectPort,
    ) -> str:
        start = bind_value(params, dialect, P_ROW_START, criteria.mssql_offset)
        total = bind_value(params, dialect, P_ROW_TOTAL, criteria.size)
        return f"{sql} OFFSET {start} ROWS FETCH NEXT {total} ROWS ONLY"


class LimitOffsetPaging:
    """`LIMIT m OFFSET n` (MySQL, MariaDB, PostgreSQL, SQLite).

    This is what the `mysql` alias selects: MySQL has no `OFFSET ... FETCH`
    syntax. Use `offset_fetch` for the `OFFSET n ROWS FETCH NEXT m ROWS ONLY`
    form.
    """

    name = "limit_offset"

    def rewrite(
        self,
        sql: str,
        criteria: Criteria,
        params: Parameter,
        dialect: DialectPort,
    ) -> str:
        total = bind_value(params, dialect, P_ROW_TOTAL, criteria.size)
        start = bind_value(params, dialect, P_ROW_START, criteria.mysql_offset)
        return f"{sql} LIMIT {total} OFFSET {start}"


class RownumPaging:
    """Oracle `ROWNUM` window for dialects without `OFFSET`/`FETCH`."""

    name = "rownum"

    def rewrite(
        self,
        sql: str,
        criteria: Criteria,
        params: Parameter,
        dialect: DialectPort,
    ) -> str:
        wrapped = (
            "SELECT T.* FROM ("
            f"SELECT ROWNUM AS PAGE_ROW_NUM, T.* FROM ({sql}) T"
            ") T"
        )
        row_end = bind_value(params, dialect, P_PAGE_ROW_NUM, criteria.oracle_row_end)
        row_start = bind_value(params, dialect, P_ROW_START, criteria.oracle_row_start)
        return (
            f"{wrapped} WHERE T.PAGE_ROW_NUM <= {row_end}"
            f" AND T.PAGE_ROW_NUM >= {row_start}"
        )


_STRATEGIES: Dict[str, Tuple[str, ...]] = {
    OffsetFetchPaging.name: ("mssql", "sqlserver", "ansi"),
    LimitOffsetPaging.name: ("mysql", "mariadb", "postgres", "postgresql", "sqlite"),
    RownumPaging.name: ("oracle",),
}
_FACTORIES = {
    OffsetFetchPaging.name: OffsetFetchPaging,
    LimitOffsetPaging.name: LimitOffsetPaging,
    RownumPaging.name: RownumPaging,
}


def paging_strategy_names() -> list[str]:
    """Return every accepted strategy name and alias, sorted."""

    names = set(_STRATEGIES)
    for aliases in _STRATEGIES.values():
        names.update(aliases)
    return sorted(names)


def resolve_paging_strategy(strategy: str | PagingStrategy) -> PagingStrategy:
    """Resolve a strategy name or alias, or pass a strategy object through.

    Raises:
        DaoConfigurationError: Unknown strategy name or object without `rewrite`.
    """

    if not isinstance(strategy, str):
        if not callable(getattr(strategy, "rewrite", None)):
            raise DaoConfigurationError(
                f"Paging strategy {strategy!r} does not implement rewrite()."
            )
        return strategy

    key = strategy.strip().lower()
    for name, aliases in _STRATEGIES.items():
        if key == name or key in aliases:
            return _FACTORIES[name]()
    raise DaoConfigurationError(
        f"Unknown paging strategy {strategy!r}. "
        f"Use one of: {', '.join(paging_strategy_names())}."
    )
