"""Core port contracts used by adapters, paging strategies, and the DAO."""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, Sequence

from .criteria import Criteria
from .parameters import Parameter
from .procedures import SqlTypes
from .types import MaybeRow, QueryParams, RowMapping


class DialectPort(Protocol):
    """Dialect behavior required by paging strategies and procedure calls."""

    name: str
    paramstyle: str
    named_paramstyle: str
    default_paging: str
    call_template: str

    def placeholder(self, key: str) -> str: ...

    def named_placeholder(self, key: str) -> str: ...

    def input_size(self, sql_type: SqlTypes) -> Any: ...


class DatabasePort(Protocol):
    """Database adapter behavior required by `SqlDao`."""

    dialect: DialectPort

    def execute(self, sql: str, params: QueryParams = None) -> Any: ...

    def fetchone(self, sql: str, params: QueryParams = None) -> MaybeRow: ...

    def fetchall(self, sql: str, params: QueryParams = None) -> List[RowMapping]: ...

    def update(self, sql: str, params: QueryParams = None) -> int: ...

    def call(
        self,
        sql: str,
        params: QueryParams = None,
        sql_types: Optional[Sequence[SqlTypes]] = None,
    ) -> None: ...

    def product_name(self) -> str: ...


class AsyncDatabasePort(Protocol):
    """Async database adapter behavior required by `AsyncSqlDao`."""

    dialect: DialectPort

    async def execute(self, sql: str, params: QueryParams = None) -> Any: ...

    async def fetchone(self, sql: str, params: QueryParams = None) -> MaybeRow: ...

    async def fetchall(self, sql: str, params: QueryParams = None) -> List[RowMapping]: ...

    async def update(self, sql: str, params: QueryParams = None) -> int: ...

    async def call(
        self,
        sql: str,
        params: QueryParams = None,
        sql_types: Optional[Sequence[SqlTypes]] = None,
    ) -> None: ...

    def product_name(self) -> str: ...


class PagingStrategy(Protocol):
    """Vendor-specific rewrite of a wrapped query into one bounded to a page."""

    name: str

    def rewrite(
        self,
        sql: str,
        criteria: Criteria,
        params: Parameter,
        dialect: DialectPort,
    ) -> str: ...
