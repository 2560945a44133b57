"""Async DB adapter implementation for the core async database port."""

from __future__ import annotations

import inspect
from typing import Any, Mapping, Optional, Sequence

from ...core._async_utils import _aclose_quietly, _maybe_await
from ...core.procedures import SqlTypes
from ...core.resources import close_quietly
from ...core.types import MaybeRow, QueryParams, RowMapping, Rows
from .dialects import Dialect, connection_product_name, dialect_for_connection


class AsyncDatabase:
    """Async database wrapper that normalizes execute and row mapping behavior."""

    def __init__(self, conn: Any, dialect: Optional[Dialect] = None):
        """Create async database adapter.

        Args:
            conn: Async (or sync) DB connection object.
            dialect: Concrete SQL dialect instance. Detected from the
                connection's driver when omitted.
        """

        if conn is None:
            raise ValueError("conn is required.")
        self._closed = False
        self.conn = conn
        self.dialect = dialect if dialect is not None else dialect_for_connection(conn)

    def _require_open_connection(self) -> Any:
        if self._closed:
            raise RuntimeError("connection is closed")
        return self.conn

    async def execute(self, sql: str, params: QueryParams = None) -> Any:
        """Execute SQL with optional parameters and return cursor."""

        cur = await _maybe_await(self._require_open_connection().cursor())
        try:
            if params is None:
                await _maybe_await(cur.execute(sql))
            else:
                await _maybe_await(cur.execute(sql, params))
        except BaseException:
            await _aclose_quietly(cur)
            raise
        return cur

    def _row_to_mapping(self, cursor: Any, row: Any) -> RowMapping:
        """Normalize row object to mapping.

        Supports mapping rows directly and tuple/list rows via
        `cursor.description`.
        """

        if isinstance(row, Mapping):
            return row

        if isinstance(row, (tuple, list)):
            desc = getattr(cursor, "description", None)
            if not desc:
                raise TypeError(
                    "Cursor has no description; cannot map tuple rows to dict."
                )
            cols = [d[0] for d in desc]
            return dict(zip(cols, row, strict=True))

        try:
            return dict(row)
        except (TypeError, ValueError):
            pass

        raise TypeError(f"Unsupported row type: {type(row)}")

    async def fetchone(self, sql: str, params: QueryParams = None) -> MaybeRow:
        """Execute query and return one normalized row mapping."""

        cur = await self.execute(sql, params)
        try:
            row = await _maybe_await(cur.fetchone())
            if row is None:
                return None
            return self._row_to_mapping(cur, row)
        finally:
            await _aclose_quietly(cur)

    async def fetchall(self, sql: str, params: QueryParams = None) -> Rows:
        """Execute query and return all rows as normalized mappings."""

        cur = await self.execute(sql, params)
        try:
            rows = await _maybe_await(cur.fetchall())
            return [self._row_to_mapping(cur, r) for r in rows]
        finally:
            await _aclose_quietly(cur)

    async def update(self, sql: str, params: QueryParams = None) -> int:
        """Execute DML and return the affected row count."""

        cur = await self.execute(sql, params)
        try:
            return cur.rowcount
        finally:
            await _aclose_quietly(cur)

    async def call(
        self,
        sql: str,
        params: QueryParams = None,
        sql_types: Optional[Sequence[SqlTypes]] = None,
    ) -> None:
        """Execute a callable statement built by `procedure_signature()`."""

        cur = await _maybe_await(self._require_open_connection().cursor())
        try:
            setinputsizes = getattr(cur, "setinputsizes", None)
            if callable(setinputsizes) and sql_types:
                sizes = [self.dialect.input_size(t) for t in sql_types]
                if any(size is not None for size in sizes):
                    await _maybe_await(setinputsizes(*sizes))
            if params is None:
                await _maybe_await(cur.execute(sql))
            else:
                await _maybe_await(cur.execute(sql, params))
        finally:
            await _aclose_quietly(cur)

    def product_name(self) -> str:
        """Return the database product name of the open connection."""

        return connection_product_name(self._require_open_connection())

    async def aclose(self) -> None:
        """Close underlying connection."""

        if self._closed:
            return
        self._closed = True
        await _aclose_quietly(self.conn)

    def close(self) -> None:
        """Close underlying connection when its `close()` is synchronous."""

        if self._closed:
            return
        close_method = getattr(type(self.conn), "close", None)
        if inspect.iscoroutinefunction(close_method):
            raise RuntimeError("connection close is async; use aclose().")
        self._closed = True
        close_quietly(self.conn)

    async def __aenter__(self) -> AsyncDatabase:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.aclose()
