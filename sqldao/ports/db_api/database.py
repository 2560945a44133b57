"""DB-API adapter implementation for the core database port."""

from __future__ import annotations

import contextlib
from typing import Any, Iterator, Mapping, Optional, Sequence

from ...core.procedures import SqlTypes
from ...core.resources import close_quietly
from ...core.types import MaybeRow, QueryParams, RowMapping, Rows
from .dialects import Dialect, connection_product_name, dialect_for_connection


class Database:
    """Thin DB-API wrapper that normalizes execute and row mapping behavior."""

    def __init__(self, conn: Any, dialect: Optional[Dialect] = None):
        """Create database adapter.

        Args:
            conn: Open DB-API connection object.
            dialect: Concrete SQL dialect instance. Detected from the
                connection's driver when omitted.
        """

        if conn is None:
            raise ValueError("conn is required.")
        self._closed = False
        self.conn: Any | None = conn
        self.dialect = dialect if dialect is not None else dialect_for_connection(conn)

    def _require_open_connection(self) -> Any:
        if self._closed or self.conn is None:
            raise RuntimeError("connection is closed")
        return self.conn

    @contextlib.contextmanager
    def cursor(self) -> Iterator[Any]:
        """Open a cursor that is always closed when the block exits."""

        cur = self._require_open_connection().cursor()
        try:
            yield cur
        finally:
            close_quietly(cur)

    def execute(self, sql: str, params: QueryParams = None) -> Any:
        """Execute SQL with optional parameters and return cursor.

        The caller owns the returned cursor.
        """

        cur = self._require_open_connection().cursor()
        try:
            if params is None:
                cur.execute(sql)
            else:
                cur.execute(sql, params)
        except BaseException:
            close_quietly(cur)
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

    def fetchone(self, sql: str, params: QueryParams = None) -> MaybeRow:
        """Execute query and return one normalized row mapping."""

        cur = self.execute(sql, params)
        try:
            row = cur.fetchone()
            if row is None:
                return None
            return self._row_to_mapping(cur, row)
        finally:
            close_quietly(cur)

    def fetchall(self, sql: str, params: QueryParams = None) -> Rows:
        """Execute query and return all rows as normalized mappings."""

        cur = self.execute(sql, params)
        try:
            return [self._row_to_mapping(cur, r) for r in cur.fetchall()]
        finally:
            close_quietly(cur)

    def update(self, sql: str, params: QueryParams = None) -> int:
        """Execute DML and return the affected row count."""

        cur = self.execute(sql, params)
        try:
            return cur.rowcount
        finally:
            close_quietly(cur)

    def call(
        self,
        sql: str,
        params: QueryParams = None,
        sql_types: Optional[Sequence[SqlTypes]] = None,
    ) -> None:
        """Execute a callable statement built by `procedure_signature()`.

        Dialect input sizes for `sql_types` are forwarded to
        `cursor.setinputsizes()` when the dialect defines any.
        """

        with self.cursor() as cur:
            setinputsizes = getattr(cur, "setinputsizes", None)
            if callable(setinputsizes) and sql_types:
                sizes = [self.dialect.input_size(t) for t in sql_types]
                if any(size is not None for size in sizes):
                    setinputsizes(*sizes)
            if params is None:
                cur.execute(sql)
            else:
                cur.execute(sql, params)

    def product_name(self) -> str:
        """Return the database product name of the open connection."""

        return connection_product_name(self._require_open_connection())

    def close(self) -> None:
        """Close underlying connection."""

        if self._closed:
            return
        conn = self.conn
        self._closed = True
        self.conn = None
        close_quietly(conn)

    def __enter__(self) -> Database:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()
