"""DAO facade: mapped queries, paged reads, DML, and procedure calls.

`SqlDao` sits on top of a `DatabasePort` (usually `sqldao.Database`). It
chooses the named or positional execution path from the parameter
container kind, maps rows to the requested result shape, and assembles
paged results with a vendor paging strategy chosen at construction.
"""

from __future__ import annotations

import logging
import numbers
from typing import Any, List, Optional, Tuple

from .contracts import DialectPort, PagingStrategy
from .criteria import Criteria, Paging
from .errors import DaoConfigurationError, IncorrectResultSizeError, InvalidProcedureError
from .mapping import ResultShape, map_row, shape_name
from .pagination import resolve_paging_strategy
from .parameters import ParamKind, Parameter, ParameterInput, as_parameter
from .procedures import ProcedureCriteria, SqlTypes
from .query_builder import (
    append_order_by,
    count_sql,
    procedure_signature,
    sql_like_contain,
    sql_like_end,
    sql_like_start,
    wrap_for_paging,
)
from .resources import close_all
from .types import QueryParams, ResultExtractor, Rows
from .vendors import MSSQL, MYSQL, ORACLE, detect_vendor

logger = logging.getLogger(__name__)


class _SqlDaoBase:
    """Statement building and dispatch shared by the sync and async DAOs."""

    def __init__(self, db: Any, *, paging: str | PagingStrategy | None = None):
        if db is None:
            raise DaoConfigurationError("A database adapter is required.")
        dialect = getattr(db, "dialect", None)
        if dialect is None:
            raise DaoConfigurationError(
                f"{type(db).__name__} has no dialect; wrap the connection in Database."
            )
        self.db = db
        self.d: DialectPort = dialect
        self.paging = resolve_paging_strategy(
            paging if paging is not None else dialect.default_paging
        )

    def _execution_params(self, params: Parameter) -> QueryParams:
        """Pick the named or positional bind representation."""

        if params.kind is ParamKind.NAMED:
            return params.to_sql_parameter() or None
        if params.kind is ParamKind.INDEXED:
            return params.to_array_parameter() or None
        raise TypeError(f"Unsupported parameter kind: {params.kind!r}")

    def _log_statement(
        self,
        sql: str,
        params: Optional[Parameter],
        shape: Any = None,
    ) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        logger.debug("SQL statement:\n %s", sql)
        if params is not None:
            if params.kind is ParamKind.NAMED:
                logger.debug("Named parameters: %s", params.to_map_parameter())
            else:
                logger.debug("Parameters: %s", params.to_array_parameter())
        if shape is not None:
            logger.debug("Result target: %s", shape_name(shape))

    def build_paging_sql(
        self,
        sql: str,
        params: ParameterInput,
        criteria: Criteria,
    ) -> Tuple[str, Parameter]:
        """Build the page-bounded query for `sql`.

        The caller's parameters are copied; paging values go into the copy.

        Returns:
            Page-bounded SQL and the parameters to execute it with.
        """

        page_params = as_parameter(params).copy()
        page_sql = append_order_by(wrap_for_paging(sql), criteria.sorts)
        if criteria.is_not_null_paging:
            page_sql = self.paging.rewrite(page_sql, criteria, page_params, self.d)
        return page_sql, page_params

    def _single_result(self, rows: Rows, shape: ResultShape) -> Any:
        if not rows:
            return None
        if len(rows) > 1:
            raise IncorrectResultSizeError(1, len(rows))
        return map_row(shape, rows[0])

    def _procedure_call(
        self, criteria: Optional[ProcedureCriteria]
    ) -> Tuple[str, QueryParams, List[SqlTypes]]:
        """Validate criteria and build the callable statement and bind values."""

        if criteria is None or not isinstance(criteria.name, str) or not criteria.name.strip():
            raise InvalidProcedureError("Invalid procedure name for dynamic call.")

        declared = criteria.params or []
        placeholders = [self.d.placeholder(f"p{index}") for index in range(1, len(declared) + 1)]
        sql = procedure_signature(
            criteria.name.strip(),
            placeholders,
            template=self.d.call_template,
        )
        values = [None if param is None else param.value for param in declared]
        sql_types = [SqlTypes.NULL if param is None else param.sql_type for param in declared]

        logger.debug("Call procedure statement: %s", sql)
        logger.debug("Call procedure parameters: %s", declared)
        return sql, (values or None), sql_types

    def _count_value(self, value: Any) -> int:
        if value is None:
            return 0
        return int(value)

    @staticmethod
    def sql_like_contain(value: Optional[str]) -> Optional[str]:
        return sql_like_contain(value)

    @staticmethod
    def sql_like_start(value: Optional[str]) -> Optional[str]:
        return sql_like_start(value)

    @staticmethod
    def sql_like_end(value: Optional[str]) -> Optional[str]:
        return sql_like_end(value)

    @staticmethod
    def close(*resources: Any) -> None:
        """Close cursors/connections in order; close errors are only logged."""

        close_all(*resources)

    def vendor(self) -> Optional[str]:
        """Detect the vendor of the wrapped connection (`None` when unknown)."""

        return detect_vendor(self.db.product_name())

    def _is_vendor(self, vendor: str) -> bool:
        try:
            return self.vendor() == vendor
        except Exception as exc:
            logger.error("Vendor check for %s failed: %s", vendor, exc)
            return False

    def is_oracle(self) -> bool:
        return self._is_vendor(ORACLE)

    def is_mysql(self) -> bool:
        return self._is_vendor(MYSQL)

    def is_mssql(self) -> bool:
        return self._is_vendor(MSSQL)


class SqlDao(_SqlDaoBase):
    """Synchronous DAO over a `DatabasePort`.

    Args:
        db: Database adapter, for example `Database(conn)`.
        paging: Paging strategy name/alias (`"mssql"`, `"oracle"`,
            `"mysql"`, ...) or strategy object. Defaults to the dialect's.

    Raises:
        DaoConfigurationError: Missing adapter or unknown paging strategy.
    """

    def query_to_list(
        self,
        sql: str,
        params: ParameterInput = None,
        result_type: ResultShape = dict,
    ) -> list[Any]:
        """Run a query and map every row to `result_type`."""

        container = as_parameter(params)
        self._log_statement(sql, container, result_type)
        rows = self.db.fetchall(sql, self._execution_params(container))
        return [map_row(result_type, row) for row in rows]

    def query_to_bean(
        self,
        sql: str,
        params: ParameterInput = None,
        result_type: ResultShape = dict,
    ) -> Any:
        """Run a single-row query and map it; `None` when no row matches.

        Raises:
            IncorrectResultSizeError: More than one row matched.
        """

        container = as_parameter(params)
        self._log_statement(sql, container, result_type)
        rows = self.db.fetchall(sql, self._execution_params(container))
        return self._single_result(rows, result_type)

    def query_to_object(
        self,
        sql: str,
        params: ParameterInput = None,
        result_type: type = object,
    ) -> Any:
        """Run a single-row, single-column query and convert the value."""

        if result_type is object:
            return self.query_for_object(sql, params, _first_value)
        return self.query_to_bean(sql, params, result_type)

    def query_for_object(
        self,
        sql: str,
        params: ParameterInput = None,
        mapper: ResultShape = dict,
    ) -> Any:
        """Run a single-row query through a row mapper callable."""

        return self.query_to_bean(sql, params, mapper)

    def query(
        self,
        sql: str,
        params: ParameterInput = None,
        extractor: Optional[ResultExtractor] = None,
    ) -> Any:
        """Run a query and hand every row to `extractor(rows)`.

        Without an extractor the normalized rows are returned.
        """

        container = as_parameter(params)
        self._log_statement(sql, container)
        rows = self.db.fetchall(sql, self._execution_params(container))
        if extractor is None:
            return rows
        return extractor(rows)

    def query_to_number(self, sql: str, params: ParameterInput = None) -> Any:
        """Run a single-value numeric query; `None` when no row matches."""

        return self.query_to_object(sql, params, numbers.Number)

    def count_for_paging(self, sql: str, params: ParameterInput = None) -> int:
        """Count the rows `sql` returns; missing or NULL counts are 0."""

        container = as_parameter(params)
        statement = count_sql(sql)
        self._log_statement(statement, container)
        row = self.db.fetchone(statement, self._execution_params(container))
        return self._count_value(None if row is None else _first_value(row))

    def query_to_paging(
        self,
        sql: str,
        params: ParameterInput,
        criteria: Criteria,
        result_type: ResultShape = dict,
    ) -> list[Any]:
        """Run the page-bounded form of `sql` and map its rows."""

        page_sql, page_params = self.build_paging_sql(sql, params, criteria)
        return self.query_to_list(page_sql, page_params, result_type)

    def query_as_paging_result(
        self,
        sql: str,
        criteria: Criteria,
        result_type: ResultShape = dict,
    ) -> list[Any]:
        return self.query_to_paging(sql, None, criteria, result_type)

    def query_with_paging(
        self,
        sql: str,
        params: ParameterInput,
        criteria: Optional[Criteria],
        result_type: ResultShape = dict,
    ) -> Paging[Any]:
        """Run a paged query and return items plus page metadata.

        The count query runs unless `criteria.skip_row_count` is set and
        `criteria.total_element` is known. The returned envelope's criteria
        carries the total, so it can be reused for the next page. Without
        criteria every row is returned as the first of zero pages.
        """

        if criteria is None:
            total = self.count_for_paging(sql, params)
            items = self.query_to_paging(sql, params, Criteria(), result_type)
            return Paging.build(items, total, None)

        if not criteria.skip_row_count or criteria.total_element is None:
            total = self.count_for_paging(sql, params)
            criteria = criteria.with_total(total)
        else:
            total = criteria.total_element

        items = self.query_to_paging(sql, params, criteria, result_type)
        return Paging.build(items, total, criteria)

    def execute(self, sql: str, params: ParameterInput = None) -> int:
        """Execute DML (insert, update, delete) and return the row count."""

        container = as_parameter(params)
        self._log_statement(sql, container)
        return self.db.update(sql, self._execution_params(container))

    def execute_args(self, sql: str, *args: Any) -> int:
        """Execute DML with positional arguments."""

        return self.execute(sql, list(args))

    def execute_procedure(self, criteria: Optional[ProcedureCriteria]) -> None:
        """Call a stored procedure with its arguments bound in declared order.

        Raises:
            InvalidProcedureError: Criteria missing or name blank. Raised
                before the database is touched.
        """

        sql, values, sql_types = self._procedure_call(criteria)
        self.db.call(sql, values, sql_types)


def _first_value(row: Any) -> Any:
    return next(iter(row.values()), None)
