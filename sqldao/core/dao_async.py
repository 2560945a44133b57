"""Async DAO facade mirroring `SqlDao` over an `AsyncDatabasePort`."""

from __future__ import annotations

import numbers
from typing import Any, Optional

from .criteria import Criteria, Paging
from .dao import _SqlDaoBase, _first_value
from .mapping import ResultShape, map_row
from .parameters import ParameterInput, as_parameter
from .procedures import ProcedureCriteria
from .query_builder import count_sql
from .types import ResultExtractor


class AsyncSqlDao(_SqlDaoBase):
    """Asynchronous DAO over an `AsyncDatabasePort` such as `AsyncDatabase`."""

    async def query_to_list(
        self,
        sql: str,
        params: ParameterInput = None,
        result_type: ResultShape = dict,
    ) -> list[Any]:
        container = as_parameter(params)
        self._log_statement(sql, container, result_type)
        rows = await self.db.fetchall(sql, self._execution_params(container))
        return [map_row(result_type, row) for row in rows]

    async def query_to_bean(
        self,
        sql: str,
        params: ParameterInput = None,
        result_type: ResultShape = dict,
    ) -> Any:
        container = as_parameter(params)
        self._log_statement(sql, container, result_type)
        rows = await self.db.fetchall(sql, self._execution_params(container))
        return self._single_result(rows, result_type)

    async def query_to_object(
        self,
        sql: str,
        params: ParameterInput = None,
        result_type: type = object,
    ) -> Any:
        if result_type is object:
            return await self.query_for_object(sql, params, _first_value)
        return await self.query_to_bean(sql, params, result_type)

    async def query_for_object(
        self,
        sql: str,
        params: ParameterInput = None,
        mapper: ResultShape = dict,
    ) -> Any:
        return await self.query_to_bean(sql, params, mapper)

    async def query(
        self,
        sql: str,
        params: ParameterInput = None,
        extractor: Optional[ResultExtractor] = None,
    ) -> Any:
        container = as_parameter(params)
        self._log_statement(sql, container)
        rows = await self.db.fetchall(sql, self._execution_params(container))
        if extractor is None:
            return rows
        return extractor(rows)

    async def query_to_number(self, sql: str, params: ParameterInput = None) -> Any:
        return await self.query_to_object(sql, params, numbers.Number)

    async def count_for_paging(self, sql: str, params: ParameterInput = None) -> int:
        container = as_parameter(params)
        statement = count_sql(sql)
        self._log_statement(statement, container)
        row = await self.db.fetchone(statement, self._execution_params(container))
        return self._count_value(None if row is None else _first_value(row))

    async def query_to_paging(
        self,
        sql: str,
        params: ParameterInput,
        criteria: Criteria,
        result_type: ResultShape = dict,
    ) -> list[Any]:
        page_sql, page_params = self.build_paging_sql(sql, params, criteria)
        return await self.query_to_list(page_sql, page_params, result_type)

    async def query_as_paging_result(
        self,
        sql: str,
        criteria: Criteria,
        result_type: ResultShape = dict,
    ) -> list[Any]:
        return await self.query_to_paging(sql, None, criteria, result_type)

    async def query_with_paging(
        self,
        sql: str,
        params: ParameterInput,
        criteria: Optional[Criteria],
        result_type: ResultShape = dict,
    ) -> Paging[Any]:
        """Async variant of `SqlDao.query_with_paging()`."""

        if criteria is None:
            total = await self.count_for_paging(sql, params)
            items = await self.query_to_paging(sql, params, Criteria(), result_type)
            return Paging.build(items, total, None)

        if not criteria.skip_row_count or criteria.total_element is None:
            total = await self.count_for_paging(sql, params)
            criteria = criteria.with_total(total)
        else:
            total = criteria.total_element

        items = await self.query_to_paging(sql, params, criteria, result_type)
        return Paging.build(items, total, criteria)

    async def execute(self, sql: str, params: ParameterInput = None) -> int:
        container = as_parameter(params)
        self._log_statement(sql, container)
        return await self.db.update(sql, self._execution_params(container))

    async def execute_args(self, sql: str, *args: Any) -> int:
        return await self.execute(sql, list(args))

    async def execute_procedure(self, criteria: Optional[ProcedureCriteria]) -> None:
        sql, values, sql_types = self._procedure_call(criteria)
        await self.db.call(sql, values, sql_types)
