"""Public core API for parameters, paging, procedures, and the DAO facades."""

from .criteria import Criteria, Paging
from .dao import SqlDao
from .dao_async import AsyncSqlDao
from .errors import (
    DaoConfigurationError,
    IncorrectResultSizeError,
    InvalidProcedureError,
    PagingParameterConflictError,
)
from .mapping import map_row, row_to_bean
from .pagination import (
    P_PAGE_ROW_NUM,
    P_ROW_START,
    P_ROW_TOTAL,
    LimitOffsetPaging,
    OffsetFetchPaging,
    RownumPaging,
    paging_strategy_names,
    resolve_paging_strategy,
)
from .parameters import IndexParameter, NameParameter, ParamKind, Parameter, as_parameter
from .procedures import ProcedureCriteria, ProcedureDirection, ProcedureParam, SqlTypes
from .query_builder import (
    append_order_by,
    count_sql,
    procedure_signature,
    sql_like_contain,
    sql_like_end,
    sql_like_start,
    wrap_for_paging,
)
from .resources import close_all, close_quietly
from .vendors import detect_vendor

__all__ = [
    "Criteria",
    "Paging",
    "SqlDao",
    "AsyncSqlDao",
    "DaoConfigurationError",
    "IncorrectResultSizeError",
    "InvalidProcedureError",
    "PagingParameterConflictError",
    "map_row",
    "row_to_bean",
    "P_PAGE_ROW_NUM",
    "P_ROW_START",
    "P_ROW_TOTAL",
    "LimitOffsetPaging",
    "OffsetFetchPaging",
    "RownumPaging",
    "paging_strategy_names",
    "resolve_paging_strategy",
    "IndexParameter",
    "NameParameter",
    "ParamKind",
    "Parameter",
    "as_parameter",
    "ProcedureCriteria",
    "ProcedureDirection",
    "ProcedureParam",
    "SqlTypes",
    "append_order_by",
    "count_sql",
    "procedure_signature",
    "sql_like_contain",
    "sql_like_end",
    "sql_like_start",
    "wrap_for_paging",
    "close_all",
    "close_quietly",
    "detect_vendor",
]
