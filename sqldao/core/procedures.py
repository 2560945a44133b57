"""Stored-procedure call descriptors and SQL type codes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, List


class SqlTypes(IntEnum):
    """Vendor-neutral SQL type codes (JDBC numbering).

    `CURSOR` uses a sentinel outside the standard positive range.
    """

    VARCHAR = 12
    CHAR = 1
    NUMERIC = 2
    DECIMAL = 3
    INTEGER = 4
    DATE = 91
    TIMESTAMP = 93
    BLOB = 2004
    CLOB = 2005
    NULL = 0
    OTHER = 1111
    CURSOR = -10


class ProcedureDirection(str, Enum):
    """Direction of a stored-procedure parameter."""

    IN = "in"
    OUT = "out"
    INOUT = "inout"


@dataclass
class ProcedureParam:
    """One positional procedure argument."""

    value: Any = None
    direction: ProcedureDirection = ProcedureDirection.IN
    sql_type: SqlTypes = SqlTypes.VARCHAR


@dataclass
class ProcedureCriteria:
    """Procedure name plus its ordered arguments."""

    name: str = ""
    params: List[ProcedureParam] = field(default_factory=list)

    def add_param(
        self,
        value: Any,
        direction: ProcedureDirection = ProcedureDirection.IN,
        sql_type: SqlTypes = SqlTypes.OTHER,
    ) -> ProcedureCriteria:
        """Append one argument. A `ProcedureParam` is appended as is."""

        if isinstance(value, ProcedureParam):
            self.params.append(value)
        else:
            self.params.append(ProcedureParam(value, direction, sql_type))
        return self

    def reset_params(self) -> None:
        self.params = []
