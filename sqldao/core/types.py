"""Shared core type aliases used across contracts, DAO, and ports."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Union

NamedParams = Dict[str, Any]
PositionalParams = List[Any]
QueryParams = Union[NamedParams, PositionalParams, None]

RowMapping = Mapping[str, Any]
Rows = List[RowMapping]
MaybeRow = Optional[RowMapping]

RowMapper = Callable[[RowMapping], Any]
ResultExtractor = Callable[[Rows], Any]
