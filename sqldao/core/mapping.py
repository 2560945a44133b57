"""Row-to-result mapping for DAO query results.

Rows arrive as mappings from the DB-API adapter. A result shape is one of:

- a dataclass (bean): columns are matched to fields case-insensitively,
  unknown columns are ignored, missing columns keep field defaults;
- `dict` (or another mapping type): the row is copied as is;
- a scalar type (`int`, `str`, `Decimal`, `numbers.Number`, ...): the single
  column value is converted;
- any other callable: used as a row mapper `mapper(row) -> result`.
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, Type, TypeVar

from .types import RowMapping

T = TypeVar("T")

ResultShape = Type[Any] | Callable[[RowMapping], Any]


def row_to_bean(cls: Type[T], row: RowMapping) -> T:
    """Map one row to a dataclass instance, ignoring column-name case."""

    if not is_dataclass(cls):
        raise TypeError(f"{cls.__name__} must be a dataclass.")

    by_lower: Dict[str, Any] = {str(key).lower(): value for key, value in row.items()}
    kwargs: Dict[str, Any] = {}
    for f in fields(cls):
        if not f.init:
            continue
        key = f.name.lower()
        if key in by_lower:
            kwargs[f.name] = by_lower[key]
    return cls(**kwargs)  # type: ignore[return-value]


def single_value(row: RowMapping) -> Any:
    """Return the only column value of a row."""

    if len(row) != 1:
        raise ValueError(f"Expected a single column, got {len(row)}: {list(row)}.")
    return next(iter(row.values()))


def convert_value(value: Any, target: Type[Any]) -> Any:
    """Convert a scalar column value to `target`; `None` stays `None`."""

    if value is None:
        return None
    if target is numbers.Number:
        if isinstance(value, numbers.Number):
            return value
        return Decimal(str(value))
    if isinstance(value, target) and not (target is int and isinstance(value, bool)):
        return value
    if target is bool:
        return bool(value)
    return target(value)


def is_scalar_type(shape: Any) -> bool:
    return isinstance(shape, type) and (
        shape in (int, float, str, bytes, bool, Decimal) or shape is numbers.Number
    )


def map_row(shape: ResultShape, row: RowMapping) -> Any:
    """Map one row to the requested result shape."""

    if isinstance(shape, type):
        if is_dataclass(shape):
            return row_to_bean(shape, row)
        if issubclass(shape, Mapping):
            return dict(row)
        if is_scalar_type(shape):
            return convert_value(single_value(row), shape)
        raise TypeError(
            f"Unsupported result type {shape.__name__}; use a dataclass, dict, "
            "a scalar type, or a row mapper callable."
        )
    if callable(shape):
        return shape(row)
    raise TypeError(f"Unsupported result shape: {shape!r}")


def shape_name(shape: Any) -> str:
    return getattr(shape, "__qualname__", None) or getattr(shape, "__name__", None) or repr(shape)
