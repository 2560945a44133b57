"""Bind-value containers for positional and named SQL parameters.

A query call uses exactly one container kind. `IndexParameter` keeps values
in bind order for `?`/`%s` style placeholders, `NameParameter` keeps a
mapping for `:name`/`%(name)s` style placeholders. Callers and paging
strategies dispatch on `Parameter.kind` rather than on the concrete class.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, ClassVar, Dict, Iterable, List, Optional

from .types import NamedParams, PositionalParams


class ParamKind(str, Enum):
    """Binding strategy carried by a parameter container."""

    INDEXED = "indexed"
    NAMED = "named"


class Parameter:
    """Common interface of the two bind-value containers."""

    kind: ClassVar[ParamKind]

    def to_sql_parameter(self) -> Any:
        """Return the representation the execution path binds."""

        raise NotImplementedError

    def to_array_parameter(self) -> PositionalParams:
        """Return values as an ordered list."""

        raise NotImplementedError

    def to_map_parameter(self) -> Dict[Any, Any]:
        """Return a mapping view, used for logging."""

        raise NotImplementedError

    def copy(self) -> Parameter:
        raise NotImplementedError

    def __len__(self) -> int:
        raise NotImplementedError

    def __bool__(self) -> bool:
        return len(self) > 0


class IndexParameter(Parameter):
    """Positional parameters bound in insertion order."""

    kind = ParamKind.INDEXED

    def __init__(self, values: Optional[Iterable[Any]] = None):
        self._values: List[Any] = list(values) if values is not None else []

    def add(self, value: Any) -> IndexParameter:
        """Append one value and return `self` for chaining."""

        self._values.append(value)
        return self

    def extend(self, values: Iterable[Any]) -> IndexParameter:
        self._values.extend(values)
        return self

    def to_sql_parameter(self) -> PositionalParams:
        return list(self._values)

    def to_array_parameter(self) -> PositionalParams:
        return list(self._values)

    def to_map_parameter(self) -> Dict[int, Any]:
        return {index: value for index, value in enumerate(self._values, start=1)}

    def copy(self) -> IndexParameter:
        return IndexParameter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexParameter):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"IndexParameter({self._values!r})"


class NameParameter(Parameter):
    """Named parameters keyed by bind name."""

    kind = ParamKind.NAMED

    def __init__(self, values: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        self._values: NamedParams = dict(values or {})
        self._values.update(kwargs)

    def add(self, name: str, value: Any) -> NameParameter:
        """Set one bind value and return `self` for chaining."""

        if not isinstance(name, str) or not name:
            raise ValueError("Parameter name must be a non-empty string.")
        self._values[name] = value
        return self

    def update(self, values: Mapping[str, Any]) -> NameParameter:
        for name, value in values.items():
            self.add(name, value)
        return self

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def to_sql_parameter(self) -> NamedParams:
        return dict(self._values)

    def to_array_parameter(self) -> PositionalParams:
        return list(self._values.values())

    def to_map_parameter(self) -> NamedParams:
        return dict(self._values)

    def copy(self) -> NameParameter:
        return NameParameter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NameParameter):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"NameParameter({self._values!r})"


ParameterInput = Optional[Parameter | Mapping[str, Any] | List[Any] | tuple]


def as_parameter(params: ParameterInput) -> Parameter:
    """Normalize caller input to a parameter container.

    `None` becomes an empty `IndexParameter`, lists and tuples become
    `IndexParameter`, mappings become `NameParameter`.
    """

    if params is None:
        return IndexParameter()
    if isinstance(params, Parameter):
        return params
    if isinstance(params, Mapping):
        return NameParameter(params)
    if isinstance(params, (list, tuple)):
        return IndexParameter(params)
    raise TypeError(
        "params must be a Parameter, a mapping, a list/tuple, or None; "
        f"got {type(params).__name__}."
    )
