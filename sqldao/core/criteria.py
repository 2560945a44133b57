"""Page request descriptor and paged result envelope."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Criteria:
    """Describes one page request.

    Attributes:
        page: 1-based page number, `None` disables paging.
        size: Page length, `None` disables paging.
        sorts: Ordered mapping of column to direction (`ASC`/`DESC`).
        skip_row_count: Reuse `total_element` instead of running the count query.
        total_element: Previously computed total row count.

    Instances compare by value but are not hashable.
    """

    __hash__ = None  # type: ignore[assignment]

    page: Optional[int] = None
    size: Optional[int] = None
    sorts: Mapping[str, str] = field(default_factory=dict)
    skip_row_count: bool = False
    total_element: Optional[int] = None

    def __post_init__(self) -> None:
        if self.size is not None and self.size <= 0:
            raise ValueError("size must be > 0 when set.")
        object.__setattr__(self, "sorts", MappingProxyType(dict(self.sorts or {})))

    @property
    def is_null_paging(self) -> bool:
        return self.page is None or self.size is None

    @property
    def is_not_null_paging(self) -> bool:
        return not self.is_null_paging

    @property
    def is_empty_sort(self) -> bool:
        return not self.sorts

    @property
    def is_count_query(self) -> bool:
        return self.page is None or self.page <= 1

    @property
    def normalized_page(self) -> int:
        """Page number with values <= 0 clamped to 1."""

        self._require_paging()
        return max(self.page, 1)  # type: ignore[type-var]

    @property
    def row_start(self) -> int:
        """Zero-based index of the first row on this page."""

        return (self.normalized_page - 1) * self.size  # type: ignore[operator]

    @property
    def mysql_offset(self) -> int:
        return self.row_start

    @property
    def mssql_offset(self) -> int:
        return self.row_start

    @property
    def oracle_row_start(self) -> int:
        """1-based `ROWNUM` of the first row on this page."""

        return self.row_start + 1

    @property
    def oracle_row_end(self) -> int:
        """1-based `ROWNUM` of the last row on this page."""

        return self.row_start + self.size  # type: ignore[operator]

    def with_sort(self, column: str, direction: str = "ASC") -> Criteria:
        """Return a copy with one more sort column appended."""

        sorts = dict(self.sorts)
        sorts[column] = direction
        return replace(self, sorts=sorts)

    def with_total(self, total_element: int) -> Criteria:
        return replace(self, total_element=total_element)

    def for_page(self, page: int) -> Criteria:
        return replace(self, page=page)

    def with_paging_and_sorting(self, other: Optional[Criteria]) -> Criteria:
        """Return a copy that takes page, size, and sorts from `other`."""

        if other is None:
            return self
        return replace(self, page=other.page, size=other.size, sorts=dict(other.sorts))

    def _require_paging(self) -> None:
        if self.is_null_paging:
            raise ValueError("Criteria has no paging: both page and size are required.")


@dataclass(frozen=True)
class Paging(Generic[T]):
    """Result envelope for a paged query."""

    items: List[T] = field(default_factory=list)
    total_elements: int = 0
    total_pages: int = 0
    first: bool = False
    last: bool = False
    criteria: Optional[Criteria] = None

    @classmethod
    def build(
        cls,
        items: List[T],
        total_elements: int,
        criteria: Optional[Criteria],
    ) -> Paging[T]:
        """Assemble the envelope and derive page metadata.

        With no rows or no criteria the result is the first page of zero
        pages. Criteria without page/size leave the page metadata unset.
        """

        if total_elements == 0 or criteria is None:
            return cls(
                items=list(items),
                total_elements=total_elements,
                total_pages=0,
                first=True,
                last=False,
                criteria=criteria,
            )

        if criteria.is_null_paging:
            return cls(items=list(items), total_elements=total_elements, criteria=criteria)

        total_pages = math.ceil(total_elements / criteria.size)  # type: ignore[operator]
        page = criteria.normalized_page
        return cls(
            items=list(items),
            total_elements=total_elements,
            total_pages=total_pages,
            first=page == 1,
            last=page >= total_pages,
            criteria=criteria,
        )
