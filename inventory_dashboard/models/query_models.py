from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

"""Query Engine parameter / result models."""

__all__ = [
    "FilterCriteria",
    "Page",
    "QueryParams",
    "ASC",
    "DESC",
]

ASC = "asc"
DESC = "desc"

T = TypeVar("T")


@dataclass(frozen=True)
class FilterCriteria:
    """Sparse substring filters. None or blank means "no constraint".

    device_code / work_location apply to the device itself, name / spec match
    when at least one component satisfies them.
    """
    device_code: str | None = None
    work_location: str | None = None
    name: str | None = None
    spec: str | None = None

    def is_empty(self) -> bool:
        return not any(
            v and v.strip() for v in (self.device_code, self.work_location, self.name, self.spec)
        )


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    total_pages: int
    page: int
    page_size: int


@dataclass(frozen=True)
class QueryParams:
    """Full listing query: Search -> Filter -> Sort -> Paginate."""
    search: str | None = None
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    sort_field: str | None = None
    direction: str = ASC
    page: int = 1
    page_size: int = 10
