from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from pypinyin import lazy_pinyin

from ..errors import QueryError
from ..models.inventory import Component, Device
from ..models.query_models import ASC, DESC, FilterCriteria, Page, QueryParams
from .aggregate import device_power, parse_numeric_text

"""Query engine: search, filter, sort and paginate the Device list.

Each operation is pure and independently composable. Listings should chain
them as Search -> Filter -> Sort -> Paginate (run_query) so that pagination
always works on the final view.

String sorting is locale-aware for Chinese text: Han characters are ordered
by their pinyin reading (as zh-CN collation does) rather than by code point.
"""

__all__ = [
    "DEVICE_SORT_FIELDS",
    "COMPONENT_SORT_FIELDS",
    "search_devices",
    "filter_devices",
    "sort_devices",
    "paginate",
    "run_query",
    "search_components",
    "sort_components",
    "collation_key",
]

T = TypeVar("T")


def collation_key(text: str) -> tuple[list[str], str]:
    """Sort key approximating zh-CN collation.

    lazy_pinyin keeps non-Han runs as-is ("HC-001" -> ["HC-001"]), Han
    characters become toneless syllables. The original text breaks ties.
    """
    syllables = [s.casefold() for s in lazy_pinyin(text or "")]
    return (syllables, text or "")


def _contains(haystack: str, needle: str) -> bool:
    return needle in haystack.lower()


def _component_matches(component: Component, term: str) -> bool:
    return any(
        _contains(value, term)
        for value in (
            component.name,
            component.spec,
            component.quantity_text,
            component.power_text,
            component.remark,
        )
    )


def search_devices(devices: Sequence[Device], term: str | None) -> list[Device]:
    """Case-insensitive free-text search.

    A device matches when its code or work location contains the term, or
    when any field of any of its components does. Blank term is a no-op.
    """
    if not term or not term.strip():
        return list(devices)
    needle = term.strip().lower()
    result: list[Device] = []
    for device in devices:
        if _contains(device.device_code, needle) or _contains(device.work_location, needle):
            result.append(device)
        elif any(_component_matches(c, needle) for c in device.components):
            result.append(device)
    return result


def _pattern(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip().lower()


def filter_devices(devices: Sequence[Device], criteria: FilterCriteria | None) -> list[Device]:
    """AND-combined substring filters (case-insensitive)."""
    if criteria is None or criteria.is_empty():
        return list(devices)
    code = _pattern(criteria.device_code)
    location = _pattern(criteria.work_location)
    name = _pattern(criteria.name)
    spec = _pattern(criteria.spec)

    def keep(device: Device) -> bool:
        if code and not _contains(device.device_code, code):
            return False
        if location and not _contains(device.work_location, location):
            return False
        if name and not any(_contains(c.name, name) for c in device.components):
            return False
        if spec and not any(_contains(c.spec, spec) for c in device.components):
            return False
        return True

    return [d for d in devices if keep(d)]


DEVICE_SORT_FIELDS: dict[str, Callable[[Device], Any]] = {
    "device_code": lambda d: collation_key(d.device_code),
    "work_location": lambda d: collation_key(d.work_location),
    "component_count": lambda d: len(d.components),
    "total_power": device_power,
}

COMPONENT_SORT_FIELDS: dict[str, Callable[[Component], Any]] = {
    "name": lambda c: collation_key(c.name),
    "spec": lambda c: collation_key(c.spec),
    "quantity": lambda c: parse_numeric_text(c.quantity_text),
    "power": lambda c: parse_numeric_text(c.power_text),
}


def _stable_sort(
    items: Sequence[T],
    keys: dict[str, Callable[[T], Any]],
    field: str | None,
    direction: str,
) -> list[T]:
    if field is None:
        return list(items)
    if field not in keys:
        raise QueryError(f"unknown sort field: {field} (expected one of {sorted(keys)})")
    if direction not in (ASC, DESC):
        raise QueryError(f"unknown sort direction: {direction}")
    # reverse=True でも同値要素の順序は保たれる
    return sorted(items, key=keys[field], reverse=(direction == DESC))


def sort_devices(devices: Sequence[Device], field: str | None, direction: str = ASC) -> list[Device]:
    """Stable sort. ``field=None`` returns the input order unchanged."""
    return _stable_sort(devices, DEVICE_SORT_FIELDS, field, direction)


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """1-indexed page slice.

    Out-of-range pages (beyond total_pages, or below 1) give an empty slice
    with correct total / total_pages instead of an error.
    """
    if page_size < 1:
        raise QueryError(f"page size must be >= 1: {page_size}")
    total = len(items)
    total_pages = math.ceil(total / page_size)
    if page < 1:
        page_items: list[T] = []
    else:
        start = (page - 1) * page_size
        page_items = list(items[start : start + page_size])
    return Page(items=page_items, total=total, total_pages=total_pages, page=page, page_size=page_size)


def run_query(devices: Sequence[Device], params: QueryParams) -> Page[Device]:
    """Search -> Filter -> Sort -> Paginate."""
    result = search_devices(devices, params.search)
    result = filter_devices(result, params.criteria)
    result = sort_devices(result, params.sort_field, params.direction)
    return paginate(result, params.page, params.page_size)


def search_components(components: Sequence[Component], term: str | None) -> list[Component]:
    """Detail view search over name / spec / remark."""
    if not term or not term.strip():
        return list(components)
    needle = term.strip().lower()
    return [
        c
        for c in components
        if _contains(c.name, needle) or _contains(c.spec, needle) or _contains(c.remark, needle)
    ]


def sort_components(
    components: Sequence[Component], field: str | None, direction: str = ASC
) -> list[Component]:
    return _stable_sort(components, COMPONENT_SORT_FIELDS, field, direction)
