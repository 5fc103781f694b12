from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from ..models.config_models import DEFAULT_FALLBACK_LABEL
from ..models.inventory import Component, Device
from ..models.statistics import DeviceSummary, Statistics

"""Statistics aggregation over the reconstructed Device list.

Everything here is a pure function recomputed from scratch on each call.
Inventories are a few thousand rows at most; there is no cache or incremental
state (scaling limit, not a bug).
"""

__all__ = [
    "parse_numeric_text",
    "component_power",
    "device_power",
    "compute_statistics",
    "summarize_device",
    "top_components",
]

_NON_NUMERIC = re.compile(r"[^\d.]")


def parse_numeric_text(text: str | None) -> float:
    """Extract a number from free text such as "0.37KW" or "12米".

    Every character except ASCII digits and "." is discarded before parsing,
    so unit suffixes of any case or script disappear. Empty or unparsable
    text (e.g. "1.2.3") yields 0.0; this never raises.
    """
    if not text:
        return 0.0
    cleaned = _NON_NUMERIC.sub("", text.strip())
    # \d は全角数字にもマッチするため float() の解釈に任せる
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def component_power(component: Component) -> float:
    return parse_numeric_text(component.power_text)


def device_power(device: Device) -> float:
    return sum(component_power(c) for c in device.components)


def _count_by(keys: Iterable[str], fallback_label: str) -> dict[str, int]:
    table: dict[str, int] = {}
    for key in keys:
        label = key.strip() or fallback_label
        table[label] = table.get(label, 0) + 1
    return table


def compute_statistics(
    devices: Sequence[Device], *, fallback_label: str = DEFAULT_FALLBACK_LABEL
) -> Statistics:
    """Compute the inventory KPIs.

    Group keys are the trimmed text verbatim; ``fallback_label`` is used only
    for empty keys. Case and whitespace variants are distinct groups.
    """
    components = [c for d in devices for c in d.components]
    return Statistics(
        device_count=len(devices),
        component_count=len(components),
        total_power=sum(component_power(c) for c in components),
        devices_by_location=_count_by((d.work_location for d in devices), fallback_label),
        components_by_name=_count_by((c.name for c in components), fallback_label),
    )


def summarize_device(device: Device) -> DeviceSummary:
    """Detail view statistics for a single device."""
    return DeviceSummary(
        component_count=len(device.components),
        total_power=device_power(device),
        distinct_component_names=len({c.name for c in device.components}),
        components_with_remarks=sum(1 for c in device.components if c.remark.strip()),
    )


def top_components(stats: Statistics, limit: int) -> list[tuple[str, int]]:
    """Most frequent component names, count descending.

    sorted() is stable, so ties keep first-seen order.
    """
    ranked = sorted(stats.components_by_name.items(), key=lambda kv: kv[1], reverse=True)
    return ranked[: max(limit, 0)]
