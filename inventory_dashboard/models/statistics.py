from __future__ import annotations

from dataclasses import dataclass, field

"""Derived statistics models.

All of these are pure functions of a Device list and are recomputed on every
change. None of them has a lifecycle of its own.
"""

__all__ = [
    "Statistics",
    "DeviceSummary",
    "ChartSeries",
]


@dataclass(frozen=True)
class Statistics:
    """Whole-inventory KPIs and frequency tables.

    Frequency dicts keep first-seen order of their keys.
    """
    device_count: int
    component_count: int
    total_power: float
    devices_by_location: dict[str, int] = field(default_factory=dict)
    components_by_name: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class DeviceSummary:
    """Statistics shown on a single device's detail view."""
    component_count: int
    total_power: float
    distinct_component_names: int
    components_with_remarks: int


@dataclass(frozen=True)
class ChartSeries:
    """Chart-ready series consumed by the chart widgets."""
    label: str
    labels: list[str]
    values: list[float]

    def to_dict(self) -> dict[str, object]:
        return {"label": self.label, "labels": list(self.labels), "data": list(self.values)}
