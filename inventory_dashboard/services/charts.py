from __future__ import annotations

from collections.abc import Sequence

from ..models.inventory import Device
from ..models.statistics import ChartSeries, Statistics
from .aggregate import component_power, top_components

"""Chart data adapters.

Chart widgets are passive renderers; these functions give them the labels and
values to draw and nothing else (colors and styling belong to the widgets).
"""

__all__ = [
    "POWER_BUCKETS",
    "device_chart",
    "component_chart",
    "power_distribution_chart",
]

# (label, inclusive upper bound); the last bucket is open-ended
POWER_BUCKETS: list[tuple[str, float | None]] = [
    ("0-1KW", 1.0),
    ("1-5KW", 5.0),
    ("5-10KW", 10.0),
    ("10-20KW", 20.0),
    ("20KW以上", None),
]


def device_chart(stats: Statistics) -> ChartSeries:
    """Device count per work location (pie)."""
    return ChartSeries(
        label="devices",
        labels=list(stats.devices_by_location.keys()),
        values=[float(v) for v in stats.devices_by_location.values()],
    )


def component_chart(stats: Statistics, limit: int = 10) -> ChartSeries:
    """Most frequent component names (bar)."""
    ranked = top_components(stats, limit)
    return ChartSeries(
        label="components",
        labels=[name for name, _ in ranked],
        values=[float(count) for _, count in ranked],
    )


def _bucket_for(power: float) -> str:
    for label, upper in POWER_BUCKETS:
        if upper is None or power <= upper:
            return label
    return POWER_BUCKETS[-1][0]  # pragma: no cover


def power_distribution_chart(devices: Sequence[Device]) -> ChartSeries:
    """Component count per motor power range.

    Components without a positive power value are ignored and empty buckets
    are left out.
    """
    counts = {label: 0 for label, _ in POWER_BUCKETS}
    for device in devices:
        for component in device.components:
            power = component_power(component)
            if power > 0:
                counts[_bucket_for(power)] += 1
    kept = [(label, n) for label, n in counts.items() if n > 0]
    return ChartSeries(
        label="components",
        labels=[label for label, _ in kept],
        values=[float(n) for _, n in kept],
    )
