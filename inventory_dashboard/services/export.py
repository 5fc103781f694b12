from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from ..models.inventory import Device
from ..models.row_data import REQUIRED_COLUMNS
from ..models.statistics import Statistics
from .aggregate import top_components

"""Export formatters: CSV re-serialisation, text report and sample data.

export_devices_csv() is the inverse of the inheritance expansion: device
fields appear only on a device's first row, so reading the export back
reconstructs the same devices and components in the same order.
"""

__all__ = [
    "export_devices_csv",
    "render_statistics_report",
    "sample_csv",
]

SAMPLE_ROWS: list[list[str]] = [
    list(REQUIRED_COLUMNS),
    ["HC-001", "1#真空回潮机", "密封圈", "型号或图号：NJBφ65", "2", "", "气动球阀用"],
    ["", "", "密封圈", "型号或图号：NJBφ100", "1", "", "气动球阀用"],
    ["", "", "加湿电磁阀", "SMC 型号或图号：VXD2260-10-5DZL", "1", "", "加潮"],
    ["HC-002", "1#西门电机", "减速机电机", "RF37 DT71D4/BMG/HF", "1", "0.37KW", ""],
    ["", "", "气缸", "SMC MBB100-50 Pmax=1.0Mpa", "4", "", ""],
]


def _quote(cell: str) -> str:
    return '"' + cell.replace('"', '""') + '"'


def _line(cells: Sequence[str]) -> str:
    return ",".join(_quote(c) for c in cells)


def export_devices_csv(devices: Sequence[Device]) -> str:
    """Seven-column CSV, one row per component, every cell quoted.

    A device without components still gets one row carrying its own fields.
    """
    lines = [_line(REQUIRED_COLUMNS)]
    for device in devices:
        if not device.components:
            lines.append(_line([device.device_code, device.work_location, "", "", "", "", ""]))
            continue
        for index, c in enumerate(device.components):
            head = [device.device_code, device.work_location] if index == 0 else ["", ""]
            lines.append(_line(head + [c.name, c.spec, c.quantity_text, c.power_text, c.remark]))
    return "\n".join(lines)


def render_statistics_report(
    stats: Statistics, *, generated_at: datetime | None = None, top: int = 20
) -> str:
    """Plain-text report enumerating every Statistics field."""
    stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    lines = [
        "Device inventory statistics report",
        "==================================",
        "",
        "Totals:",
        f"devices: {stats.device_count}",
        f"components: {stats.component_count}",
        f"motor power total: {stats.total_power:.2f}KW",
        "",
        "Devices by work location:",
    ]
    lines.extend(f"{name}: {count}" for name, count in stats.devices_by_location.items())
    lines.append("")
    lines.append("Components by name:")
    lines.extend(f"{name}: {count}" for name, count in top_components(stats, top))
    lines.append("")
    lines.append(f"generated at: {stamp}")
    return "\n".join(lines)


def sample_csv() -> str:
    """Example inventory offered to users as a template."""
    return "\n".join(",".join(row) for row in SAMPLE_ROWS)
