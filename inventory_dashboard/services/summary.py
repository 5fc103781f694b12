from __future__ import annotations

from ..models.ingest_result import IngestResult

"""SUMMARY line rendering for the load command.

The SUMMARY label itself is added by the log formatter; the body is:
file={name} devices={n} components={n} warnings={n} power_kw={kw} elapsed_sec={s}
"""

__all__ = [
    "render_summary_line",
    "format_number",
]


def format_number(value: float) -> str:
    """Integers without decimals, tiny values without scientific notation."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if abs(value) < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 4))


def render_summary_line(result: IngestResult) -> str:
    stats = result.statistics
    return (
        f"file={result.file_name} "
        f"devices={stats.device_count} "
        f"components={stats.component_count} "
        f"warnings={len(result.warnings)} "
        f"power_kw={format_number(stats.total_power)} "
        f"elapsed_sec={format_number(result.elapsed_seconds)}"
    )
