from __future__ import annotations

from dataclasses import dataclass

"""Config dataclass for the inventory dashboard.

Kept separate from the loader in inventory_dashboard/config/loader.py; the
loader only fills this in after schema validation.
"""

__all__ = [
    "DashboardConfig",
    "DEFAULT_FALLBACK_LABEL",
]

DEFAULT_FALLBACK_LABEL = "未分类"


@dataclass(frozen=True)
class DashboardConfig:
    """Root configuration object."""
    store_directory: str  # Directory holding the persisted snapshot
    page_size: int = 10  # Default listing page size
    fallback_label: str = DEFAULT_FALLBACK_LABEL  # Group key used for empty categories
    chart_top_components: int = 10  # Bars shown in the component chart
    report_top_components: int = 20  # Rows in the text report's component table
