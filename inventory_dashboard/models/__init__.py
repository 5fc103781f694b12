"""Domain models for the device inventory analyzer.

This package contains the row, device, statistics and query models used by
the reader, services and CLI.
"""

from .config_models import DashboardConfig
from .inventory import Component, Device
from .query_models import FilterCriteria, Page, QueryParams
from .row_data import REQUIRED_COLUMNS, FlatRow
from .statistics import ChartSeries, DeviceSummary, Statistics
from .validation_result import ValidationResult

__all__ = [
    # Configuration models
    "DashboardConfig",
    # Source rows
    "FlatRow",
    "REQUIRED_COLUMNS",
    # Hierarchy
    "Component",
    "Device",
    # Derived views
    "Statistics",
    "DeviceSummary",
    "ChartSeries",
    "ValidationResult",
    # Query
    "FilterCriteria",
    "Page",
    "QueryParams",
]
