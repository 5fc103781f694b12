from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .inventory import Device
from .statistics import Statistics
from .validation_result import ValidationResult

"""Result model of one upload (read -> validate -> reconstruct -> store)."""

__all__ = [
    "IngestResult",
]


@dataclass(frozen=True)
class IngestResult:
    file_name: str
    devices: list[Device]
    validation: ValidationResult
    statistics: Statistics
    uploaded_at: str  # ISO8601 UTC, as stored
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    issue_log_path: Path | None = None  # 警告が無ければ None

    @property
    def warnings(self) -> tuple[str, ...]:
        return self.validation.warnings
