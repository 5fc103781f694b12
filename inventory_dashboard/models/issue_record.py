from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""IssueRecord model for the upload issue log.

One record per validation error or warning, serialised as a JSON line with a
fixed set of keys.
"""

__all__ = [
    "IssueRecord",
]


@dataclass(frozen=True)
class IssueRecord:
    """Structured validation issue.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: uploaded file name
        severity: "ERROR" or "WARN"
        message: human-readable validation message
    """
    timestamp: str
    file: str
    severity: str
    message: str

    @staticmethod
    def create(file: str, severity: str, message: str) -> IssueRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return IssueRecord(timestamp=ts, file=file, severity=severity, message=message)

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
