from __future__ import annotations

import re
from collections.abc import Sequence

from ..models.row_data import COMPONENT_NAME, DEVICE_CODE, POWER, REQUIRED_COLUMNS, FlatRow
from ..models.validation_result import ValidationResult

"""Structural validation of an uploaded CSV.

Runs on the reader output before reconstruction. Errors make the result
invalid and must stop the caller from storing the upload; warnings are
advisory only.

Checks, in order:
1. empty input (short-circuits)
2. required columns, taken from the shape of the first row
3. at least one device row
4. at least one component row (warning)
5. per-row power text format (warning)
"""

__all__ = [
    "validate_rows",
    "looks_like_power",
    "MSG_EMPTY",
    "MSG_NO_DEVICES",
    "MSG_NO_COMPONENTS",
]

MSG_EMPTY = "file is empty or has no valid data"
MSG_NO_DEVICES = "no valid device data found"
MSG_NO_COMPONENTS = "no component data found"

# 緩い形式チェック: 数字 + 任意の小数点 + 任意の単位 (kw / 千瓦)
_POWER_PATTERN = re.compile(r"^\d*\.?\d*\s*(kw|千瓦)?$", re.IGNORECASE)


def looks_like_power(text: str) -> bool:
    """Loose check for "0.37", "5.5KW", "11 kw", "3千瓦"."""
    return bool(_POWER_PATTERN.match(text.strip()))


def validate_rows(rows: Sequence[FlatRow]) -> ValidationResult:
    errors: list[str] = []
    warnings: list[str] = []

    if not rows:
        errors.append(MSG_EMPTY)
        return ValidationResult(errors=tuple(errors), warnings=tuple(warnings))

    first = rows[0]
    missing = [col for col in REQUIRED_COLUMNS if not first.has_column(col)]
    if missing:
        errors.append(f"missing required columns: {', '.join(missing)}")

    device_rows = 0
    component_rows = 0
    for row in rows:
        # 途中に紛れたヘッダ行は数えない
        if row.values.get(DEVICE_CODE) == DEVICE_CODE:
            continue
        if row.cell(DEVICE_CODE):
            device_rows += 1
        if row.cell(COMPONENT_NAME):
            component_rows += 1

    if device_rows == 0:
        errors.append(MSG_NO_DEVICES)
    if component_rows == 0:
        warnings.append(MSG_NO_COMPONENTS)

    for index, row in enumerate(rows, start=1):
        power = row.cell(POWER)
        if power and power != POWER and not looks_like_power(power):
            warnings.append(f"row {index}: motor power format may be incorrect: {power}")

    return ValidationResult(errors=tuple(errors), warnings=tuple(warnings))
