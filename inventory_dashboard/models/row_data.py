from __future__ import annotations

from dataclasses import dataclass, field

"""FlatRow model and canonical column labels.

A FlatRow is one physical CSV row before hierarchy reconstruction. Values are
kept as raw strings (blank cell = ""), no numeric coercion happens here.
"""

__all__ = [
    "DEVICE_CODE",
    "WORK_LOCATION",
    "COMPONENT_NAME",
    "SPEC",
    "QUANTITY",
    "POWER",
    "REMARK",
    "REQUIRED_COLUMNS",
    "FlatRow",
]

# 元データ (スプレッドシート) のヘッダラベル
DEVICE_CODE = "设备编号"
WORK_LOCATION = "工作部位"
COMPONENT_NAME = "零部件名称"
SPEC = "型号规格"
QUANTITY = "数量及米数"
POWER = "电机功率"
REMARK = "备注"

REQUIRED_COLUMNS: tuple[str, ...] = (
    DEVICE_CODE,
    WORK_LOCATION,
    COMPONENT_NAME,
    SPEC,
    QUANTITY,
    POWER,
    REMARK,
)


@dataclass(frozen=True)
class FlatRow:
    """One source row as header label -> raw string value.

    The row_number is the 1-based data row index (header row excluded).
    Columns missing from the file are absent from ``values``.
    """
    row_number: int
    values: dict[str, str] = field(default_factory=dict)

    def cell(self, column: str) -> str:
        """Return the trimmed cell text, "" when the column is absent."""
        value = self.values.get(column)
        if value is None:
            return ""
        return str(value).strip()

    def has_column(self, column: str) -> bool:
        return column in self.values

    def is_blank(self) -> bool:
        return all(str(v).strip() == "" for v in self.values.values())

    def is_header_repeat(self) -> bool:
        # シートを貼り合わせた CSV ではヘッダ行が途中に何度も現れる
        return (
            self.values.get(DEVICE_CODE) == DEVICE_CODE
            or self.values.get(COMPONENT_NAME) == COMPONENT_NAME
        )
