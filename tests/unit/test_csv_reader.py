from __future__ import annotations

from pathlib import Path

import pytest

from inventory_dashboard.csvio.reader import (
    normalize_rows,
    read_csv_bytes,
    read_csv_file,
    read_csv_text,
)
from inventory_dashboard.errors import CsvParseError
from inventory_dashboard.models.row_data import COMPONENT_NAME, DEVICE_CODE, POWER, FlatRow

HEADER = "设备编号,工作部位,零部件名称,型号规格,数量及米数,电机功率,备注"


def test_read_keeps_blank_lines_and_text(inventory_csv_text: str):
    rows = read_csv_text(inventory_csv_text)
    # 5 data lines + 1 blank line, nothing skipped by the decoder
    assert len(rows) == 6
    assert rows[0].values[DEVICE_CODE] == "HC-001"
    assert rows[1].values[DEVICE_CODE] == ""
    assert rows[3].is_blank()
    assert rows[4].values[POWER] == "0.37KW"
    assert [r.row_number for r in rows] == list(range(1, 7))


def test_read_does_not_coerce_numbers_or_na():
    rows = read_csv_text(HEADER + "\nNA,null,PartX,001,2,1.50,N/A\n")
    values = rows[0].values
    assert values[DEVICE_CODE] == "NA"
    assert values["型号规格"] == "001"
    assert values[POWER] == "1.50"
    assert values["备注"] == "N/A"


def test_read_strips_header_cells_and_bom(temp_workdir: Path):
    p = temp_workdir / "bom.csv"
    p.write_bytes(("\ufeff" + HEADER.replace(",", " , ") + "\nHC-001,A,PartX,S,1,,\n").encode("utf-8"))
    rows = read_csv_file(p)
    assert set(rows[0].values) == {
        "设备编号", "工作部位", "零部件名称", "型号规格", "数量及米数", "电机功率", "备注"
    }
    assert rows[0].cell(DEVICE_CODE) == "HC-001"


def test_short_rows_are_padded_with_empty_strings():
    rows = read_csv_text(HEADER + "\n,,PartY\n")
    assert rows[0].values[POWER] == ""
    assert rows[0].values[COMPONENT_NAME] == "PartY"


def test_empty_file_returns_no_rows():
    assert read_csv_text("") == []


def test_header_only_returns_no_rows():
    assert read_csv_text(HEADER + "\n") == []


def test_unterminated_quote_is_fatal():
    with pytest.raises(CsvParseError):
        read_csv_text(HEADER + '\nHC-001,"A,PartX,S,1,,\n')


def test_invalid_utf8_is_fatal():
    data = (HEADER + "\nHC-001,车间,零件,S,1,,\n").encode("gbk")
    with pytest.raises(CsvParseError):
        read_csv_bytes(data)


def test_missing_file_is_fatal(temp_workdir: Path):
    with pytest.raises(CsvParseError):
        read_csv_file(temp_workdir / "missing.csv")


def test_normalize_drops_blank_rows_and_every_repeated_header():
    rows = [
        FlatRow(1, {DEVICE_CODE: "HC-001", COMPONENT_NAME: "A"}),
        FlatRow(2, {DEVICE_CODE: "", COMPONENT_NAME: ""}),
        FlatRow(3, {DEVICE_CODE: DEVICE_CODE, COMPONENT_NAME: COMPONENT_NAME}),
        FlatRow(4, {DEVICE_CODE: "", COMPONENT_NAME: "B"}),
        FlatRow(5, {DEVICE_CODE: "", COMPONENT_NAME: COMPONENT_NAME}),
        FlatRow(6, {DEVICE_CODE: "   ", COMPONENT_NAME: " "}),
    ]
    kept = normalize_rows(rows)
    assert [r.row_number for r in kept] == [1, 4]


def test_trailing_comma_rows_keep_column_alignment():
    # Excel 出力で各データ行の末尾にカンマが付くケース
    text = "\n".join(
        [
            HEADER,
            "HC-001,Loc-A,PartX,Spec1,2,,note,",
            ",,PartY,Spec2,1,0.5KW,,",
            "HC-002,Loc-B,PartZ,Spec3,1,,,",
        ]
    ) + "\n"
    rows = read_csv_text(text)
    assert [r.cell(DEVICE_CODE) for r in rows] == ["HC-001", "", "HC-002"]
    assert [r.cell(COMPONENT_NAME) for r in rows] == ["PartX", "PartY", "PartZ"]
    assert rows[0].cell("备注") == "note"
    assert rows[1].cell(POWER) == "0.5KW"
    assert len(rows[0].values) == 7
