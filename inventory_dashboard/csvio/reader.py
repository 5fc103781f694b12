from __future__ import annotations

import io
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd

from ..errors import CsvParseError
from ..models.row_data import FlatRow

"""CSV reader (Row Normalizer).

Decoding is delegated to pandas. Every cell is read as text, NA conversion is
disabled and blank lines are kept: a row with only a continuation value is
meaningful to the inheritance pass, so nothing may be pre-stripped here.

normalize_rows() is the separate step that drops fully blank rows and stray
repeated header rows before reconstruction.
"""

__all__ = [
    "CsvParseError",
    "read_csv_file",
    "read_csv_bytes",
    "read_csv_text",
    "normalize_rows",
]

logger = logging.getLogger(__name__)

ENCODING = "utf-8-sig"  # BOM 付き UTF-8 (Excel 保存) も許容


def _read_frame(source: Any, encoding: str | None) -> pd.DataFrame | None:
    try:
        return pd.read_csv(
            source,
            sep=",",
            header=0,
            # 行末カンマの余分なフィールドを先頭列のインデックス化に使わせない
            index_col=False,
            dtype=str,
            encoding=encoding,
            keep_default_na=False,
            na_filter=False,
            skip_blank_lines=False,
        )
    except pd.errors.EmptyDataError:
        # ヘッダすら無い空ファイル -> 行なし (validator が空として報告)
        return None
    except pd.errors.ParserError as e:
        raise CsvParseError(f"csv parse error: {e}") from e
    except UnicodeDecodeError as e:
        raise CsvParseError(f"file is not valid UTF-8 text: {e}") from e


def _frame_to_rows(df: pd.DataFrame | None) -> list[FlatRow]:
    if df is None:
        return []
    columns = [str(c).strip() for c in df.columns]
    # 列数不足の行は NaN で埋まるため空文字へ寄せる
    df = df.fillna("")
    rows: list[FlatRow] = []
    for idx, raw in enumerate(df.itertuples(index=False, name=None), start=1):
        values = {col: ("" if val is None else str(val)) for col, val in zip(columns, raw)}
        rows.append(FlatRow(row_number=idx, values=values))
    logger.debug(f"decoded {len(rows)} rows columns={columns}")
    return rows


def read_csv_text(text: str) -> list[FlatRow]:
    """Decode in-memory CSV text into FlatRows (one per physical data row)."""
    return _frame_to_rows(_read_frame(io.StringIO(text), encoding=None))


def read_csv_bytes(data: bytes) -> list[FlatRow]:
    """Decode uploaded bytes. Raises CsvParseError on undecodable input."""
    return _frame_to_rows(_read_frame(io.BytesIO(data), encoding=ENCODING))


def read_csv_file(path: Path) -> list[FlatRow]:
    """Read a CSV file from disk.

    Parameters
    ----------
    path: CSV file path (UTF-8, header row required)

    Raises
    ------
    CsvParseError: on a fatal decode error. No partial result is returned.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise CsvParseError(f"file read error: {e}") from e
    return read_csv_bytes(data)


def normalize_rows(rows: Iterable[FlatRow]) -> list[FlatRow]:
    """Drop fully blank rows and every repeated header row, keeping order."""
    kept: list[FlatRow] = []
    for row in rows:
        if row.is_blank():
            continue
        if row.is_header_repeat():
            continue
        kept.append(row)
    return kept
