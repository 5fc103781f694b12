from .reader import normalize_rows, read_csv_bytes, read_csv_file, read_csv_text

__all__ = [
    "normalize_rows",
    "read_csv_bytes",
    "read_csv_file",
    "read_csv_text",
]
