from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.validation_result import ValidationResult

"""Exception hierarchy shared by the reader, services and CLI.

Only file-level problems are raised. Messy individual cells degrade to
defaults (empty string / zero) inside the services instead.
"""

__all__ = [
    "InventoryError",
    "CsvParseError",
    "UnsupportedFileError",
    "ValidationFailedError",
    "NoDataError",
    "DeviceNotFoundError",
    "QueryError",
    "StoreError",
]


class InventoryError(Exception):
    """Base class for all inventory processing errors."""


class CsvParseError(InventoryError):
    """Raised when the CSV text cannot be decoded (bad encoding, unterminated quote)."""


class UnsupportedFileError(InventoryError):
    """Raised when an upload is not a .csv file."""


class ValidationFailedError(InventoryError):
    """Raised by the ingest pipeline when validation reports errors.

    The full ValidationResult is kept on ``result`` so callers can show
    both channels.
    """

    def __init__(self, result: ValidationResult) -> None:
        self.result = result
        super().__init__("validation failed: " + ", ".join(result.errors))


class NoDataError(InventoryError):
    """Raised when nothing has been uploaded yet."""


class DeviceNotFoundError(InventoryError, LookupError):
    """Raised when a device id does not exist in the stored snapshot."""

    def __init__(self, device_id: str) -> None:
        self.device_id = device_id
        super().__init__(f"device not found: {device_id}")


class QueryError(InventoryError):
    """Raised for unknown sort fields/directions or an invalid page size."""


class StoreError(InventoryError):
    """Raised when the snapshot store cannot be read or written."""
