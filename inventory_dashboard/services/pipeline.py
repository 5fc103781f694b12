from __future__ import annotations

import logging
import threading
from datetime import UTC, datetime
from pathlib import Path

from ..csvio.reader import read_csv_bytes
from ..errors import CsvParseError, UnsupportedFileError, ValidationFailedError
from ..logging.issue_log import IssueLogBuffer
from ..models.config_models import DEFAULT_FALLBACK_LABEL
from ..models.ingest_result import IngestResult
from ..models.issue_record import IssueRecord
from ..models.validation_result import ValidationResult
from .aggregate import compute_statistics
from .reconstruct import reconstruct_devices
from .store import SnapshotStore
from .validate import MSG_NO_DEVICES, validate_rows

"""Upload pipeline.

Coordinates one upload end to end:
1. read / decode the CSV (fatal CsvParseError, nothing stored)
2. validate (errors -> ValidationFailedError, nothing stored)
3. reconstruct the Device hierarchy
4. replace the stored snapshot wholesale

Uploads are serialised: a second ingest waits for the running one, so two
uploads can never interleave their snapshot writes.
"""

__all__ = [
    "ingest_file",
    "ingest_bytes",
]

logger = logging.getLogger(__name__)

_INGEST_LOCK = threading.Lock()


def _record_issues(buffer: IssueLogBuffer, file_name: str, result: ValidationResult) -> Path | None:
    for message in result.errors:
        buffer.append(IssueRecord.create(file=file_name, severity="ERROR", message=message))
    for message in result.warnings:
        buffer.append(IssueRecord.create(file=file_name, severity="WARN", message=message))
    try:
        return buffer.flush()
    except OSError as e:
        # issue log が書けなくてもアップロード自体は失敗させない
        logger.warning(f"issue log flush failed: {e}")
        return None


def ingest_bytes(
    data: bytes,
    file_name: str,
    store: SnapshotStore,
    *,
    fallback_label: str = DEFAULT_FALLBACK_LABEL,
    issue_log: IssueLogBuffer | None = None,
) -> IngestResult:
    """Run the upload pipeline on raw file bytes.

    Raises:
        UnsupportedFileError: file name does not end with .csv
        CsvParseError: the bytes cannot be decoded as CSV
        ValidationFailedError: validation reported errors, or no device
            could be reconstructed
    """
    if not file_name.lower().endswith(".csv"):
        raise UnsupportedFileError(f"only .csv files are supported: {file_name}")

    buffer = issue_log if issue_log is not None else IssueLogBuffer()
    with _INGEST_LOCK:
        start_time = datetime.now(UTC)
        rows = read_csv_bytes(data)
        logger.debug(f"{file_name}: {len(rows)} rows read")

        validation = validate_rows(rows)
        log_path = _record_issues(buffer, file_name, validation)
        for warning in validation.warnings:
            logger.warning(f"{file_name}: {warning}")
        if not validation.is_valid:
            raise ValidationFailedError(validation)

        devices = reconstruct_devices(rows)
        if not devices:
            raise ValidationFailedError(
                ValidationResult(errors=(MSG_NO_DEVICES,), warnings=validation.warnings)
            )

        snapshot = store.save(devices, file_name)
        end_time = datetime.now(UTC)

    return IngestResult(
        file_name=file_name,
        devices=devices,
        validation=validation,
        statistics=compute_statistics(devices, fallback_label=fallback_label),
        uploaded_at=snapshot.uploaded_at,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        issue_log_path=log_path,
    )


def ingest_file(
    path: Path,
    store: SnapshotStore,
    *,
    fallback_label: str = DEFAULT_FALLBACK_LABEL,
    issue_log: IssueLogBuffer | None = None,
) -> IngestResult:
    """Read ``path`` and run the upload pipeline on it."""
    path = Path(path)
    if not path.name.lower().endswith(".csv"):
        raise UnsupportedFileError(f"only .csv files are supported: {path.name}")
    try:
        data = path.read_bytes()
    except OSError as e:
        raise CsvParseError(f"file read error: {e}") from e
    return ingest_bytes(
        data, path.name, store, fallback_label=fallback_label, issue_log=issue_log
    )
