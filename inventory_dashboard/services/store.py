from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..errors import DeviceNotFoundError, NoDataError, StoreError
from ..models.inventory import Device

"""Snapshot store (key-value blob store for the uploaded inventory).

Three string keys are written together after a successful
validate + reconstruct cycle, mirroring what the browser dashboard kept in
localStorage:

- deviceData: the Device list as JSON text
- uploadTime: ISO-8601 UTC timestamp
- fileName:   original upload file name

All three live in one JSON document replaced with os.replace(), so a reader
never sees a half-written upload. A missing snapshot is the "no data" state,
not an error.
"""

__all__ = [
    "Snapshot",
    "SnapshotStore",
    "KEY_DEVICE_DATA",
    "KEY_UPLOAD_TIME",
    "KEY_FILE_NAME",
]

logger = logging.getLogger(__name__)

KEY_DEVICE_DATA = "deviceData"
KEY_UPLOAD_TIME = "uploadTime"
KEY_FILE_NAME = "fileName"

SNAPSHOT_FILE = "snapshot.json"


@dataclass(frozen=True)
class Snapshot:
    devices: list[Device]
    uploaded_at: str
    file_name: str


def _now_iso() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


class SnapshotStore:
    """File-backed store holding at most one uploaded inventory.

    A new save replaces the previous snapshot wholesale (no merging).
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    @property
    def path(self) -> Path:
        return self.directory / SNAPSHOT_FILE

    def save(self, devices: list[Device], file_name: str, uploaded_at: str | None = None) -> Snapshot:
        stamp = uploaded_at or _now_iso()
        blob = {
            KEY_DEVICE_DATA: json.dumps([d.to_dict() for d in devices], ensure_ascii=False),
            KEY_UPLOAD_TIME: stamp,
            KEY_FILE_NAME: file_name,
        }
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".snapshot-", suffix=".tmp", dir=self.directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(blob, f, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StoreError(f"failed to write snapshot {self.path}: {e}") from e
        logger.debug(f"snapshot saved devices={len(devices)} path={self.path}")
        return Snapshot(devices=list(devices), uploaded_at=stamp, file_name=file_name)

    def load(self) -> Snapshot | None:
        """Return the stored snapshot, or None when nothing was uploaded."""
        if not self.path.exists():
            return None
        try:
            blob: dict[str, Any] = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(blob, dict):
                raise StoreError(f"malformed snapshot {self.path}: expected an object")
            payload = blob.get(KEY_DEVICE_DATA) or "[]"
            if not isinstance(payload, str):
                raise StoreError(f"malformed snapshot {self.path}: {KEY_DEVICE_DATA} must be JSON text")
            raw_devices = json.loads(payload)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"failed to read snapshot {self.path}: {e}") from e
        if not isinstance(raw_devices, list) or not all(isinstance(d, dict) for d in raw_devices):
            raise StoreError(f"malformed snapshot {self.path}: {KEY_DEVICE_DATA} must be a list of devices")
        try:
            devices = [Device.from_dict(d) for d in raw_devices]
        except (AttributeError, TypeError) as e:
            # 零部件列表 の形が崩れている
            raise StoreError(f"malformed snapshot {self.path}: {e}") from e
        return Snapshot(
            devices=devices,
            uploaded_at=str(blob.get(KEY_UPLOAD_TIME) or ""),
            file_name=str(blob.get(KEY_FILE_NAME) or ""),
        )

    def require(self) -> Snapshot:
        snapshot = self.load()
        if snapshot is None:
            raise NoDataError("no data found, upload a CSV file first")
        return snapshot

    def get_device(self, device_id: str) -> Device:
        """Look up a device by id.

        Raises NoDataError when nothing is stored, DeviceNotFoundError
        (a LookupError) when the id is unknown.
        """
        for device in self.require().devices:
            if device.id == device_id:
                return device
        raise DeviceNotFoundError(device_id)

    def clear(self) -> bool:
        if not self.path.exists():
            return False
        self.path.unlink()
        return True
