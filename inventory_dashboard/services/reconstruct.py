from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..csvio.reader import normalize_rows
from ..models.inventory import Component, Device
from ..models.row_data import (
    COMPONENT_NAME,
    DEVICE_CODE,
    POWER,
    QUANTITY,
    REMARK,
    SPEC,
    WORK_LOCATION,
    FlatRow,
)

"""Inheritance reconstruction: sparse spreadsheet rows -> Device list.

The source sheet merges the device code / work location cells vertically, so
after CSV export those values appear only on the row that opens a device.
Every following row with a blank device code still describes that device
until the next non-blank device code (run-length "inherit downward").

The pass is a fold over the rows with an explicit accumulator holding the
open device (or None) and an explicit flush at the end. Ids come from
counters scoped to one call, never from content: duplicate device codes are
legal and stay distinct devices.
"""

__all__ = [
    "reconstruct_devices",
]

logger = logging.getLogger(__name__)


class _IdGenerator:
    """Sequential device-N / component-N ids for one reconstruction call."""

    def __init__(self) -> None:
        self._devices = itertools.count(1)
        self._components = itertools.count(1)

    def next_device(self) -> str:
        return f"device-{next(self._devices)}"

    def next_component(self) -> str:
        return f"component-{next(self._components)}"


@dataclass
class _OpenDevice:
    id: str
    device_code: str
    work_location: str
    components: list[Component] = field(default_factory=list)

    def close(self) -> Device:
        return Device(
            id=self.id,
            device_code=self.device_code,
            work_location=self.work_location,
            components=tuple(self.components),
        )


def _component_from_row(row: FlatRow, ids: _IdGenerator) -> Component:
    return Component(
        id=ids.next_component(),
        name=row.cell(COMPONENT_NAME),
        spec=row.cell(SPEC),
        quantity_text=row.cell(QUANTITY),
        power_text=row.cell(POWER),
        remark=row.cell(REMARK),
    )


def _step(
    current: _OpenDevice | None,
    row: FlatRow,
    ids: _IdGenerator,
    out: list[Device],
) -> _OpenDevice | None:
    """Apply one row to the accumulator and return the new open device."""
    device_code = row.cell(DEVICE_CODE)
    if device_code:
        if current is not None:
            out.append(current.close())
        current = _OpenDevice(
            id=ids.next_device(),
            device_code=device_code,
            work_location=row.cell(WORK_LOCATION),
        )

    if row.cell(COMPONENT_NAME):
        if current is None:
            # デバイス行より前の部品行は捨てる (エラーにはしない)
            logger.debug(f"row {row.row_number}: component before any device row dropped")
        else:
            current.components.append(_component_from_row(row, ids))
    return current


def reconstruct_devices(rows: Iterable[FlatRow]) -> list[Device]:
    """Rebuild the Device hierarchy from FlatRows.

    Blank rows and repeated header rows are filtered first, so raw reader
    output can be passed directly. Never raises on missing cells.

    Returns devices in first-occurrence order; each device's components keep
    source row order.
    """
    ids = _IdGenerator()
    devices: list[Device] = []
    current: _OpenDevice | None = None
    for row in normalize_rows(rows):
        current = _step(current, row, ids, devices)
    # flush
    if current is not None:
        devices.append(current.close())
    return devices
