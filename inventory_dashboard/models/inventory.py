from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .row_data import COMPONENT_NAME, DEVICE_CODE, POWER, QUANTITY, REMARK, SPEC, WORK_LOCATION

"""Device / Component domain models.

Both are immutable once reconstruction has produced them; every view is
re-derived from the stored list. ``to_dict`` keeps the field labels used by
the stored snapshot so persisted data stays readable by older dashboards.
"""

__all__ = [
    "Component",
    "Device",
    "COMPONENTS_KEY",
]

COMPONENTS_KEY = "零部件列表"


@dataclass(frozen=True)
class Component:
    """A part installed on exactly one device.

    quantity_text / power_text stay raw (e.g. "2根", "0.37KW") so that an
    export reproduces them unchanged; numbers are derived on demand.
    """
    id: str
    name: str = ""
    spec: str = ""
    quantity_text: str = ""
    power_text: str = ""
    remark: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            COMPONENT_NAME: self.name,
            SPEC: self.spec,
            QUANTITY: self.quantity_text,
            POWER: self.power_text,
            REMARK: self.remark,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Component:
        return Component(
            id=str(data.get("id", "")),
            name=str(data.get(COMPONENT_NAME) or ""),
            spec=str(data.get(SPEC) or ""),
            quantity_text=str(data.get(QUANTITY) or ""),
            power_text=str(data.get(POWER) or ""),
            remark=str(data.get(REMARK) or ""),
        )


@dataclass(frozen=True)
class Device:
    """One physical machine. Identity is positional (``id``), not ``device_code``."""
    id: str
    device_code: str
    work_location: str = ""
    components: tuple[Component, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            DEVICE_CODE: self.device_code,
            WORK_LOCATION: self.work_location,
            COMPONENTS_KEY: [c.to_dict() for c in self.components],
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Device:
        raw_components = data.get(COMPONENTS_KEY) or []
        return Device(
            id=str(data.get("id", "")),
            device_code=str(data.get(DEVICE_CODE) or ""),
            work_location=str(data.get(WORK_LOCATION) or ""),
            components=tuple(Component.from_dict(c) for c in raw_components),
        )
