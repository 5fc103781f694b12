from __future__ import annotations

import pytest

from inventory_dashboard.models.inventory import Component, Device
from inventory_dashboard.services.aggregate import (
    compute_statistics,
    parse_numeric_text,
    summarize_device,
    top_components,
)


def _device(i: int, code: str, location: str, *parts: tuple[str, str]) -> Device:
    comps = tuple(
        Component(id=f"component-{i}-{j}", name=name, power_text=power)
        for j, (name, power) in enumerate(parts)
    )
    return Device(id=f"device-{i}", device_code=code, work_location=location, components=comps)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("0.37KW", 0.37),
        ("5.5kw", 5.5),
        ("22千瓦", 22.0),
        (" 11 KW ", 11.0),
        ("2根", 2.0),
        ("", 0.0),
        (None, 0.0),
        ("KW", 0.0),
        ("1.2.3", 0.0),
        ("abc", 0.0),
    ],
)
def test_parse_numeric_text(text, expected):
    assert parse_numeric_text(text) == pytest.approx(expected)


def test_statistics_counts_and_power():
    devices = [
        _device(1, "HC-001", "Loc-A", ("PartX", "2KW"), ("PartY", "0.5KW")),
        _device(2, "HC-002", "Loc-B", ("PartX", "")),
        _device(3, "HC-003", "Loc-A"),
    ]
    stats = compute_statistics(devices)
    assert stats.device_count == 3
    assert stats.component_count == 3
    assert stats.total_power == pytest.approx(2.5)
    assert stats.devices_by_location == {"Loc-A": 2, "Loc-B": 1}
    assert stats.components_by_name == {"PartX": 2, "PartY": 1}


def test_fallback_label_only_for_empty_keys():
    devices = [
        _device(1, "D1", "", ("", "")),
        _device(2, "D2", "loc", ("p", "")),
        _device(3, "D3", "Loc", ("P", "")),
    ]
    stats = compute_statistics(devices, fallback_label="uncategorized")
    assert stats.devices_by_location == {"uncategorized": 1, "loc": 1, "Loc": 1}
    assert stats.components_by_name == {"uncategorized": 1, "p": 1, "P": 1}


def test_default_fallback_label():
    stats = compute_statistics([_device(1, "D1", "")])
    assert stats.devices_by_location == {"未分类": 1}


def test_empty_device_list():
    stats = compute_statistics([])
    assert (stats.device_count, stats.component_count, stats.total_power) == (0, 0, 0)
    assert stats.devices_by_location == {}


def test_statistics_are_idempotent():
    devices = [_device(1, "HC-001", "A", ("P", "1KW"))]
    assert compute_statistics(devices) == compute_statistics(devices)


def test_summarize_device():
    device = Device(
        id="device-1",
        device_code="HC-001",
        components=(
            Component(id="c1", name="密封圈", power_text="", remark="气动球阀用"),
            Component(id="c2", name="密封圈", power_text="0.37KW", remark=" "),
            Component(id="c3", name="气缸", power_text="1.5KW"),
        ),
    )
    summary = summarize_device(device)
    assert summary.component_count == 3
    assert summary.total_power == pytest.approx(1.87)
    assert summary.distinct_component_names == 2
    assert summary.components_with_remarks == 1


def test_top_components_orders_by_count_then_first_seen():
    devices = [
        _device(1, "D1", "A", ("B", ""), ("A", ""), ("C", ""), ("A", ""), ("C", "")),
    ]
    stats = compute_statistics(devices)
    assert top_components(stats, 2) == [("A", 2), ("C", 2)]
    assert top_components(stats, 10) == [("A", 2), ("C", 2), ("B", 1)]
