from __future__ import annotations

import time

import numpy as np
import pandas as pd
import pytest

from inventory_dashboard.csvio.reader import read_csv_text
from inventory_dashboard.models.query_models import FilterCriteria, QueryParams
from inventory_dashboard.services.aggregate import compute_statistics
from inventory_dashboard.services.query import run_query
from inventory_dashboard.services.reconstruct import reconstruct_devices

"""Performance smoke test: a few thousand devices must stay interactive."""

COLUMNS = ["设备编号", "工作部位", "零部件名称", "型号规格", "数量及米数", "电机功率", "备注"]


def _synthetic_csv(devices: int, seed: int = 42) -> tuple[str, int]:
    rng = np.random.default_rng(seed)
    counts = rng.integers(0, 6, devices)
    rows: list[list[str]] = []
    for i, n in enumerate(counts):
        code = f"HC-{i + 1:05d}"
        if n == 0:
            rows.append([code, f"区域{i % 7}", "", "", "", "", ""])
            continue
        for j in range(int(n)):
            head = [code, f"区域{i % 7}"] if j == 0 else ["", ""]
            rows.append(head + [f"部件{j}", f"型号{j}", str(j + 1), f"{j * 0.5}KW", ""])
    return pd.DataFrame(rows, columns=COLUMNS).to_csv(index=False), int(counts.sum())


@pytest.mark.perf
def test_reconstruct_and_query_5k_devices():
    text, expected_components = _synthetic_csv(5_000)
    start = time.perf_counter()
    devices = reconstruct_devices(read_csv_text(text))
    stats = compute_statistics(devices)
    page = run_query(
        devices,
        QueryParams(search="部件", criteria=FilterCriteria(work_location="区域3"), sort_field="device_code", page=2),
    )
    elapsed = time.perf_counter() - start

    assert stats.device_count == 5_000
    assert stats.component_count == expected_components
    assert page.total > 0
    # lenient budget so CI stays stable
    assert elapsed < 10.0, f"pipeline too slow: {elapsed:.3f}s"
