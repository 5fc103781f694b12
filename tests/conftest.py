# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from inventory_dashboard.logging.init import reset_logging

HEADER = "设备编号,工作部位,零部件名称,型号规格,数量及米数,电机功率,备注"


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("DASHBOARD_CONFIG", raising=False)
        monkeypatch.delenv("DASHBOARD_STORE_DIR", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """store_directory: ./store
page_size: 2
fallback_label: 未分类
chart_top_components: 10
report_top_components: 20
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "dashboard.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def inventory_csv_text() -> str:
    # 2 devices, merged cells exported as blanks, one blank line in between
    return "\n".join(
        [
            HEADER,
            "HC-001,1#真空回潮机,密封圈,型号或图号：NJBφ65,2,,气动球阀用",
            ",,密封圈,型号或图号：NJBφ100,1,,气动球阀用",
            ",,加湿电磁阀,SMC VXD2260-10-5DZL,1,,加潮",
            "",
            "HC-002,1#西门电机,减速机电机,RF37 DT71D4/BMG/HF,1,0.37KW,",
            ",,气缸,SMC MBB100-50,4,,",
        ]
    ) + "\n"


@pytest.fixture()
def write_csv(temp_workdir: Path):
    def _write(name: str, text: str, encoding: str = "utf-8") -> Path:
        p = temp_workdir / "data" / name
        p.write_text(text, encoding=encoding)
        return p
    return _write
