from __future__ import annotations
import pytest
from pathlib import Path
from inventory_dashboard.config.loader import ConfigError, load_config, resolve_config_path


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.store_directory == "./store"
    assert cfg.page_size == 2
    assert cfg.fallback_label == "未分类"
    assert cfg.report_top_components == 20


def test_load_config_defaults(temp_workdir: Path):
    p = temp_workdir / "config" / "dashboard.yml"
    p.write_text("store_directory: ./s\n", encoding="utf-8")
    cfg = load_config(p)
    assert cfg.page_size == 10
    assert cfg.fallback_label == "未分类"
    assert cfg.chart_top_components == 10


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError) as e:
        load_config(temp_workdir / "config" / "not_exists.yml")
    assert "config file not found" in str(e.value)


def test_load_config_missing_required(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("store_directory: ./store\n", "")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value) and "required property" in str(e.value)


def test_load_config_wrong_type(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("page_size: 2", "page_size: two")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("store_directory: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "invalid yaml" in str(e.value)


def test_store_dir_env_override(write_config: Path, monkeypatch):
    monkeypatch.setenv("DASHBOARD_STORE_DIR", "/tmp/elsewhere")
    assert load_config(write_config).store_directory == "/tmp/elsewhere"


def test_resolve_config_path(monkeypatch):
    monkeypatch.delenv("DASHBOARD_CONFIG", raising=False)
    assert resolve_config_path() == Path("config/dashboard.yml")
    monkeypatch.setenv("DASHBOARD_CONFIG", "other.yml")
    assert resolve_config_path() == Path("other.yml")
    assert resolve_config_path(Path("cli.yml")) == Path("cli.yml")
