from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DEFAULT_FALLBACK_LABEL, DashboardConfig

"""Config loader.

Responsibilities:
- Load YAML config/dashboard.yml
- Validate it against config_schema.json (shipped next to this module)
- Apply defaults and the DASHBOARD_STORE_DIR environment override
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
    "resolve_config_path",
]

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/dashboard.yml")

ENV_CONFIG_PATH = "DASHBOARD_CONFIG"
ENV_STORE_DIR = "DASHBOARD_STORE_DIR"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: if the schema file is missing or invalid, or the config
            data fails validation (missing keys, wrong types, extra keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(explicit: Path | None = None) -> Path:
    """CLI flag > DASHBOARD_CONFIG > config/dashboard.yml."""
    if explicit is not None:
        return explicit
    env = os.getenv(ENV_CONFIG_PATH)
    if env:
        return Path(env)
    return DEFAULT_CONFIG_PATH


def load_config(path: Path) -> DashboardConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    # 環境変数が設定ファイルより優先
    store_dir = os.getenv(ENV_STORE_DIR) or data["store_directory"]
    return DashboardConfig(
        store_directory=store_dir,
        page_size=data.get("page_size", 10),
        fallback_label=data.get("fallback_label", DEFAULT_FALLBACK_LABEL),
        chart_top_components=data.get("chart_top_components", 10),
        report_top_components=data.get("report_top_components", 20),
    )
