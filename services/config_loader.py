import copy
import os
from pathlib import Path

import yaml

from services.errors import ArgumentError

DEFAULT_CONFIG = {
    "attendance": {
        "header_token": "Date",
    },
    "compliance": {
        "threshold": 0.5,
        "exclude_public_holidays": False,
    },
    "json2csv": {
        "columns": "",
        "delimiter": ",",
    },
}

# 環境変数 → (セクション, キー, 型)
ENV_OVERRIDES = {
    "ATTENDANCE_COMPLIANCE_THRESHOLD": ("compliance", "threshold", float),
    "JSON2CSV_COLUMNS": ("json2csv", "columns", str),
}


def _deep_merge(base: dict, override: dict) -> dict:
    """ベース設定にオーバーライドをマージする"""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env(config: dict) -> dict:
    """環境変数が設定されていれば設定値を上書きする"""
    for env_name, (section, key, cast) in ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw is None or raw == "":
            continue
        try:
            value = cast(raw)
        except ValueError:
            raise ArgumentError(f"Invalid value for {env_name}: {raw}")
        config.setdefault(section, {})[key] = value
    return config


def config_path_from_env(default: str = "config.yaml") -> str:
    return os.getenv("ATTENDANCE_CONFIG_PATH", default)


def load_config(path: str = "config.yaml") -> dict:
    """YAML設定ファイルをロードし、デフォルト設定・環境変数とマージして返す"""
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}
        config = _deep_merge(DEFAULT_CONFIG, user_config)
    else:
        config = copy.deepcopy(DEFAULT_CONFIG)
    return _apply_env(config)
