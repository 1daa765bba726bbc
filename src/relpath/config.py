"""Configuration helpers for relpath."""

from __future__ import annotations

import logging
import os
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from .fs.atomic import atomic_write_text
from .os_info import AUTO, CONVENTION, OS_SECTION

_LOGGER = logging.getLogger("relpath.config")

HOME_ENV = "RELPATH_HOME"
DEFAULT_DATA_DIR = "~/.relpath"
CONFIG_FILENAME = "config.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    OS_SECTION: {
        CONVENTION: AUTO,
    },
    "logging": {
        "level": "INFO",
        "console_level": "WARNING",
        "json_file": True,
    },
}


def deep_merge(base: dict[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    merged = deepcopy(base)
    for key, value in updates.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise RuntimeError(f"讀取設定檔失敗：{path}") from exc
    if not isinstance(data, dict):
        raise RuntimeError(f"設定檔格式錯誤，最外層必須為 mapping：{path}")
    return data


def write_yaml(path: Path, data: Mapping[str, Any]) -> None:
    try:
        atomic_write_text(path, yaml.safe_dump(dict(data), allow_unicode=True, sort_keys=False))
    except OSError as exc:
        raise RuntimeError(f"寫入設定檔失敗：{path}") from exc


def set_config_value(config: dict[str, Any], key_path: str, value: Any) -> dict[str, Any]:
    parts = key_path.split(".")
    cursor = config
    for part in parts[:-1]:
        nxt = cursor.get(part)
        if not isinstance(nxt, dict):
            nxt = {}
            cursor[part] = nxt
        cursor = nxt
    cursor[parts[-1]] = value
    return config


def get_config_value(config: Mapping[str, Any], key_path: str) -> Any:
    cursor: Any = config
    for part in key_path.split("."):
        if not isinstance(cursor, Mapping) or part not in cursor:
            raise KeyError(f"找不到設定鍵：{key_path}")
        cursor = cursor[part]
    return cursor


def _assign_sources(value: Any, source: str) -> Any:
    if isinstance(value, Mapping):
        return {key: _assign_sources(val, source) for key, val in value.items()}
    return source


def _merge_with_sources(
    base: dict[str, Any],
    sources: dict[str, Any],
    updates: Mapping[str, Any],
    source: str,
) -> None:
    for key, value in updates.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict) and isinstance(sources.get(key), dict):
            _merge_with_sources(base[key], sources[key], value, source)
        else:
            base[key] = deepcopy(value)
            sources[key] = _assign_sources(value, source)


def annotate_config(effective: Any, sources: Any) -> Any:
    if isinstance(effective, dict) and isinstance(sources, dict):
        return {key: annotate_config(effective[key], sources.get(key)) for key in effective}
    return {"value": effective, "source": sources}


@dataclass
class ConfigResolution:
    effective: dict[str, Any]
    sources: dict[str, Any]

    def annotated(self) -> dict[str, Any]:
        return annotate_config(self.effective, self.sources)


class ConfigLoader:
    """Layer defaults, the global ``config.yaml`` and CLI overrides, tracking where each key came from."""

    def __init__(self, data_dir: Path | None = None) -> None:
        self.data_dir = data_dir or resolve_data_dir()

    @property
    def config_path(self) -> Path:
        return self.data_dir / CONFIG_FILENAME

    @property
    def logs_dir(self) -> Path:
        return self.data_dir / "logs"

    def load_global(self) -> dict[str, Any]:
        return read_yaml(self.config_path)

    def resolve(self, cli_overrides: Mapping[str, Any] | None = None) -> ConfigResolution:
        effective = deepcopy(DEFAULT_CONFIG)
        sources = _assign_sources(DEFAULT_CONFIG, "default")

        global_config = self.load_global()
        if global_config:
            _LOGGER.debug("套用全域設定：%s", self.config_path)
        _merge_with_sources(effective, sources, global_config, "global")

        if cli_overrides:
            _merge_with_sources(effective, sources, cli_overrides, "cli")

        return ConfigResolution(effective=effective, sources=sources)

    def get_value(self, key_path: str) -> Any:
        return get_config_value(self.resolve().effective, key_path)

    def set_value(self, key_path: str, value: Any) -> None:
        """Persist ``value`` under ``key_path`` in the global config file."""
        config = self.load_global()
        set_config_value(config, key_path, value)
        write_yaml(self.config_path, config)


def resolve_data_dir() -> Path:
    env_path = os.environ.get(HOME_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return Path(DEFAULT_DATA_DIR).expanduser()
