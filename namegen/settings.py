#!/usr/bin/env python3
"""
Application Settings
====================
Reads namegen's YAML settings (``configs/app.yaml`` by default, or the file
named by NAMEGEN_APP_CONFIG) and answers dotted-path lookups.

Usage:
    from namegen.settings import get_setting, get_int_setting

    capacity = get_int_setting('generation.capacity', 32)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any
import os

import yaml

PACKAGE_ROOT = Path(__file__).resolve().parent
CONFIG_DIR = PACKAGE_ROOT / "configs"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"
APP_CONFIG_ENV = "NAMEGEN_APP_CONFIG"


def app_config_path() -> Path:
    """Settings file in use: NAMEGEN_APP_CONFIG if set, else the packaged one."""
    override = os.environ.get(APP_CONFIG_ENV)
    if override:
        return resolve_path(override, Path.cwd())
    return APP_CONFIG_PATH


@lru_cache(maxsize=4)
def _read_config(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Missing app config: {path}")
    data = yaml.safe_load(path.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data


def load_app_config() -> dict:
    return _read_config(app_config_path())


def clear_cache() -> None:
    """Forget loaded settings so the next lookup rereads the file."""
    _read_config.cache_clear()


def get_setting(path: str, default: Any = None) -> Any:
    """Get nested setting by dotted path."""
    current: Any = load_app_config()
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def get_int_setting(path: str, default: int) -> int:
    value = get_setting(path, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{path} must be an integer in app config, got {value!r}")
    return value


def get_bool_setting(path: str, default: bool) -> bool:
    value = get_setting(path, default)
    if not isinstance(value, bool):
        raise ValueError(f"{path} must be true or false in app config, got {value!r}")
    return value


def resolve_path(value: str, base: Path | None = None) -> Path:
    """Resolve a path string relative to ``base`` (default: the package directory)."""
    if value is None:
        raise ValueError("path value is required")
    path = Path(os.path.expanduser(str(value)))
    if not path.is_absolute():
        path = ((base or PACKAGE_ROOT) / path).resolve()
    return path


__all__ = [
    "load_app_config",
    "clear_cache",
    "get_setting",
    "get_int_setting",
    "get_bool_setting",
    "resolve_path",
    "PACKAGE_ROOT",
    "APP_CONFIG_PATH",
    "APP_CONFIG_ENV",
]
