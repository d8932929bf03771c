#!/usr/bin/env python3
"""Settings loader for nickcollide."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any
import os

import yaml

PACKAGE_ROOT = Path(__file__).resolve().parent
CONFIG_DIR = PACKAGE_ROOT / "configs"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"
CONFIG_ENV_VAR = "NICKCOLLIDE_CONFIG"


def config_path() -> Path:
    """Active app config path (``NICKCOLLIDE_CONFIG`` wins over the packaged file)."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return resolve_path(override, Path.cwd())
    return APP_CONFIG_PATH


@lru_cache(maxsize=4)
def _load_config(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Missing app config: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    return data or {}


def load_app_config() -> dict:
    return _load_config(config_path())


def get_setting(key: str, default: Any = None) -> Any:
    """
    Look up ``key`` in app.yaml, e.g. ``get_setting("experiment.num_tries")``.

    Each dot descends one mapping level. ``default`` is returned as soon as a
    level is missing or is not a mapping.
    """
    node: Any = load_app_config()
    for name in key.split('.'):
        try:
            node = node[name]
        except (KeyError, TypeError):
            return default
    return node


def resolve_path(value: str | Path, base: Path | None = None) -> Path:
    """
    Turn a configured path into an absolute one.

    ``~`` is expanded. Relative paths such as ``data/wordlist.txt`` are taken
    against ``base``, which defaults to the nickcollide package directory so
    app.yaml can point at packaged data files.
    """
    if value is None:
        raise ValueError("cannot resolve an unset path")
    path = Path(value).expanduser()
    if path.is_absolute():
        return path
    return ((base or PACKAGE_ROOT) / path).resolve()


def clear_cache() -> None:
    """Forget loaded config files (tests swap ``NICKCOLLIDE_CONFIG``)."""
    _load_config.cache_clear()


__all__ = [
    "load_app_config",
    "get_setting",
    "resolve_path",
    "config_path",
    "clear_cache",
    "PACKAGE_ROOT",
    "APP_CONFIG_PATH",
    "CONFIG_ENV_VAR",
]
