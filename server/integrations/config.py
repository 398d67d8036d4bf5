from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional

import yaml

CONFIG_ENV = "DIARY_REFLECTION_CONFIG"


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _default_config_path() -> Path:
    return _repo_root() / "config" / "config.yaml"


def load_config(path: Optional[Path] = None) -> Dict[str, object]:
    explicit = path is not None
    cfg_path = path or Path(os.environ.get(CONFIG_ENV, "")).expanduser()
    if not cfg_path or str(cfg_path) == ".":
        cfg_path = _default_config_path()
    else:
        explicit = True
    if not cfg_path.exists():
        if explicit:
            raise FileNotFoundError(f"Config not found: {cfg_path}")
        return {}
    data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{cfg_path.name} must be a mapping at top level")
    return data


_CACHED: Optional[Dict[str, object]] = None


def get_config(path: Optional[Path] = None) -> Dict[str, object]:
    global _CACHED
    if _CACHED is None or path is not None:
        _CACHED = load_config(path)
    return _CACHED


def reset_config() -> None:
    global _CACHED
    _CACHED = None
