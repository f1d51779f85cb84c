"""
App configuration — JSON file merged over built-in defaults.

The config file is optional; a missing or corrupt file means defaults.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
CONFIG_PATH = PROJECT_ROOT / "config" / "settings.json"
DATA_DIR_ENV = "BURNOUT_MONITOR_DATA"

# Default config (used if JSON doesn't exist yet)
DEFAULT_CONFIG = {
    "data_dir": "data",
    "log_file": "burnout_monitor.log",
    "log_level": "INFO",
    "analysis_days": 7,
    "upcoming_days": 7,
    "upcoming_limit": 5,
}


def load_config(path: Optional[Path] = None) -> dict:
    path = Path(path) if path else CONFIG_PATH
    config = DEFAULT_CONFIG.copy()
    if not path.exists():
        return config
    try:
        with open(path, encoding="utf-8") as f:
            cfg = json.load(f)
        if not isinstance(cfg, dict):
            raise ValueError("top-level JSON value is not an object")
        config.update({k: v for k, v in cfg.items() if k in DEFAULT_CONFIG})
    except (json.JSONDecodeError, ValueError, OSError) as e:
        logger.warning("Bad config at %s (%s), using defaults.", path, e)
        return DEFAULT_CONFIG.copy()
    return config


def save_config(config: dict, path: Optional[Path] = None) -> None:
    path = Path(path) if path else CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)


def reset_config(path: Optional[Path] = None) -> dict:
    config = DEFAULT_CONFIG.copy()
    save_config(config, path)
    return config


def resolve_data_dir(config: dict) -> Path:
    """Env var wins, then config; relative paths are taken from the project root."""
    env = os.environ.get(DATA_DIR_ENV)
    raw = Path(env) if env else Path(config.get("data_dir") or DEFAULT_CONFIG["data_dir"])
    raw = raw.expanduser()
    if not raw.is_absolute():
        raw = PROJECT_ROOT / raw
    return raw.resolve()
