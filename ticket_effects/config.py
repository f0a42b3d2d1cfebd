"""YAML configuration loader + logging setup."""

from __future__ import annotations

import datetime
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .palette import is_hex_color

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    "logging": {"level": "INFO", "file": None},
    "colors": {"features": {}, "badges": {}},
    "preview": {"today": None},
}


def load_config(config_path: Union[str, Path, None] = None) -> Dict[str, Any]:
    """Read the YAML config and merge it over ``DEFAULT_CONFIG``.

    An explicit path that does not exist raises FileNotFoundError; a missing
    default config.yaml just yields the defaults.  A non-mapping document or an
    unparseable ``preview.today`` raises ValueError.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    cfg: Dict[str, Any] = {key: dict(value) for key, value in DEFAULT_CONFIG.items()}

    if not path.exists():
        if config_path:
            raise FileNotFoundError(f"Config file not found: {path}")
        return cfg

    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    for section, values in raw.items():
        if isinstance(values, dict) and isinstance(cfg.get(section), dict):
            cfg[section].update(values)
        else:
            cfg[section] = values

    preview_today(cfg)

    log_file = cfg["logging"].get("file")
    if log_file and os.path.dirname(log_file):
        os.makedirs(os.path.dirname(log_file), exist_ok=True)

    logger.info("Loaded config: %s", path)
    return cfg


def setup_logging(cfg: Dict[str, Any]) -> None:
    log_cfg = cfg.get("logging", {})
    level_name = str(log_cfg.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    log_file = log_cfg.get("file")
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def color_overrides(cfg: Dict[str, Any], section: str) -> Dict[str, str]:
    """Valid ``#RRGGBB`` overrides from ``colors.<section>``."""
    raw = (cfg.get("colors") or {}).get(section) or {}
    overrides: Dict[str, str] = {}
    for key, value in raw.items():
        if is_hex_color(value):
            overrides[str(key)] = value
        else:
            logger.warning("Dropping colors.%s.%s=%r (expected #RRGGBB)", section, key, value)
    return overrides


def preview_today(cfg: Dict[str, Any]) -> Optional[datetime.date]:
    """Pinned "today" for preview month selection, if configured."""
    value = (cfg.get("preview") or {}).get("today")
    if value is None:
        return None
    if isinstance(value, datetime.date):
        return value
    try:
        return datetime.date.fromisoformat(str(value))
    except ValueError:
        raise ValueError(f"preview.today must be YYYY-MM-DD, got {value!r}") from None
