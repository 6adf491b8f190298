"""Environment and on-disk configuration.

Precedence everywhere: explicit argument > process env > ``config.json`` >
built-in default.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from dotenv import find_dotenv, load_dotenv


def load_env() -> None:
    """Load ``.env`` then ``.env.local`` without overriding the process env."""
    base = find_dotenv(".env", usecwd=True)
    if base:
        load_dotenv(base, override=False)

    local_file = Path.cwd() / ".env.local"
    if local_file.exists():
        load_dotenv(local_file, override=False)


def config_dir() -> Path:
    home = os.getenv("HEROSMITH_HOME")
    if home:
        normalized = Path(home).expanduser()
        try:
            normalized = normalized.resolve()
        except OSError:
            pass
        return normalized
    return Path.home() / ".herosmith"


def config_path() -> Path:
    return config_dir() / "config.json"


def drafts_dir() -> Path:
    return config_dir() / "drafts"


def load_config() -> Dict[str, Any]:
    try:
        return json.loads(config_path().read_text(encoding="utf-8"))
    except Exception:
        return {}


def save_config(cfg: Dict[str, Any]) -> None:
    path = config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(cfg, indent=2), encoding="utf-8")


def get_language(override: str | None = None) -> str:
    if override:
        return override
    return os.getenv("HEROSMITH_LANG") or str(load_config().get("language", "en"))


def get_catalog_path(override: str | Path | None = None) -> Path | None:
    if override:
        return Path(override)
    val = os.getenv("HEROSMITH_CATALOG") or load_config().get("catalog")
    return Path(val).expanduser() if val else None


def get_log_level(override: str | None = None) -> int:
    name = override or os.getenv("HEROSMITH_LOG_LEVEL") or str(load_config().get("log_level", "INFO"))
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


__all__ = [
    "config_dir",
    "config_path",
    "drafts_dir",
    "get_catalog_path",
    "get_language",
    "get_log_level",
    "load_config",
    "load_env",
    "save_config",
]
