"""Filesystem locations for history and log files."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path


def _default_home() -> Path:
    cache_root = os.environ.get("XDG_CACHE_HOME") or "~/.cache"
    return Path(cache_root).expanduser() / "histpick"


HISTPICK_HOME = Path(os.environ.get("HISTPICK_HOME") or _default_home()).expanduser()

_USER_CONFIG_PATHS: tuple[Path, ...] = (
    HISTPICK_HOME / "config.toml",
    Path.home() / ".config" / "histpick" / "config.toml",
)


_STORAGE_KEYS = ("state_dir", "history_file")


def _load_user_storage() -> dict[str, str]:
    """Path overrides from the ``[storage]`` table of the first user config."""
    for config_path in _USER_CONFIG_PATHS:
        try:
            parsed = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError):
            continue
        storage = parsed.get("storage", {})
        if not isinstance(storage, dict):
            return {}
        out: dict[str, str] = {}
        for key in _STORAGE_KEYS:
            value = storage.get(key)
            if isinstance(value, str) and value.strip():
                out[key] = value.strip()
        return out
    return {}


def _resolve_dir(raw: str) -> Path:
    return Path(raw).expanduser()


def _ensure_writable_dir(path: Path, fallback: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback
    return path


_storage = _load_user_storage()
HISTPICK_HOME = _ensure_writable_dir(HISTPICK_HOME, _resolve_dir("/tmp/histpick"))

STATE_DIR = _ensure_writable_dir(
    _resolve_dir(
        os.environ.get("HISTPICK_STATE_DIR")
        or _storage.get("state_dir")
        or str(HISTPICK_HOME)
    ),
    HISTPICK_HOME,
)

HISTORY_FILE = _resolve_dir(
    os.environ.get("HISTPICK_HISTORY_FILE")
    or _storage.get("history_file")
    or str(STATE_DIR / "history")
)
LOG_FILE = STATE_DIR / "histpick.log"
