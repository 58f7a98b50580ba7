"""Typed settings loaded from TOML config with env-var overrides."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path


USER_CONFIG_PATH = Path.home() / ".config" / "histpick" / "config.toml"

DEFAULT_HISTORY_MAX = 60


def _default_tables() -> dict:
    ref = resources.files("histpick").joinpath("default_config.toml")
    return tomllib.loads(ref.read_text(encoding="utf-8"))


def _user_tables(path: Path | None = None) -> dict:
    path = path or USER_CONFIG_PATH
    if path.is_file():
        return tomllib.loads(path.read_text(encoding="utf-8"))
    return {}


def _overlay_tables(base: dict, override: dict) -> dict:
    """Overlay ``[section]`` tables key by key; non-table values are ignored."""
    merged = {name: dict(table) for name, table in base.items()}
    for name, table in override.items():
        if isinstance(table, dict):
            merged.setdefault(name, {}).update(table)
    return merged


# ── Dataclasses ──────────────────────────────────────────────────────


@dataclass
class HistorySettings:
    max_entries: int

    @property
    def enabled(self) -> bool:
        return self.max_entries > 0


@dataclass
class CharsetSettings:
    display: str
    storage: str


@dataclass
class PickerSettings:
    title: str


@dataclass
class LoggingSettings:
    level: str
    file: str


@dataclass
class Settings:
    history: HistorySettings
    charset: CharsetSettings
    picker: PickerSettings
    logging: LoggingSettings

    _raw: dict = field(default_factory=dict, repr=False)


def load_settings(user_config: Path | None = None) -> Settings:
    """Load settings: defaults ← user TOML ← env vars."""
    defaults = _default_tables()
    user = _user_tables(user_config)
    raw = _overlay_tables(defaults, user)

    hist = raw.get("history", {})
    cs = raw.get("charset", {})
    pk = raw.get("picker", {})
    lg = raw.get("logging", {})

    history_max = int(os.environ.get(
        "HISTPICK_HISTORY_MAX",
        hist.get("max_entries", DEFAULT_HISTORY_MAX),
    ))

    charset = CharsetSettings(
        display=os.environ.get("HISTPICK_DISPLAY_CHARSET", cs.get("display", "utf-8")),
        storage=str(cs.get("storage", "utf-8")),
    )

    logging_settings = LoggingSettings(
        level=os.environ.get("HISTPICK_LOG_LEVEL", lg.get("level", "WARNING")),
        file=str(lg.get("file", "")),
    )

    return Settings(
        history=HistorySettings(max_entries=max(0, history_max)),
        charset=charset,
        picker=PickerSettings(title=str(pk.get("title", "History"))),
        logging=logging_settings,
        _raw=raw,
    )


# Module-level singleton — loaded once on import.
SETTINGS = load_settings()
