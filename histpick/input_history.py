"""Persistent named input history.

Each collection is stored oldest-first under numeric keys ``0..N-1``. The
in-memory list keeps the same order, so its tail is the most recent entry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from . import config
from .backend import ConfigBackend, IniConfigBackend
from .settings import SETTINGS
from .transcode import TranscodeError, Transcoder

logger = logging.getLogger(__name__)


def append_unique(entries: list[str], value: str) -> None:
    """Append ``value`` unless an equal entry is already present."""
    if value not in entries:
        entries.append(value)


def push_entry(entries: list[str], text: str) -> list[str]:
    """Return ``entries`` with ``text`` appended as the most recent entry.

    Blank text and text already in the list are ignored.
    """
    out = list(entries)
    if text.strip():
        append_unique(out, text)
    return out


class HistoryStore:
    """Loads and saves named history lists through a ``ConfigBackend``."""

    def __init__(
        self,
        backend: ConfigBackend,
        *,
        retention_cap: int = 60,
        transcoder: Transcoder | None = None,
    ) -> None:
        self.backend = backend
        self.retention_cap = retention_cap
        self.transcoder = transcoder

    @property
    def enabled(self) -> bool:
        return self.retention_cap > 0

    def _active_transcoder(self) -> Transcoder | None:
        if self.transcoder is not None and self.transcoder.active:
            return self.transcoder
        return None

    def load(self, name: str) -> list[str]:
        """Load collection ``name``; a missing collection is an empty list."""
        if not self.enabled or not name:
            return []

        transcoder = self._active_transcoder()
        count = len(self.backend.list_keys(name))
        entries: list[str] = []
        for i in range(count):
            value = self.backend.get_string(name, str(i), None)
            if value is None:
                continue
            if transcoder is not None:
                try:
                    value = transcoder.to_display(value)
                except TranscodeError as exc:
                    logger.debug("history %s[%d]: keeping raw value (%s)", name, i, exc)
            append_unique(entries, value)
        return entries

    def save(self, name: str, entries: Iterable[str]) -> None:
        """Replace collection ``name`` with the most recent entries."""
        if not self.enabled or not name:
            return
        window = list(entries)
        if not window:
            return
        window = window[-self.retention_cap:]

        transcoder = self._active_transcoder()
        self.backend.delete_collection(name)
        for i, value in enumerate(window):
            if transcoder is not None:
                try:
                    value = transcoder.to_storage(value)
                except TranscodeError as exc:
                    logger.debug("history %s[%d]: storing raw value (%s)", name, i, exc)
            self.backend.set_string(name, str(i), value)
        logger.debug("saved %d history entries to %s", len(window), name)

    def clear(self, name: str) -> None:
        """Drop collection ``name`` entirely."""
        if not self.enabled or not name:
            return
        self.backend.delete_collection(name)
        logger.debug("cleared history %s", name)


# ── Default history file ─────────────────────────────────────────────


def default_store(path: Path | None = None) -> tuple[HistoryStore, IniConfigBackend]:
    """Open the history file with the configured cap and charsets."""
    backend = IniConfigBackend(path or config.HISTORY_FILE)
    transcoder = Transcoder(SETTINGS.charset.display, SETTINGS.charset.storage)
    store = HistoryStore(
        backend,
        retention_cap=SETTINGS.history.max_entries,
        transcoder=transcoder,
    )
    return store, backend


def load_history(name: str, path: Path | None = None) -> list[str]:
    """Load history entries for ``name`` from the history file."""
    if not SETTINGS.history.enabled or not name:
        return []
    store, _ = default_store(path)
    return store.load(name)


def save_history(name: str, entries: list[str], path: Path | None = None) -> None:
    """Persist history entries for ``name`` into the history file."""
    if not SETTINGS.history.enabled or not name or not entries:
        return
    store, backend = default_store(path)
    store.save(name, entries)
    backend.flush()


def append_history(name: str, text: str, path: Path | None = None) -> list[str]:
    """Append one entry to a collection, persist it and return the new list."""
    entries = push_entry(load_history(name, path), text)
    save_history(name, entries, path)
    return load_history(name, path)


def history_names(path: Path | None = None) -> list[str]:
    return IniConfigBackend(path or config.HISTORY_FILE).collections()


def clear_history(name: str, path: Path | None = None) -> bool:
    """Delete collection ``name``; return whether it existed."""
    backend = IniConfigBackend(path or config.HISTORY_FILE)
    if name not in backend.collections():
        return False
    backend.delete_collection(name)
    backend.flush()
    return True
