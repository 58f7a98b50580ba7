"""Key-value config backends: ``(collection, key) -> string``.

``IniConfigBackend`` keeps one INI group per collection::

    [cmdline]
    0=make
    1=make test
"""

from __future__ import annotations

import configparser
import os
import re
import tempfile
from pathlib import Path
from typing import Protocol

from .transcode import RAW_ERRORS


class BackendError(RuntimeError):
    """The backend could not read or write its storage."""


class ConfigBackend(Protocol):
    def collections(self) -> list[str]: ...

    def list_keys(self, collection: str) -> list[str]: ...

    def get_string(
        self, collection: str, key: str, default: str | None = None
    ) -> str | None: ...

    def set_string(self, collection: str, key: str, value: str) -> None: ...

    def delete_collection(self, collection: str) -> None: ...


def _key_order(key: str) -> tuple[int, int, str]:
    if key.isdigit():
        return (0, int(key), key)
    return (1, 0, key)


class MemoryConfigBackend:
    """In-process backend; nothing survives the process."""

    def __init__(self, data: dict[str, dict[str, str]] | None = None) -> None:
        self._data: dict[str, dict[str, str]] = {
            name: dict(values) for name, values in (data or {}).items()
        }

    def collections(self) -> list[str]:
        return list(self._data)

    def list_keys(self, collection: str) -> list[str]:
        return sorted(self._data.get(collection, {}), key=_key_order)

    def get_string(
        self, collection: str, key: str, default: str | None = None
    ) -> str | None:
        return self._data.get(collection, {}).get(key, default)

    def set_string(self, collection: str, key: str, value: str) -> None:
        self._data.setdefault(collection, {})[key] = value

    def delete_collection(self, collection: str) -> None:
        self._data.pop(collection, None)


# ── INI file ─────────────────────────────────────────────────────────

_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\t": "\\t", "\r": "\\r"}
_UNESCAPES = {"\\": "\\", "n": "\n", "t": "\t", "r": "\r", "s": " "}
_UNESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def escape_value(value: str) -> str:
    """Escape a value so configparser keeps it byte-for-byte."""
    out = "".join(_ESCAPES.get(ch, ch) for ch in value)
    stripped = out.lstrip(" ")
    lead = len(out) - len(stripped)
    out = "\\s" * lead + stripped
    stripped = out.rstrip(" ")
    trail = len(out) - len(stripped)
    return stripped + "\\s" * trail


def unescape_value(value: str) -> str:
    return _UNESCAPE_RE.sub(lambda m: _UNESCAPES.get(m.group(1), m.group(0)), value)


def _new_parser() -> configparser.RawConfigParser:
    parser = configparser.RawConfigParser(
        delimiters=("=",),
        comment_prefixes=("#",),
        inline_comment_prefixes=None,
        strict=False,
        empty_lines_in_values=False,
        interpolation=None,
        default_section="\x00default",
    )
    parser.optionxform = str  # type: ignore[assignment, method-assign]
    return parser


class IniConfigBackend:
    """INI-file backend. Changes stay in memory until ``flush()``.

    The file is UTF-8; bytes that do not decode are carried through as
    surrogates so one foreign entry does not spoil the rest.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._parser = _new_parser()
        self.reload()

    def reload(self) -> None:
        parser = _new_parser()
        try:
            text = self.path.read_text(encoding="utf-8", errors=RAW_ERRORS)
        except FileNotFoundError:
            text = ""
        except OSError as exc:
            raise BackendError(f"cannot read {self.path}: {exc}") from exc
        try:
            parser.read_string(text, source=str(self.path))
        except configparser.Error as exc:
            raise BackendError(f"cannot parse {self.path}: {exc}") from exc
        self._parser = parser

    def collections(self) -> list[str]:
        return self._parser.sections()

    def list_keys(self, collection: str) -> list[str]:
        if not self._parser.has_section(collection):
            return []
        return sorted(self._parser.options(collection), key=_key_order)

    def get_string(
        self, collection: str, key: str, default: str | None = None
    ) -> str | None:
        if not self._parser.has_option(collection, key):
            return default
        return unescape_value(self._parser.get(collection, key))

    def set_string(self, collection: str, key: str, value: str) -> None:
        if not self._parser.has_section(collection):
            self._parser.add_section(collection)
        self._parser.set(collection, key, escape_value(value))

    def delete_collection(self, collection: str) -> None:
        self._parser.remove_section(collection)

    def flush(self) -> None:
        """Write the file atomically (temp file + rename)."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8", errors=RAW_ERRORS) as handle:
                    self._parser.write(handle, space_around_delimiters=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise BackendError(f"cannot write {self.path}: {exc}") from exc
