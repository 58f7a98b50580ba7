"""Character-set conversion between the display and storage charsets.

Stored values come off disk as text decoded with ``surrogateescape``, so
bytes that are not valid in the storage charset survive as lone surrogates
and can be re-read in another charset.
"""

from __future__ import annotations

import codecs

STORAGE_CHARSET = "utf-8"
RAW_ERRORS = "surrogateescape"


class TranscodeError(ValueError):
    """Text cannot be represented in the requested character set."""


def normalize_charset(name: str) -> str:
    """Return the canonical codec name, e.g. ``UTF8`` -> ``utf-8``."""
    try:
        return codecs.lookup(name).name
    except LookupError as exc:
        raise TranscodeError(f"unknown charset: {name}") from exc


def convert(
    text: str,
    from_charset: str,
    to_charset: str,
    errors: str = "strict",
) -> str:
    """Re-read ``text`` encoded in ``from_charset`` as ``to_charset``.

    ``errors`` applies to the decode step; pass ``"surrogateescape"`` to keep
    undecodable bytes instead of failing.
    """
    try:
        return text.encode(from_charset, RAW_ERRORS).decode(to_charset, errors)
    except (UnicodeError, LookupError) as exc:
        raise TranscodeError(
            f"cannot convert {text!r} from {from_charset} to {to_charset}"
        ) from exc


class Transcoder:
    """Converts history values between ``display`` and ``storage`` charsets.

    Inactive when both charsets name the same codec; callers skip conversion
    entirely then. Conversion failures raise ``TranscodeError``.
    """

    def __init__(self, display: str, storage: str = STORAGE_CHARSET) -> None:
        self.display = normalize_charset(display)
        self.storage = normalize_charset(storage)

    @property
    def active(self) -> bool:
        return self.display != self.storage

    def to_display(self, value: str) -> str:
        return convert(value, self.storage, self.display)

    def to_storage(self, value: str) -> str:
        # Bytes the storage charset cannot decode go to disk unchanged.
        return convert(value, self.display, self.storage, RAW_ERRORS)
