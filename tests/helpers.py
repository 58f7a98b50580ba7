"""Shared test helpers."""

from __future__ import annotations

from histpick.backend import MemoryConfigBackend


class RecordingBackend(MemoryConfigBackend):
    """Memory backend that records every mutating call."""

    def __init__(self, data: dict[str, dict[str, str]] | None = None) -> None:
        super().__init__(data)
        self.writes: list[tuple[str, str, str]] = []
        self.deletes: list[str] = []

    def set_string(self, collection: str, key: str, value: str) -> None:
        self.writes.append((collection, key, value))
        super().set_string(collection, key, value)

    def delete_collection(self, collection: str) -> None:
        self.deletes.append(collection)
        super().delete_collection(collection)


class FailingBackend(MemoryConfigBackend):
    """Backend whose reads and writes raise the given error."""

    def __init__(self, error: Exception) -> None:
        super().__init__()
        self.error = error

    def list_keys(self, collection: str) -> list[str]:
        raise self.error

    def set_string(self, collection: str, key: str, value: str) -> None:
        raise self.error
