"""History picker session: display ordering, selection and reconciliation.

A history list is kept oldest-first. The picker shows it most-recent-first
when the overlay opens below the anchor, and most-recent-last when it opens
above, so the newest entry always sits next to the anchor widget. When the
session ends, whatever is left on screen is turned back into oldest-first
order with ``reconcile``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from rich.cells import cell_len

from .layout import compute_geometry
from .models import (
    Anchor,
    DisplayEntry,
    Geometry,
    HistoryAction,
    PickResult,
    SessionState,
)

T = TypeVar("T")

# Extra columns reserved next to the title label.
TITLE_MARGIN = 2


class SessionStateError(RuntimeError):
    """A picker session operation was called in the wrong state."""


@dataclass(frozen=True)
class EntryCodec(Generic[T]):
    """Turns history payloads into display rows and back."""

    materialize: Callable[[T], DisplayEntry]
    extract: Callable[[DisplayEntry], T]


def _materialize_text(value: str) -> DisplayEntry:
    return DisplayEntry(text=value, width=cell_len(value), payload=value)


def _extract_text(entry: DisplayEntry) -> str:
    return entry.text


TEXT_CODEC: EntryCodec[str] = EntryCodec(_materialize_text, _extract_text)


def reconcile(display_order: Sequence[T], was_reversed: bool) -> list[T]:
    """Return ``display_order`` in storage (oldest-first) order.

    ``was_reversed`` is true when the overlay opened above the anchor, in
    which case the display already runs oldest-first.
    """
    if was_reversed:
        return list(display_order)
    return list(reversed(display_order))


def initial_highlight(count: int, current: int, reversed_order: bool) -> int | None:
    """Row to highlight first; ``current`` counts from the most recent entry."""
    if count <= 0:
        return None
    if reversed_order:
        if 0 <= current < count:
            return count - 1 - current
        return count - 1
    if 0 < current < count:
        return current
    return None


_FINAL_STATES = (
    SessionState.CONFIRMED,
    SessionState.SECONDARY_ACTION,
    SessionState.CANCELLED,
)


@dataclass
class PickerSession:
    anchor: Anchor
    entries: list[DisplayEntry]
    geometry: Geometry
    reversed_order: bool
    highlight: int | None
    max_width: int
    codec: EntryCodec[Any] = TEXT_CODEC
    state: SessionState = SessionState.INITIALIZING
    text: str | None = None
    action: HistoryAction = HistoryAction.NONE
    result: list[Any] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.entries)

    def _require(self, *states: SessionState) -> None:
        if self.state not in states:
            raise SessionStateError(
                f"picker session is {self.state.value}, "
                f"expected {' or '.join(s.value for s in states)}"
            )

    def relayout(self, rows: int, cols: int) -> Geometry:
        """Recompute geometry for a new terminal size; row order is kept."""
        self.geometry = compute_geometry(
            self.anchor, self.count, self.max_width, rows, cols
        )
        return self.geometry

    # ── Edits while awaiting input ───────────────────────────────────

    def remove(self, index: int) -> DisplayEntry:
        self._require(SessionState.AWAITING_INPUT)
        return self.entries.pop(index)

    def clear(self) -> None:
        self._require(SessionState.AWAITING_INPUT)
        self.entries.clear()

    # ── Outcomes ─────────────────────────────────────────────────────

    def choose(self, index: int | None, action: HistoryAction = HistoryAction.ENTER) -> None:
        self._require(SessionState.AWAITING_INPUT)
        if action is HistoryAction.NONE:
            self.cancel()
            return
        if index is not None and 0 <= index < self.count:
            self.text = self.entries[index].text
        self.action = action
        if action is HistoryAction.ENTER:
            self.state = SessionState.CONFIRMED
        else:
            self.state = SessionState.SECONDARY_ACTION

    def cancel(self) -> None:
        self._require(SessionState.AWAITING_INPUT)
        self.text = None
        self.action = HistoryAction.NONE
        self.state = SessionState.CANCELLED

    def finish(self) -> PickResult:
        """Hand the displayed entries back in storage order."""
        self._require(*_FINAL_STATES)
        self.state = SessionState.RECONCILING
        extracted = [self.codec.extract(entry) for entry in self.entries]
        self.entries.clear()
        self.result = reconcile(extracted, self.reversed_order)
        self.state = SessionState.DONE
        return PickResult(text=self.text, action=self.action, entries=list(self.result))


def start_session(
    history: Sequence[T],
    anchor: Anchor,
    current: int,
    screen_size: tuple[int, int],
    *,
    codec: EntryCodec[T] | None = None,
    title: str = "History",
) -> PickerSession:
    """Prepare a picker session for ``history`` (oldest-first).

    ``screen_size`` is ``(rows, cols)``. ``current`` is the index of the
    entry to highlight, counted from the most recent one.
    """
    selected: EntryCodec[Any] = codec if codec is not None else TEXT_CODEC
    max_width = cell_len(title) + TITLE_MARGIN
    entries: list[DisplayEntry] = []
    for value in reversed(history):
        entry = selected.materialize(value)
        max_width = max(max_width, entry.width)
        entries.append(entry)

    rows, cols = screen_size
    geometry = compute_geometry(anchor, len(entries), max_width, rows, cols)
    reversed_order = geometry.above
    if reversed_order:
        entries.reverse()

    session = PickerSession(
        anchor=anchor,
        entries=entries,
        geometry=geometry,
        reversed_order=reversed_order,
        highlight=initial_highlight(len(entries), current, reversed_order),
        max_width=max_width,
        codec=selected,
    )
    session.state = SessionState.AWAITING_INPUT
    return session
