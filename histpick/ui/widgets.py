"""Custom widgets: HistoryInput."""

from __future__ import annotations

from typing import Any

from textual.binding import Binding
from textual.message import Message
from textual.widgets import Input

from ..input_history import HistoryStore, push_entry
from ..models import Anchor, HistoryAction, PickResult
from ..picker import start_session
from ..settings import SETTINGS
from .screens import HistoryPickerScreen


class HistoryInput(Input):
    """Input field with a named, persistent history and a picker overlay."""

    BINDINGS = [
        Binding("alt+h", "show_history", "History", show=False),
        Binding("ctrl+down", "show_history", "History", show=False),
    ]

    class Picked(Message):
        """Posted after the history picker closes with a choice."""

        def __init__(self, history_input: HistoryInput, result: PickResult) -> None:
            super().__init__()
            self.history_input = history_input
            self.result = result

        @property
        def control(self) -> HistoryInput:
            return self.history_input

    def __init__(
        self,
        value: str = "",
        *,
        history_name: str,
        store: HistoryStore | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(value, **kwargs)
        self.history_name = history_name
        self.store = store
        self.history: list[str] = []
        # Position of the last picked entry, counted from the most recent.
        self.history_current = 0

    def on_mount(self) -> None:
        if self.store is not None:
            self.history = self.store.load(self.history_name)

    def on_unmount(self) -> None:
        self.save_history()

    def save_history(self) -> None:
        if self.store is None:
            return
        if self.history:
            self.store.save(self.history_name, self.history)
        else:
            self.store.clear(self.history_name)

    def remember(self, text: str) -> None:
        self.history = push_entry(self.history, text)
        self.history_current = 0
        self.save_history()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input is self:
            self.remember(event.value)

    def action_show_history(self) -> None:
        if not self.history:
            return
        session = start_session(
            self.history,
            Anchor(row=self.region.y, col=self.region.x),
            self.history_current,
            (self.app.size.height, self.app.size.width),
            title=SETTINGS.picker.title,
        )
        self.app.push_screen(
            HistoryPickerScreen(session, title=SETTINGS.picker.title),
            callback=self.apply_pick,
        )

    def apply_pick(self, result: PickResult | None) -> None:
        """Adopt the reconciled history and fill in the chosen entry."""
        if result is None:
            return
        self.history = list(result.entries)
        if result.text is not None and result.text in self.history:
            self.history_current = len(self.history) - 1 - self.history.index(result.text)
        if result.text is not None and result.action in (HistoryAction.ENTER, HistoryAction.EDIT):
            self.value = result.text
        if result.chosen:
            self.post_message(self.Picked(self, result))
