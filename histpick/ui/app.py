"""histpick demo TUI — main App class."""

from __future__ import annotations

import argparse
import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Input, Label, Static

from ..backend import BackendError, IniConfigBackend
from ..input_history import HistoryStore, default_store
from ..models import HistoryAction
from .css import APP_CSS
from .widgets import HistoryInput

logger = logging.getLogger(__name__)

DEMO_FIELDS: tuple[tuple[str, str], ...] = (
    ("Command", "cmdline"),
    ("Find file", "find-file"),
)


class HistpickApp(App):
    TITLE = "histpick"
    DEFAULT_CSS = APP_CSS
    BINDINGS = [
        Binding("f10", "quit", "Quit"),
    ]

    def __init__(
        self,
        store: HistoryStore | None = None,
        backend: IniConfigBackend | None = None,
    ) -> None:
        super().__init__()
        if store is None:
            store, backend = default_store()
        self.store = store
        self.backend = backend

    def compose(self) -> ComposeResult:
        yield Static("histpick  (Alt-H history, Enter submit, F10 quit)", id="title-bar")
        with Vertical(id="inputs"):
            for label, name in DEMO_FIELDS:
                yield Label(label)
                yield HistoryInput(
                    history_name=name,
                    store=self.store,
                    id=f"input-{name}",
                )
        yield Static("", id="status")

    def _set_status(self, message: str) -> None:
        self.query_one("#status", Static).update(message)

    def flush_history(self) -> bool:
        if self.backend is None:
            return True
        try:
            self.backend.flush()
        except BackendError as exc:
            logger.error("history flush failed: %s", exc)
            self.notify(str(exc), severity="error", timeout=5)
            return False
        return True

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if isinstance(event.input, HistoryInput) and self.flush_history():
            self._set_status(f"saved to {event.input.history_name}")

    def on_history_input_picked(self, event: HistoryInput.Picked) -> None:
        result = event.result
        if result.action is HistoryAction.VIEW:
            self.notify(result.text or "", title="History entry", timeout=5, markup=False)
        self._set_status(f"{result.action.value}: {result.text}")

    async def action_quit(self) -> None:
        for widget in self.query(HistoryInput):
            widget.save_history()
        self.flush_history()
        self.exit()


def cmd_demo(args: argparse.Namespace | None = None) -> None:
    store, backend = default_store(getattr(args, "history_file", None))
    app = HistpickApp(store, backend)
    app.run()
