"""Modal screens: history picker overlay."""

from __future__ import annotations

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import OptionList
from textual.widgets.option_list import Option

from ..models import HistoryAction, PickResult, SessionState
from ..picker import PickerSession
from .css import HISTORY_PICKER_CSS


class HistoryPickerScreen(ModalScreen[PickResult]):
    """Overlay listing a history collection next to the widget that opened it.

    Dismisses with a ``PickResult`` whose ``entries`` are oldest-first, also
    when the picker is cancelled.
    """

    CSS = HISTORY_PICKER_CSS
    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
        Binding("f3", "view", "View", show=False),
        Binding("f4", "edit", "Edit", show=False),
        Binding("delete", "remove_entry", "Delete", show=False),
        Binding("shift+delete", "clear_entries", "Clear", show=False),
    ]

    def __init__(self, session: PickerSession, *, title: str = "History") -> None:
        super().__init__()
        self.session = session
        self.title_text = title

    def compose(self) -> ComposeResult:
        with Vertical(id="history-dialog"):
            yield OptionList(
                *[Option(Text(entry.text)) for entry in self.session.entries],
                id="history-list",
            )

    def on_mount(self) -> None:
        dialog = self.query_one("#history-dialog", Vertical)
        dialog.border_title = self.title_text
        self._apply_geometry()

        options = self.query_one("#history-list", OptionList)
        if self.session.highlight is not None:
            options.highlighted = self.session.highlight
        options.focus()

    def on_resize(self, event: events.Resize) -> None:
        if not self.is_mounted:
            return
        self.session.relayout(event.size.height, event.size.width)
        self._apply_geometry()

    def _apply_geometry(self) -> None:
        geometry = self.session.geometry
        dialog = self.query_one("#history-dialog", Vertical)
        dialog.styles.offset = (geometry.col, geometry.row)
        dialog.styles.width = geometry.width
        dialog.styles.height = geometry.height

    def _highlighted_index(self) -> int | None:
        return self.query_one("#history-list", OptionList).highlighted

    def _finish(self, action: HistoryAction, index: int | None) -> None:
        if self.session.state is not SessionState.AWAITING_INPUT:
            return
        if action is HistoryAction.NONE:
            self.session.cancel()
        else:
            self.session.choose(index, action)
        self.dismiss(self.session.finish())

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self._finish(HistoryAction.ENTER, event.option_index)

    def action_view(self) -> None:
        self._finish(HistoryAction.VIEW, self._highlighted_index())

    def action_edit(self) -> None:
        self._finish(HistoryAction.EDIT, self._highlighted_index())

    def action_cancel(self) -> None:
        self._finish(HistoryAction.NONE, None)

    def action_remove_entry(self) -> None:
        index = self._highlighted_index()
        if index is None or self.session.state is not SessionState.AWAITING_INPUT:
            return
        self.session.remove(index)
        self.query_one("#history-list", OptionList).remove_option_at_index(index)

    def action_clear_entries(self) -> None:
        if self.session.state is not SessionState.AWAITING_INPUT:
            return
        self.session.clear()
        self.query_one("#history-list", OptionList).clear_options()
