"""Tests for the history picker overlay and history input widget."""

import inspect
from types import SimpleNamespace

from histpick.backend import MemoryConfigBackend
from histpick.input_history import HistoryStore
from histpick.models import Anchor, HistoryAction, PickResult
from histpick.picker import start_session
from histpick.ui.screens import HistoryPickerScreen
from histpick.ui.widgets import HistoryInput

HISTORY = ["old", "mid", "new"]


def _screen(anchor: Anchor = Anchor(row=10, col=4)) -> HistoryPickerScreen:
    return HistoryPickerScreen(start_session(HISTORY, anchor, 0, (40, 80)))


def _capture_dismiss(monkeypatch, screen: HistoryPickerScreen) -> list[PickResult]:
    dismissed: list[PickResult] = []
    monkeypatch.setattr(screen, "dismiss", lambda result=None: dismissed.append(result))
    return dismissed


class _OptionsStub:
    def __init__(self) -> None:
        self.removed: list[int] = []
        self.cleared = False

    def remove_option_at_index(self, index: int) -> None:
        self.removed.append(index)

    def clear_options(self) -> None:
        self.cleared = True


def test_picker_bindings() -> None:
    bindings = {binding.key: binding.action for binding in HistoryPickerScreen.BINDINGS}

    assert bindings["escape"] == "cancel"
    assert bindings["f3"] == "view"
    assert bindings["f4"] == "edit"
    assert bindings["delete"] == "remove_entry"
    assert bindings["shift+delete"] == "clear_entries"


def test_picker_compose_uses_option_list_with_plain_text() -> None:
    source = inspect.getsource(HistoryPickerScreen.compose)

    assert "OptionList(" in source
    assert "Text(entry.text)" in source
    assert "history-dialog" in source


def test_option_selected_confirms_entry(monkeypatch) -> None:
    screen = _screen()
    dismissed = _capture_dismiss(monkeypatch, screen)
    event = SimpleNamespace(option_index=0, stop=lambda: None)

    screen.on_option_list_option_selected(event)  # type: ignore[arg-type]

    assert len(dismissed) == 1
    assert dismissed[0].text == "new"
    assert dismissed[0].action is HistoryAction.ENTER
    assert dismissed[0].entries == HISTORY


def test_view_and_edit_use_highlighted_row(monkeypatch) -> None:
    for action_name, action in (("action_view", HistoryAction.VIEW), ("action_edit", HistoryAction.EDIT)):
        screen = _screen()
        dismissed = _capture_dismiss(monkeypatch, screen)
        monkeypatch.setattr(screen, "_highlighted_index", lambda: 1)

        getattr(screen, action_name)()

        assert dismissed[0].text == "mid"
        assert dismissed[0].action is action


def test_cancel_still_returns_reconciled_entries(monkeypatch) -> None:
    screen = _screen(Anchor(row=38, col=4))
    dismissed = _capture_dismiss(monkeypatch, screen)

    screen.action_cancel()
    screen.action_cancel()

    assert len(dismissed) == 1
    assert dismissed[0].text is None
    assert dismissed[0].action is HistoryAction.NONE
    assert dismissed[0].entries == HISTORY


def test_remove_entry_updates_session_and_list(monkeypatch) -> None:
    screen = _screen()
    options = _OptionsStub()
    monkeypatch.setattr(screen, "_highlighted_index", lambda: 0)
    monkeypatch.setattr(screen, "query_one", lambda *args, **kwargs: options)
    dismissed = _capture_dismiss(monkeypatch, screen)

    screen.action_remove_entry()
    screen.action_cancel()

    assert options.removed == [0]
    assert dismissed[0].entries == ["old", "mid"]


def test_clear_entries_empties_history(monkeypatch) -> None:
    screen = _screen()
    options = _OptionsStub()
    monkeypatch.setattr(screen, "query_one", lambda *args, **kwargs: options)
    dismissed = _capture_dismiss(monkeypatch, screen)

    screen.action_clear_entries()
    screen.action_cancel()

    assert options.cleared is True
    assert dismissed[0].entries == []


def test_history_input_bindings() -> None:
    bindings = {binding.key: binding.action for binding in HistoryInput.BINDINGS}

    assert bindings["alt+h"] == "show_history"
    assert bindings["ctrl+down"] == "show_history"


def test_history_input_adopts_pick_result(monkeypatch) -> None:
    widget = HistoryInput(history_name="cmdline")
    widget.history = ["old", "mid", "new"]
    posted: list[object] = []
    monkeypatch.setattr(widget, "post_message", lambda message: posted.append(message) or True)

    widget.apply_pick(
        PickResult(text="mid", action=HistoryAction.ENTER, entries=["old", "mid"])
    )

    assert widget.history == ["old", "mid"]
    assert widget.value == "mid"
    assert widget.history_current == 0
    assert len(posted) == 1
    assert isinstance(posted[0], HistoryInput.Picked)


def test_history_input_cancel_keeps_value_but_adopts_list(monkeypatch) -> None:
    widget = HistoryInput("draft", history_name="cmdline")
    widget.history = ["a", "b"]
    posted: list[object] = []
    monkeypatch.setattr(widget, "post_message", lambda message: posted.append(message) or True)

    widget.apply_pick(PickResult(entries=["a"]))

    assert widget.history == ["a"]
    assert widget.value == "draft"
    assert posted == []


def test_history_input_remember_saves(monkeypatch) -> None:
    saved: list[tuple[str, list[str]]] = []
    store = SimpleNamespace(save=lambda name, entries: saved.append((name, list(entries))))
    widget = HistoryInput(history_name="find", store=store)  # type: ignore[arg-type]

    widget.remember("*.py")
    widget.remember("*.py")
    widget.remember("  ")

    assert widget.history == ["*.py"]
    assert saved[-1] == ("find", ["*.py"])


def test_history_input_remember_drops_duplicates() -> None:
    widget = HistoryInput(history_name="cmdline")
    widget.history = ["a", "b"]

    widget.remember("a")

    assert widget.history == ["a", "b"]


def test_history_input_clear_all_is_persisted() -> None:
    backend = MemoryConfigBackend({"x": {"0": "a", "1": "b"}})
    store = HistoryStore(backend)
    widget = HistoryInput(history_name="x", store=store)
    widget.history = store.load("x")
    session = start_session(widget.history, Anchor(row=10, col=4), 0, (40, 80))

    session.clear()
    session.cancel()
    widget.apply_pick(session.finish())
    widget.save_history()

    assert widget.history == []
    assert store.load("x") == []
    assert backend.collections() == []
