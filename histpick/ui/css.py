"""All CSS strings for the histpick UI."""

APP_CSS = """
Screen {
    background: #000000;
}

#title-bar {
    height: 1;
    background: #0a1a2a;
    color: #00d7d7;
    padding: 0 1;
    margin: 0 0 1 0;
    text-style: bold;
}

#inputs {
    height: auto;
    padding: 0 1;
}

#inputs Label {
    color: #cccccc;
    margin: 1 0 0 0;
}

HistoryInput {
    width: 100%;
    margin: 0 0 1 0;
}

#status {
    dock: bottom;
    height: 1;
    padding: 0 1;
    background: #050f15;
    color: #3a5a5a;
}
"""

HISTORY_PICKER_CSS = """
HistoryPickerScreen {
    align: left top;
    background: transparent;
}

#history-dialog {
    width: 24;
    height: 4;
    border: round #00d7d7;
    border-title-align: center;
    border-title-color: #00d7d7;
    background: #0a0a0a;
    padding: 0 1;
}

#history-list {
    width: 100%;
    height: 1fr;
    border: none;
    padding: 0;
    background: #0a0a0a;
}
"""
