"""Pytest global setup for isolated histpick test state.

This prevents tests from touching the user's real history file.
"""

from __future__ import annotations

import atexit
import os
from pathlib import Path
import shutil
import tempfile


_TEST_ROOT = Path(tempfile.mkdtemp(prefix="histpick-pytest-state-"))
_TEST_HOME = _TEST_ROOT / "home"
_TEST_STATE_DIR = _TEST_ROOT / "state"

_TEST_HOME.mkdir(parents=True, exist_ok=True)
_TEST_STATE_DIR.mkdir(parents=True, exist_ok=True)

# Force test process (and imported histpick modules) to use isolated paths.
os.environ["HISTPICK_HOME"] = str(_TEST_HOME)
os.environ["HISTPICK_STATE_DIR"] = str(_TEST_STATE_DIR)
os.environ.pop("HISTPICK_HISTORY_FILE", None)
os.environ.pop("HISTPICK_HISTORY_MAX", None)
os.environ.pop("HISTPICK_DISPLAY_CHARSET", None)


@atexit.register
def _cleanup_test_state() -> None:
    shutil.rmtree(_TEST_ROOT, ignore_errors=True)
