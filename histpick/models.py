"""Core data types."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class HistoryAction(str, Enum):
    NONE = "none"
    ENTER = "enter"
    VIEW = "view"
    EDIT = "edit"


class SessionState(str, Enum):
    INITIALIZING = "initializing"
    AWAITING_INPUT = "awaiting_input"
    CONFIRMED = "confirmed"
    SECONDARY_ACTION = "secondary_action"
    CANCELLED = "cancelled"
    RECONCILING = "reconciling"
    DONE = "done"


@dataclass(frozen=True)
class Anchor:
    row: int
    col: int


@dataclass(frozen=True)
class Geometry:
    row: int
    col: int
    height: int
    width: int
    above: bool = False        # overlay placed above the anchor


@dataclass
class DisplayEntry:
    text: str
    width: int = 0             # display columns
    payload: object = None     # original value for non-text codecs


@dataclass
class PickResult:
    text: Optional[str] = None
    action: HistoryAction = HistoryAction.NONE
    entries: list = field(default_factory=list)

    @property
    def chosen(self) -> bool:
        return self.action is not HistoryAction.NONE and self.text is not None
