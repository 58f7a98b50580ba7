"""Textual UI: history picker overlay, history input widget, demo app."""

from .app import HistpickApp, cmd_demo

__all__ = ["HistpickApp", "cmd_demo"]
