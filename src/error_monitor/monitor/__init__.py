"""Long-running monitor loops."""

from __future__ import annotations

from .app import ErrorMonitor
from .clipboard_monitor import CLIPBOARD_POLL_INTERVAL, ClipboardMonitor
from .log_monitor import LogMonitor

__all__ = [
    "CLIPBOARD_POLL_INTERVAL",
    "ClipboardMonitor",
    "ErrorMonitor",
    "LogMonitor",
]
