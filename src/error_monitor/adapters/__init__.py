"""Thin I/O adapters: clipboard, desktop notifications, file watching.

The monitors depend only on the protocols below, so tests can inject fakes.
"""

from __future__ import annotations

from typing import Protocol

from .clipboard import ClipboardError, SystemClipboard
from .notifier import DesktopNotifier, LoggingNotifier, default_notifier
from .watcher import FileWatch, watch_file


class Clipboard(Protocol):
    """Async clipboard interface."""

    async def read(self) -> str:
        ...

    async def write(self, text: str) -> None:
        ...


class Notifier(Protocol):
    """Async user notification interface."""

    async def notify(self, title: str, message: str) -> None:
        ...


__all__ = [
    "Clipboard",
    "ClipboardError",
    "DesktopNotifier",
    "FileWatch",
    "LoggingNotifier",
    "Notifier",
    "SystemClipboard",
    "default_notifier",
    "watch_file",
]
