from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from error_monitor.adapters import ClipboardError


class FakeClipboard:
    """In-memory clipboard with optional failure injection."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.writes: list[str] = []
        self.fail_read = False
        self.fail_write = False

    async def read(self) -> str:
        if self.fail_read:
            raise ClipboardError("clipboard unavailable")
        return self.text

    async def write(self, text: str) -> None:
        if self.fail_write:
            raise ClipboardError("clipboard unavailable")
        self.text = text
        self.writes.append(text)


class FakeNotifier:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    async def notify(self, title: str, message: str) -> None:
        self.sent.append((title, message))


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def write_log() -> Callable[[Path, list[str]], None]:
    def _write(path: Path, lines: list[str]) -> None:
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    return _write
