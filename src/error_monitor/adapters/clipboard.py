"""System clipboard access via pyperclip."""

from __future__ import annotations

import asyncio

import pyperclip


class ClipboardError(RuntimeError):
    """Clipboard could not be read or written."""


class SystemClipboard:
    """OS clipboard; blocking pyperclip calls run in a worker thread."""

    async def read(self) -> str:
        try:
            text = await asyncio.to_thread(pyperclip.paste)
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(f"Clipboard read failed: {exc}") from exc
        return text or ""

    async def write(self, text: str) -> None:
        try:
            await asyncio.to_thread(pyperclip.copy, text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(f"Clipboard write failed: {exc}") from exc
