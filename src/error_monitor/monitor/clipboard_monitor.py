"""Clipboard monitor loop: applies #auto-ai directives to files."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from ..adapters import Clipboard, ClipboardError, Notifier
from ..core.directive import APPEND_COMMAND, KNOWN_COMMANDS, is_directive, parse_directive
from ..core.errors import DirectiveFormatError
from ..core.file_writer import write_file

logger = logging.getLogger(__name__)

# Fixed period; independent of the log monitor's --interval.
CLIPBOARD_POLL_INTERVAL = 1.0


class ClipboardMonitor:
    """Polls the clipboard and executes new #auto-ai directives.

    Ticks run one after another inside a single task, so two directive writes
    never overlap.
    """

    def __init__(
        self,
        base_dir: str | Path,
        *,
        clipboard: Clipboard,
        notifier: Notifier,
        interval: float = CLIPBOARD_POLL_INTERVAL,
    ) -> None:
        self.base_dir = Path(base_dir)
        self.clipboard = clipboard
        self.notifier = notifier
        self.interval = interval
        self.last_content = ""
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        self._task = asyncio.create_task(self._run(), name="clipboard-monitor")
        logger.info("Clipboard monitoring started (every %ss)", self.interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        await asyncio.gather(self._task, return_exceptions=True)
        self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.tick()
            except Exception:
                logger.exception("Error processing clipboard content")

    async def tick(self) -> bool:
        """Check the clipboard once. Returns True if a directive was applied."""
        try:
            content = await self.clipboard.read()
        except ClipboardError as e:
            logger.error("Error reading clipboard: %s", e)
            return False

        if not content or content == self.last_content:
            return False
        self.last_content = content

        if not is_directive(content):
            return False

        logger.info("Processing #auto-ai directive")
        return await self.apply(content)

    async def apply(self, content: str) -> bool:
        """Parse and execute one directive, notifying on success or failure."""
        try:
            directive = parse_directive(content)
        except DirectiveFormatError as e:
            logger.error("Error processing clipboard content: %s", e)
            await self.notifier.notify("Error", str(e))
            return False
        if directive is None:
            return False

        if directive.command not in KNOWN_COMMANDS:
            logger.warning("Unknown directive command %r; replacing file contents", directive.command)
        logger.info("Command: %s, target path: %s", directive.command, directive.target_path)

        try:
            await write_file(self.base_dir, directive.target_path, directive.content, directive.command)
        except (OSError, ValueError) as e:
            logger.error("Error writing file %s: %s", directive.target_path, e)
            await self.notifier.notify("Error", str(e))
            return False

        verb = "appended" if directive.command == APPEND_COMMAND else "written"
        await self.notifier.notify("File Operation Success", f"File {verb}: {directive.target_path}")
        return True
