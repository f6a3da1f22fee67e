"""Log monitor loop: change detection -> first error -> prompt on clipboard."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import aiofiles

from ..adapters import Clipboard, ClipboardError, FileWatch, Notifier, watch_file
from ..core.buffer import RollingBuffer
from ..core.config import MonitorConfig
from ..core.context import extract_context
from ..core.models import ErrorMatch, ErrorRecord, ErrorReport
from ..core.patterns import find_first_error
from ..core.prompt import format_error_prompt
from ..core.stats import ErrorStatsLedger

logger = logging.getLogger(__name__)

WatchFactory = Callable[[Path, Callable[[], None]], FileWatch]


class LogMonitor:
    """Watches (or polls) one log file and hands the first error off as a prompt.

    At most one processing cycle runs at a time; triggers that arrive while a
    cycle is in flight are dropped, not queued. The stats ledger is owned
    exclusively by this loop.
    """

    def __init__(
        self,
        config: MonitorConfig,
        *,
        clipboard: Clipboard,
        notifier: Notifier,
        watch_factory: WatchFactory | None = None,
        echo: Callable[[str], None] | None = print,
    ) -> None:
        self.config = config
        self.clipboard = clipboard
        self.notifier = notifier
        self.watch_factory = watch_factory or (lambda path, cb: watch_file(path, cb))
        self.echo = echo

        self.buffer = RollingBuffer(config.max_buffer_lines)
        self.stats = ErrorStatsLedger(config.max_errors_per_type)
        self.last_content = ""
        self.mode: str | None = None

        self._processing = False
        self._watch: FileWatch | None = None
        self._poll_task: asyncio.Task[None] | None = None
        self._cycle_tasks: set[asyncio.Task[bool]] = set()

    @property
    def processing(self) -> bool:
        return self._processing

    async def start(self) -> None:
        """Subscribe to change events, falling back to polling."""
        if self.config.use_file_watcher:
            try:
                self._watch = self.watch_factory(self.config.log_path, self.trigger)
            except OSError as e:
                logger.warning("Cannot watch %s (%s); falling back to polling", self.config.log_path, e)
            else:
                self.mode = "watch"
                logger.info("Watching %s for changes", self.config.log_path)
                return

        self.mode = "polling"
        self._poll_task = asyncio.create_task(self._poll_loop(), name="log-monitor-poll")
        logger.info("Polling %s every %sms", self.config.log_path, self.config.check_interval_ms)

    async def stop(self) -> None:
        """Close the subscription and stop polling. In-flight cycles are abandoned."""
        if self._watch is not None:
            await asyncio.to_thread(self._watch.close)
            self._watch = None
        tasks = [t for t in (self._poll_task, *self._cycle_tasks) if t is not None]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._poll_task = None

    def trigger(self) -> None:
        """Start a cycle unless one is in flight (called on the loop thread)."""
        if self._processing:
            logger.debug("Cycle in flight; dropping trigger")
            return
        task = asyncio.create_task(self.process_log_file())
        self._cycle_tasks.add(task)
        task.add_done_callback(self._cycle_tasks.discard)

    async def _poll_loop(self) -> None:
        while True:
            await asyncio.sleep(self.config.check_interval)
            self.trigger()

    async def _read_log(self) -> str | None:
        try:
            async with aiofiles.open(self.config.log_path, encoding="utf-8", errors="replace") as f:
                return await f.read()
        except OSError as e:
            logger.error("Error reading log file: %s", e)
            return None

    async def process_log_file(self) -> bool:
        """Run one processing cycle. Returns False if dropped by the in-flight guard."""
        if self._processing:
            return False

        self._processing = True
        try:
            content = await self._read_log()
            if content is None or content == self.last_content:
                return True

            lines = self.buffer.update(content)
            match = find_first_error(lines, self.config.patterns)
            if match is not None:
                context = extract_context(
                    lines,
                    match.buffer_index,
                    self.config.context_before,
                    self.config.context_after,
                )
                await self.handle_error(match, context)
                self.stats.record(match)

            self.last_content = content
            return True
        except Exception:
            logger.exception("Error processing log file")
            return True
        finally:
            self._processing = False

    async def handle_error(self, match: ErrorMatch, context: str) -> str:
        """Format the prompt, put it on the clipboard and notify."""
        record = ErrorRecord(
            type=match.type,
            severity=match.severity,
            timestamp=datetime.now(UTC).isoformat(),
            context=context,
        )
        prompt = format_error_prompt(record, self.config.prompt_template)

        try:
            await self.clipboard.write(prompt)
        except (ClipboardError, OSError) as e:
            logger.error("Error copying prompt to clipboard: %s", e)
            return prompt

        await self.notifier.notify(
            f"Error Detected ({match.type})",
            "Error context copied to clipboard with AI prompt",
        )
        logger.info("%s error detected (%s); prompt copied to clipboard", match.type, match.severity)
        if self.echo is not None:
            rule = "-" * 50
            self.echo(f"\nError detected and copied to clipboard:\n{rule}\n{prompt}\n{rule}")
        return prompt

    def report(self) -> ErrorReport:
        return self.stats.report()
