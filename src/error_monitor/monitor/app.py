"""Orchestrator owning the log monitor and the clipboard monitor."""

from __future__ import annotations

import asyncio
import logging

from ..adapters import Clipboard, Notifier, SystemClipboard, default_notifier
from ..core.config import MonitorConfig
from ..core.file_writer import base_dir_for
from ..core.models import ErrorReport
from .clipboard_monitor import CLIPBOARD_POLL_INTERVAL, ClipboardMonitor
from .log_monitor import LogMonitor, WatchFactory

logger = logging.getLogger(__name__)


class ErrorMonitor:
    """Runs both loops on the current event loop and produces the final report."""

    def __init__(
        self,
        config: MonitorConfig,
        *,
        clipboard: Clipboard | None = None,
        notifier: Notifier | None = None,
        watch_factory: WatchFactory | None = None,
        clipboard_interval: float = CLIPBOARD_POLL_INTERVAL,
    ) -> None:
        self.config = config
        clipboard = clipboard or SystemClipboard()
        notifier = notifier or default_notifier()

        self.log_monitor = LogMonitor(
            config,
            clipboard=clipboard,
            notifier=notifier,
            watch_factory=watch_factory,
        )
        self.clipboard_monitor = ClipboardMonitor(
            base_dir_for(config.log_path),
            clipboard=clipboard,
            notifier=notifier,
            interval=clipboard_interval,
        )
        self._started = False

    async def start(self) -> None:
        logger.info("Error Monitor starting")
        logger.info("Log file: %s", self.config.log_path)
        logger.info("Check interval: %sms", self.config.check_interval_ms)
        logger.info(
            "Context: %s lines before, %s lines after",
            self.config.context_before,
            self.config.context_after,
        )
        logger.info("Prompt: %s", "custom template" if self.config.prompt_template else "default")
        logger.info("Patterns: %s rule(s)", len(self.config.patterns))

        await self.log_monitor.start()
        await self.clipboard_monitor.start()
        self._started = True
        logger.info("Monitor is active and watching for errors (%s mode)", self.log_monitor.mode)

    async def stop(self) -> ErrorReport:
        """Stop both loops without waiting for in-flight cycles; return the report."""
        if self._started:
            logger.info("Shutting down Error Monitor")
            await self.log_monitor.stop()
            await self.clipboard_monitor.stop()
            self._started = False
        return self.report()

    async def run_until(self, stop_event: asyncio.Event) -> ErrorReport:
        await self.start()
        try:
            await stop_event.wait()
        finally:
            report = await self.stop()
        return report

    def report(self) -> ErrorReport:
        return self.log_monitor.report()
