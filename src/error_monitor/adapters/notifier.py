"""Desktop notifications through the platform's command-line notifier."""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
import sys

logger = logging.getLogger(__name__)

NOTIFY_ENV = "ERROR_MONITOR_NOTIFY"
NOTIFY_TIMEOUT_S = 5.0


def _osascript_quote(s: str) -> str:
    return '"' + s.replace("\\", "\\\\").replace('"', '\\"') + '"'


def notification_command(title: str, message: str, *, platform: str | None = None) -> list[str] | None:
    """Return the notifier argv for this platform, or None if unsupported."""
    platform = platform or sys.platform
    if platform == "darwin":
        script = (
            f"display notification {_osascript_quote(message)} "
            f"with title {_osascript_quote(title)} sound name \"default\""
        )
        return ["osascript", "-e", script]
    if platform.startswith("linux"):
        return ["notify-send", "--app-name=error-monitor", title, message]
    return None


class LoggingNotifier:
    """Headless notifier: writes notifications to the log."""

    async def notify(self, title: str, message: str) -> None:
        logger.info("[notify] %s: %s", title, message)


class DesktopNotifier:
    """Show a desktop notification; failures are logged, never raised."""

    def __init__(self, *, platform: str | None = None) -> None:
        self.platform = platform or sys.platform

    async def notify(self, title: str, message: str) -> None:
        logger.info("[notify] %s: %s", title, message)
        argv = notification_command(title, message, platform=self.platform)
        if argv is None or shutil.which(argv[0]) is None:
            logger.debug("No desktop notifier available on %s", self.platform)
            return

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.warning("Desktop notification failed: %s", e)
            return

        try:
            _, stderr = await asyncio.wait_for(proc.communicate(), timeout=NOTIFY_TIMEOUT_S)
        except asyncio.TimeoutError:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
            await proc.wait()
            logger.warning("Desktop notification timed out after %ss", NOTIFY_TIMEOUT_S)
            return

        if proc.returncode != 0:
            logger.warning(
                "Desktop notification exited with %s: %s",
                proc.returncode,
                stderr.decode("utf-8", errors="replace").strip(),
            )


def default_notifier() -> DesktopNotifier | LoggingNotifier:
    """Desktop notifier unless disabled with ERROR_MONITOR_NOTIFY=0."""
    if os.getenv(NOTIFY_ENV, "1").strip().lower() in ("0", "false", "no", "off"):
        return LoggingNotifier()
    return DesktopNotifier()
