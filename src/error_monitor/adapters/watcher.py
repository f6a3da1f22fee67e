"""File change subscription on top of watchdog."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)

JOIN_TIMEOUT_S = 2.0


class _TargetFileHandler(FileSystemEventHandler):
    """Forward modifications of a single file to the event loop."""

    def __init__(self, target: Path, callback: Callable[[], None], loop: asyncio.AbstractEventLoop) -> None:
        super().__init__()
        self.target = target
        self.callback = callback
        self.loop = loop

    def _is_target(self, event: FileSystemEvent) -> bool:
        if event.is_directory:
            return False
        return Path(os.fsdecode(event.src_path)).resolve() == self.target

    def on_modified(self, event: FileSystemEvent) -> None:
        if self._is_target(event) and not self.loop.is_closed():
            # Observer thread -> loop thread; the callback only ever runs on the loop.
            self.loop.call_soon_threadsafe(self.callback)


class FileWatch:
    """Handle for an active subscription."""

    def __init__(self, observer: Observer, path: Path) -> None:
        self._observer = observer
        self.path = path

    @property
    def active(self) -> bool:
        return self._observer.is_alive()

    def close(self) -> None:
        if not self._observer.is_alive():
            return
        self._observer.stop()
        self._observer.join(timeout=JOIN_TIMEOUT_S)
        logger.debug("Stopped watching %s", self.path)


def watch_file(
    path: str | Path,
    callback: Callable[[], None],
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> FileWatch:
    """Call ``callback`` on the event loop whenever ``path`` is modified.

    Raises FileNotFoundError if the file does not exist and OSError if the
    platform watcher cannot be started.
    """
    target = Path(path).resolve()
    if not target.is_file():
        raise FileNotFoundError(f"Log file not found: {target}")

    loop = loop or asyncio.get_running_loop()
    observer = Observer()
    observer.schedule(_TargetFileHandler(target, callback, loop), str(target.parent), recursive=False)
    observer.daemon = True
    observer.start()
    logger.debug("Watching %s", target)
    return FileWatch(observer, target)
