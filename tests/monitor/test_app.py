from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from error_monitor.core.config import MonitorConfig
from error_monitor.monitor import ErrorMonitor


async def _wait_for(predicate, timeout: float = 2.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.01)


@pytest.mark.asyncio
async def test_both_loops_run_and_report_on_stop(tmp_path: Path, clipboard, notifier, write_log) -> None:
    log = tmp_path / "app.log"
    log.write_text("", encoding="utf-8")
    config = MonitorConfig(log_path=log, check_interval_ms=10, use_file_watcher=False)
    monitor = ErrorMonitor(config, clipboard=clipboard, notifier=notifier, clipboard_interval=0.01)
    monitor.log_monitor.echo = None

    await monitor.start()
    assert monitor.log_monitor.mode == "polling"

    write_log(log, ["ReferenceError: y is not defined"])
    await _wait_for(lambda: bool(clipboard.writes))
    assert "type: javascript" in clipboard.text

    clipboard.text = "#auto-ai replace\n/src/fix.js\nconst y = 1;"
    await _wait_for(lambda: (tmp_path / "src" / "fix.js").exists())

    report = await monitor.stop()

    assert (tmp_path / "src" / "fix.js").read_text(encoding="utf-8") == "const y = 1;"
    assert report.total_errors == 1
    assert report.errors_by_severity == {"critical": 1}
    assert report.most_frequent[0].type == "javascript"


@pytest.mark.asyncio
async def test_run_until_stops_on_event(tmp_path: Path, clipboard, notifier) -> None:
    config = MonitorConfig(log_path=tmp_path / "app.log", use_file_watcher=False)
    monitor = ErrorMonitor(config, clipboard=clipboard, notifier=notifier)
    stop = asyncio.Event()

    task = asyncio.create_task(monitor.run_until(stop))
    await asyncio.sleep(0.05)
    stop.set()
    report = await asyncio.wait_for(task, timeout=2.0)

    assert report.total_errors == 0


@pytest.mark.asyncio
async def test_stop_without_start_returns_empty_report(tmp_path: Path, clipboard, notifier) -> None:
    monitor = ErrorMonitor(MonitorConfig(log_path=tmp_path / "app.log"), clipboard=clipboard, notifier=notifier)
    report = await monitor.stop()
    assert report.total_errors == 0
