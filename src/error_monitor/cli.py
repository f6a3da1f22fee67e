"""Command-line entrypoint.

Run:
    error-monitor --log ./logs/dev.log -i 2000 -b 10 -a 30
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import signal
import sys
from collections.abc import Sequence
from pathlib import Path

from error_monitor.core.config import load_monitor_config
from error_monitor.core.errors import ConfigurationError
from error_monitor.core.models import ErrorReport
from error_monitor.monitor import ErrorMonitor

LOGGER = logging.getLogger(__name__)

LOG_LEVEL_ENV = "ERROR_MONITOR_LOG_LEVEL"

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}

EPILOG = """\
examples:
  error-monitor --log /var/log/app.log
  error-monitor -l ./logs/dev.log -i 2000 -b 10 -a 30
  error-monitor --prompt path/to/custom-prompt.txt
  error-monitor --patterns path/to/patterns.json

directive format (copy to the clipboard to write a file next to the log):
  #auto-ai [replace|append]
  /relative/path/to/file
  <file content>
"""

DIRECTIVE_HINT = """\
Tip: ask your assistant to prefix generated files with a directive, e.g.

  #auto-ai replace
  /src/test/random.js
  // content here

Copying that text writes the file relative to the log's directory."""


def _configure_logging() -> None:
    """Configure logging on stderr; stdout carries prompts and the final report."""
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_bool(s: str) -> bool:
    value = s.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise argparse.ArgumentTypeError("expected true or false")


def _positive_int(s: str) -> int:
    try:
        value = int(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid integer: {s!r}") from e
    if value < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return value


def _non_negative_int(s: str) -> int:
    try:
        value = int(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid integer: {s!r}") from e
    if value < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="error-monitor",
        description="Real-time error detection and AI-assisted debugging.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-l", "--log", dest="log_path", type=Path, default=None,
                   help="Path to log file (default: ./app.log)")
    p.add_argument("-p", "--prompt", dest="prompt_path", default=None,
                   help="Custom error analysis prompt template file")
    p.add_argument("-i", "--interval", dest="interval_ms", type=_positive_int, default=1000,
                   help="Check interval in milliseconds (default: 1000)")
    p.add_argument("-b", "--context-before", type=_non_negative_int, default=5,
                   help="Lines of context before error (default: 5)")
    p.add_argument("-a", "--context-after", type=_non_negative_int, default=20,
                   help="Lines of context after error (default: 20)")
    p.add_argument("--patterns", dest="patterns_path", default=None,
                   help="Path to custom error patterns JSON file")
    p.add_argument("-w", "--watch", type=_parse_bool, default=True, metavar="BOOL",
                   help="Use file watcher instead of polling (default: true)")
    return p


def _install_signal_handlers(stop: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except (NotImplementedError, RuntimeError):  # pragma: no cover - Windows
            signal.signal(sig, lambda *_: loop.call_soon_threadsafe(stop.set))


async def _run(args: argparse.Namespace) -> ErrorReport:
    log_path = args.log_path or Path.cwd() / "app.log"
    config = await load_monitor_config(
        log_path,
        prompt_path=args.prompt_path,
        patterns_path=args.patterns_path,
        check_interval_ms=args.interval_ms,
        context_before=args.context_before,
        context_after=args.context_after,
        use_file_watcher=args.watch,
    )

    stop = asyncio.Event()
    _install_signal_handlers(stop)

    monitor = ErrorMonitor(config)
    print(DIRECTIVE_HINT)
    return await monitor.run_until(stop)


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entrypoint: run until SIGINT/SIGTERM, then print the error report."""
    args = build_parser().parse_args(argv)
    _configure_logging()

    try:
        report = asyncio.run(_run(args))
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)

    print("\nFinal Error Report:")
    print(report.model_dump_json(by_alias=True, indent=2))


if __name__ == "__main__":
    main()
