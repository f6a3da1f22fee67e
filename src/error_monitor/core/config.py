"""Monitor configuration: defaults, env overrides and startup loading."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

import aiofiles

from .errors import ConfigurationError
from .models import PatternRule
from .patterns import default_pattern_rules, load_pattern_rules

MAX_BUFFER_LINES_ENV = "ERROR_MONITOR_MAX_BUFFER_LINES"
MAX_STATS_ENTRIES_ENV = "ERROR_MONITOR_MAX_STATS_ENTRIES"


@dataclass(frozen=True, slots=True)
class MonitorConfig:
    """Immutable settings snapshot, built once at startup."""

    log_path: Path = field(default_factory=lambda: Path.cwd() / "app.log")
    max_buffer_lines: int = 200
    check_interval_ms: int = 1000
    context_before: int = 5
    context_after: int = 20
    max_errors_per_type: int = 100
    prompt_template: str | None = None
    patterns: tuple[PatternRule, ...] = field(default_factory=default_pattern_rules)
    use_file_watcher: bool = True

    def __post_init__(self) -> None:
        if self.max_buffer_lines < 1:
            raise ValueError("max_buffer_lines must be >= 1")
        if self.check_interval_ms < 1:
            raise ValueError("check_interval_ms must be >= 1")
        if self.context_before < 0 or self.context_after < 0:
            raise ValueError("context_before/context_after must be >= 0")
        if self.max_errors_per_type < 1:
            raise ValueError("max_errors_per_type must be >= 1")
        if not self.patterns:
            raise ValueError("at least one pattern rule is required")

    @property
    def check_interval(self) -> float:
        """Polling interval in seconds."""
        return self.check_interval_ms / 1000


def _env_int(name: str) -> int | None:
    env = os.getenv(name)
    if env is None or env == "":
        return None
    try:
        value = int(env)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < 1:
        raise ValueError(f"{name} must be >= 1")
    return value


def resolve_monitor_config(cfg: MonitorConfig | None = None) -> MonitorConfig:
    """Return config with optional env overrides applied."""
    if cfg is None:
        cfg = MonitorConfig()

    overrides: dict[str, int] = {}
    buffer_lines = _env_int(MAX_BUFFER_LINES_ENV)
    if buffer_lines is not None:
        overrides["max_buffer_lines"] = buffer_lines
    stats_entries = _env_int(MAX_STATS_ENTRIES_ENV)
    if stats_entries is not None:
        overrides["max_errors_per_type"] = stats_entries

    if not overrides:
        return cfg
    return replace(cfg, **overrides)


async def load_prompt_template(path: str | Path) -> str:
    """Read a custom prompt template file."""
    try:
        async with aiofiles.open(path, encoding="utf-8") as f:
            return await f.read()
    except OSError as e:
        raise ConfigurationError(f"Cannot read prompt template {path}: {e}") from e


async def load_monitor_config(
    log_path: str | Path,
    *,
    prompt_path: str | Path | None = None,
    patterns_path: str | Path | None = None,
    check_interval_ms: int = 1000,
    context_before: int = 5,
    context_after: int = 20,
    use_file_watcher: bool = True,
) -> MonitorConfig:
    """Build the startup config, loading optional template and pattern files.

    Raises ConfigurationError for unreadable or invalid files and for invalid
    numeric settings (including env overrides).
    """
    template = await load_prompt_template(prompt_path) if prompt_path else None
    patterns = await load_pattern_rules(patterns_path) if patterns_path else default_pattern_rules()

    try:
        cfg = MonitorConfig(
            log_path=Path(log_path),
            check_interval_ms=check_interval_ms,
            context_before=context_before,
            context_after=context_after,
            prompt_template=template,
            patterns=patterns,
            use_file_watcher=use_file_watcher,
        )
        return resolve_monitor_config(cfg)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
