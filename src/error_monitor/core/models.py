"""Core data models for the error monitor."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


@dataclass(frozen=True, slots=True)
class PatternRule:
    """Compiled error pattern (regex + type tag + severity)."""

    matcher: re.Pattern[str]
    type: str
    severity: str


@dataclass(frozen=True, slots=True)
class ErrorMatch:
    """First line in the buffer that matched a rule."""

    line: str
    buffer_index: int
    type: str
    severity: str


@dataclass(frozen=True, slots=True)
class ErrorRecord:
    """Input for the prompt formatter."""

    type: str
    severity: str
    timestamp: str  # ISO-8601, UTC
    context: str


@dataclass(slots=True)
class StatsEntry:
    """Occurrence counters for one (type, line) key."""

    count: int
    first_seen: datetime
    last_seen: datetime
    type: str
    severity: str


@dataclass(frozen=True, slots=True)
class DirectivePayload:
    """Parsed #auto-ai clipboard directive."""

    command: str  # forwarded verbatim; only "append" is special
    target_path: str
    content: str


class PatternSpec(BaseModel):
    """One entry of a custom patterns JSON file."""

    pattern: str = Field(description="Regular expression source.")
    type: str = Field(description="Error type tag, e.g. 'typescript'.")
    severity: str = Field(description="Severity tag, e.g. 'low', 'high', 'critical'.")
    flags: str | None = Field(default=None, description="JS-style regex flags, default 'i'.")


class _ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrequentError(_ReportModel):
    type: str
    count: int
    first_seen: datetime
    last_seen: datetime


class ErrorReport(_ReportModel):
    """Summary of the stats ledger, printed on shutdown."""

    total_errors: int = 0
    errors_by_type: dict[str, int] = Field(default_factory=dict)
    errors_by_severity: dict[str, int] = Field(default_factory=dict)
    most_frequent: list[FrequentError] = Field(default_factory=list)
