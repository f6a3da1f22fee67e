"""Error pattern rules and first-match scanning."""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

import aiofiles
from pydantic import TypeAdapter, ValidationError

from .errors import ConfigurationError
from .models import ErrorMatch, PatternRule, PatternSpec

# JS-style flag letters accepted in pattern files; "g" and "y" are no-ops.
_FLAG_MAP: dict[str, re.RegexFlag] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": re.UNICODE,
    "g": re.NOFLAG,
    "y": re.NOFLAG,
}
DEFAULT_FLAGS = "i"

_PATTERN_LIST = TypeAdapter(list[PatternSpec])


def default_pattern_rules() -> tuple[PatternRule, ...]:
    """Built-in rules (first match wins, most specific first)."""
    return (
        PatternRule(re.compile(r"error TS\d+:", re.IGNORECASE), "typescript", "high"),
        PatternRule(re.compile(r"npm ERR!", re.IGNORECASE), "npm", "high"),
        PatternRule(
            re.compile(r"(?:TypeError|ReferenceError|SyntaxError|RangeError):", re.IGNORECASE),
            "javascript",
            "critical",
        ),
        PatternRule(re.compile(r"Error:|Exception:|Failed:", re.IGNORECASE), "general", "high"),
        PatternRule(re.compile(r"warning:", re.IGNORECASE), "warning", "low"),
    )


def parse_flags(flags: str | None) -> re.RegexFlag:
    """Translate a JS-style flag string into Python regex flags."""
    out = re.NOFLAG
    for ch in DEFAULT_FLAGS if flags is None else flags:
        try:
            out |= _FLAG_MAP[ch]
        except KeyError as e:
            allowed = "".join(sorted(_FLAG_MAP))
            raise ValueError(f"Unsupported regex flag '{ch}'. Allowed: {allowed}") from e
    return out


def compile_rule(spec: PatternSpec) -> PatternRule:
    """Compile a pattern spec into a PatternRule."""
    flags = parse_flags(spec.flags)
    try:
        matcher = re.compile(spec.pattern, flags)
    except re.error as e:
        raise ValueError(f"Invalid pattern {spec.pattern!r}: {e}") from e
    return PatternRule(matcher=matcher, type=spec.type, severity=spec.severity)


def parse_pattern_rules(raw: str) -> tuple[PatternRule, ...]:
    """Validate and compile a JSON array of pattern specs."""
    try:
        specs = _PATTERN_LIST.validate_json(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid patterns file: {e}") from e
    if not specs:
        raise ConfigurationError("Patterns file must contain at least one pattern")
    try:
        return tuple(compile_rule(s) for s in specs)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


async def load_pattern_rules(path: str | Path) -> tuple[PatternRule, ...]:
    """Load custom rules from a JSON file. They replace the built-in rules."""
    try:
        async with aiofiles.open(path, encoding="utf-8") as f:
            raw = await f.read()
    except OSError as e:
        raise ConfigurationError(f"Cannot read patterns file {path}: {e}") from e
    return parse_pattern_rules(raw)


def match_line(line: str, rules: Sequence[PatternRule]) -> PatternRule | None:
    """Return the first rule matching the line, or None."""
    for rule in rules:
        if rule.matcher.search(line):
            return rule
    return None


def find_first_error(buffer: Sequence[str], rules: Sequence[PatternRule]) -> ErrorMatch | None:
    """Scan the buffer top-down and return only the first match."""
    for index, line in enumerate(buffer):
        rule = match_line(line, rules)
        if rule is not None:
            return ErrorMatch(line=line, buffer_index=index, type=rule.type, severity=rule.severity)
    return None
