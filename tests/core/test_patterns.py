from __future__ import annotations

import json
import re
from pathlib import Path

import pytest

from error_monitor.core.errors import ConfigurationError
from error_monitor.core.models import PatternRule, PatternSpec
from error_monitor.core.patterns import (
    compile_rule,
    default_pattern_rules,
    find_first_error,
    load_pattern_rules,
    match_line,
    parse_flags,
)


def _rule(pattern: str, type_: str, severity: str = "high") -> PatternRule:
    return PatternRule(matcher=re.compile(pattern), type=type_, severity=severity)


@pytest.mark.parametrize(
    ("line", "expected_type"),
    [
        ("src/a.ts(3,5): error TS2322: Type 'x' is not assignable", "typescript"),
        ("npm ERR! code ELIFECYCLE", "npm"),
        ("TypeError: x is not a function", "javascript"),
        ("Uncaught ReferenceError: foo is not defined", "javascript"),
        ("Exception: boom", "general"),
        ("build Failed: 3 errors", "general"),
        ("WARNING: deprecated flag", "warning"),
    ],
)
def test_default_rules_classify_common_lines(line: str, expected_type: str) -> None:
    rule = match_line(line, default_pattern_rules())
    assert rule is not None
    assert rule.type == expected_type


def test_match_line_returns_first_rule_in_list_order() -> None:
    rules = [_rule("boom", "first"), _rule("bo+m", "second")]
    assert match_line("boom happened", rules).type == "first"
    assert match_line("boom happened", list(reversed(rules))).type == "second"


def test_typeerror_matches_javascript_before_general() -> None:
    # "TypeError:" also contains "Error:", but the javascript rule comes first
    rule = match_line("TypeError: x is not a function", default_pattern_rules())
    assert (rule.type, rule.severity) == ("javascript", "critical")


def test_match_line_none_when_nothing_matches() -> None:
    assert match_line("all good", default_pattern_rules()) is None


def test_match_line_is_idempotent() -> None:
    rules = default_pattern_rules()
    line = "npm ERR! missing script"
    assert [match_line(line, rules).type for _ in range(3)] == ["npm", "npm", "npm"]


def test_find_first_error_uses_earliest_line() -> None:
    buffer = ["ok", "warning: slow", "TypeError: bad", "npm ERR! nope"]
    match = find_first_error(buffer, default_pattern_rules())
    assert match is not None
    assert match.buffer_index == 1
    assert match.type == "warning"
    assert match.line == "warning: slow"


def test_find_first_error_none_for_clean_buffer() -> None:
    assert find_first_error(["a", "b", ""], default_pattern_rules()) is None


def test_parse_flags_defaults_to_ignore_case() -> None:
    assert parse_flags(None) == re.IGNORECASE
    assert parse_flags("") == re.NOFLAG
    assert parse_flags("gim") == re.IGNORECASE | re.MULTILINE


def test_parse_flags_rejects_unknown_letter() -> None:
    with pytest.raises(ValueError, match="Unsupported regex flag"):
        parse_flags("x")


def test_compile_rule_case_sensitive_when_flags_empty() -> None:
    rule = compile_rule(PatternSpec(pattern="FAIL", type="custom", severity="low", flags=""))
    assert match_line("FAIL here", [rule]) is rule
    assert match_line("fail here", [rule]) is None


@pytest.mark.asyncio
async def test_load_pattern_rules_replaces_builtins(tmp_path: Path) -> None:
    path = tmp_path / "patterns.json"
    path.write_text(
        json.dumps([{"pattern": "CUSTOM_FAIL", "type": "custom", "severity": "low"}]),
        encoding="utf-8",
    )

    rules = await load_pattern_rules(path)

    assert len(rules) == 1
    assert match_line("custom_fail happened", rules).type == "custom"
    assert match_line("TypeError: x", rules) is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        "[]",
        '[{"pattern": "x"}]',
        '[{"pattern": "(", "type": "t", "severity": "low"}]',
        '[{"pattern": "x", "type": "t", "severity": "low", "flags": "q"}]',
    ],
)
async def test_load_pattern_rules_invalid_file(tmp_path: Path, payload: str) -> None:
    path = tmp_path / "patterns.json"
    path.write_text(payload, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        await load_pattern_rules(path)


@pytest.mark.asyncio
async def test_load_pattern_rules_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Cannot read patterns file"):
        await load_pattern_rules(tmp_path / "missing.json")
