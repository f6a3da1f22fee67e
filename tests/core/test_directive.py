from __future__ import annotations

import pytest

from error_monitor.core.directive import parse_directive
from error_monitor.core.errors import DirectiveFormatError


def test_non_directive_text_returns_none() -> None:
    assert parse_directive("just some copied text") is None
    assert parse_directive(" #auto-ai\n/a\nb") is None


def test_command_defaults_to_replace() -> None:
    d = parse_directive("#auto-ai\n/out/file.txt\nhello world")
    assert d is not None
    assert d.command == "replace"
    assert d.target_path == "/out/file.txt"
    assert d.content == "hello world"


def test_append_command_and_multiline_content() -> None:
    d = parse_directive("#auto-ai append\n  src/a.js  \nline 1\n\nline 3\n")
    assert d.command == "append"
    assert d.target_path == "src/a.js"
    assert d.content == "line 1\n\nline 3\n"


def test_unknown_command_is_forwarded_verbatim() -> None:
    d = parse_directive("#auto-ai apend\n/a.txt\nx")
    assert d.command == "apend"


def test_header_split_on_any_whitespace() -> None:
    d = parse_directive("#auto-ai\tappend  \n/a.txt\nx")
    assert d.command == "append"


def test_two_lines_is_a_format_error() -> None:
    with pytest.raises(DirectiveFormatError, match="Invalid #auto-ai format"):
        parse_directive("#auto-ai replace\n/out/file.txt")
