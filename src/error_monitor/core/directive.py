"""Parsing of #auto-ai clipboard directives.

Wire format::

    #auto-ai [command]
    /path/relative/to/the/log/dir
    <content, spanning the remaining lines>
"""

from __future__ import annotations

from .errors import DirectiveFormatError
from .models import DirectivePayload

DIRECTIVE_MARKER = "#auto-ai"
DEFAULT_COMMAND = "replace"
APPEND_COMMAND = "append"
KNOWN_COMMANDS = frozenset({DEFAULT_COMMAND, APPEND_COMMAND})


def is_directive(text: str) -> bool:
    return text.startswith(DIRECTIVE_MARKER)


def parse_directive(text: str) -> DirectivePayload | None:
    """Parse clipboard text. Returns None when it is not a directive."""
    if not is_directive(text):
        return None

    lines = text.split("\n")
    if len(lines) < 3:
        raise DirectiveFormatError(
            "Invalid #auto-ai format. Expected: directive, path, and content"
        )

    header = lines[0].split()
    command = header[1] if len(header) > 1 else DEFAULT_COMMAND
    return DirectivePayload(
        command=command,
        target_path=lines[1].strip(),
        content="\n".join(lines[2:]),
    )
