"""Prompt construction for detected errors."""

from __future__ import annotations

from .models import ErrorRecord

PLACEHOLDERS = ("${type}", "${severity}", "${timestamp}", "${context}")


def build_default_prompt(record: ErrorRecord) -> str:
    """Build the built-in error analysis prompt."""
    return (
        "\n#ERROR_ANALYSIS_REQUEST\n\n"
        "Error Context:\n"
        f"type: {record.type}\n"
        f"severity: {record.severity}\n"
        f"timestamp: {record.timestamp}\n\n"
        "Error and Context:\n"
        f"{record.context}\n\n"
        "Please provide:\n"
        "1. Root Cause Analysis\n"
        "2. File Location Analysis\n"
        "3. Suggested Fixes (using #auto-ai format)\n"
        "4. Prevention Suggestions\n"
    )


def render_template(template: str, record: ErrorRecord) -> str:
    """Substitute the first occurrence of each placeholder, literally."""
    values = (record.type, record.severity, record.timestamp, record.context)
    out = template
    for token, value in zip(PLACEHOLDERS, values):
        out = out.replace(token, value, 1)
    return out


def format_error_prompt(record: ErrorRecord, template: str | None = None) -> str:
    """Render a prompt from a custom template, or the built-in one."""
    if template:
        return render_template(template, record)
    return build_default_prompt(record)
