"""Error types raised by the monitor."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Startup configuration could not be loaded (fatal)."""


class DirectiveFormatError(ValueError):
    """Clipboard text starts with the directive marker but is malformed."""
