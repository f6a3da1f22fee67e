"""Log error monitor with clipboard prompt handoff and #auto-ai directives."""

__version__ = "0.1.0"
