"""Core pipeline: patterns, buffering, stats, prompts, directives and file writes."""
