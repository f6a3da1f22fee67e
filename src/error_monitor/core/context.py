"""Context window extraction around a matched line."""

from __future__ import annotations

from collections.abc import Sequence


def extract_context(buffer: Sequence[str], match_index: int, before: int, after: int) -> str:
    """Join ``before`` lines above and ``after`` lines below the match, clamped to the buffer."""
    if before < 0 or after < 0:
        raise ValueError("before/after must be >= 0")
    start = max(0, match_index - before)
    end = min(len(buffer), match_index + after + 1)
    return "\n".join(buffer[start:end])
