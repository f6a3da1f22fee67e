"""Rolling line buffer over the monitored log's content."""

from __future__ import annotations


class RollingBuffer:
    """Keeps the trailing ``max_lines`` lines of the latest full content.

    The buffer is rebuilt from scratch on every update; there is no diffing
    against the previous content.
    """

    def __init__(self, max_lines: int) -> None:
        if max_lines < 1:
            raise ValueError("max_lines must be >= 1")
        self.max_lines = max_lines
        self._lines: list[str] = []

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def update(self, content: str) -> list[str]:
        """Replace the buffer with the last ``max_lines`` lines of ``content``."""
        self._lines = content.split("\n")[-self.max_lines :]
        return list(self._lines)
