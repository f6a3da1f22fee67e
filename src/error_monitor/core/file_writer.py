"""Directive file writes, resolved under the log file's directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePath

import aiofiles
import aiofiles.os

from .directive import APPEND_COMMAND

logger = logging.getLogger(__name__)

TEXT_ENCODING = "utf-8"
_LEADING_SEPARATORS = tuple({"/", os.sep})


def base_dir_for(log_path: str | Path) -> Path:
    """Return the directory containing the monitored log file."""
    return Path(log_path).resolve().parent


def resolve_target_path(base_dir: str | Path, target_path: str) -> Path:
    """Resolve a directive path under ``base_dir``.

    A single leading separator is stripped, so "/src/a.js" means
    "<base_dir>/src/a.js". The remainder is never treated as absolute:
    "//out/a.js" also lands in "<base_dir>/out/a.js". Paths that escape
    ``base_dir`` or cannot be resolved raise ``ValueError``.
    """
    base = Path(base_dir).resolve()
    rel = target_path[1:] if target_path.startswith(_LEADING_SEPARATORS) else target_path
    pure = PurePath(rel)
    parts = pure.parts[1:] if pure.anchor else pure.parts
    if not parts:
        raise ValueError("Target path is empty")
    try:
        p = base.joinpath(*parts).resolve()
    except RuntimeError as e:
        # Symlink loops raise RuntimeError on Python < 3.13.
        raise ValueError(f"Cannot resolve {target_path}: {e}") from e
    if base not in p.parents:
        raise ValueError(f"Path escapes base dir: {target_path}")
    return p


async def write_file(base_dir: str | Path, target_path: str, content: str, command: str) -> Path:
    """Write (or append, for ``command == "append"``) content to the resolved path."""
    path = resolve_target_path(base_dir, target_path)
    logger.debug("Writing %d chars to %s (command=%s)", len(content), path, command)

    await aiofiles.os.makedirs(path.parent, exist_ok=True)

    mode = "a" if command == APPEND_COMMAND else "w"
    async with aiofiles.open(path, mode, encoding=TEXT_ENCODING, newline="") as f:
        await f.write(content)

    logger.info("%s %s", "Appended to" if mode == "a" else "Wrote", path)
    return path
