"""
Creation timestamp lookup from filesystem metadata.

Strategies are tried in order; the first one returning a datetime wins:
  - birth_time    : st_birthtime (macOS, BSD, Windows)
  - modified_time : st_mtime, for filesystems that do not record creation time
If none succeeds the caller falls back to the run-start time.
"""
from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Sequence

from .errors import MetadataError

Strategy = Callable[[Path], Optional[datetime]]


def _stat(path: Path) -> os.stat_result:
    try:
        return path.stat()
    except OSError as e:
        raise MetadataError(f"Could not read metadata for {path}: {e}") from e


def birth_time(path: Path) -> datetime | None:
    """Creation time, or None where the platform does not record it."""
    ts = getattr(_stat(path), "st_birthtime", None)
    if not ts:
        return None
    return datetime.fromtimestamp(ts)


def modified_time(path: Path) -> datetime | None:
    """Last-modified time."""
    return datetime.fromtimestamp(_stat(path).st_mtime)


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (birth_time, modified_time)


def resolve(path: Path, strategies: Sequence[Strategy] = DEFAULT_STRATEGIES) -> datetime | None:
    """Return the first timestamp any strategy yields, or None if all fail."""
    for strategy in strategies:
        try:
            ts = strategy(path)
        except (MetadataError, OverflowError, ValueError):
            continue
        if ts is not None:
            return ts
    return None
