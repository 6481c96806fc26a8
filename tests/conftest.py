from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from createdat.planner import SourceEntry, split_extension

TAKEN = datetime(2024, 7, 17, 14, 30, 0)


def touch(folder: Path, name: str, data: bytes = b"x") -> Path:
    path = folder / name
    path.write_bytes(data)
    return path


def entry(path: Path, ts: datetime | None = TAKEN) -> SourceEntry:
    return SourceEntry(path=path, extension=split_extension(path.name), creation_time=ts)


@pytest.fixture
def fixed_time(monkeypatch):
    """Make every scanned file resolve to TAKEN."""
    monkeypatch.setattr("createdat.planner.resolve", lambda path: TAKEN)
    return TAKEN
