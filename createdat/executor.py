from __future__ import annotations

import contextlib
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path

from tqdm import tqdm

from .errors import TargetFolderError
from .planner import RenamePlan, RenamePlanEntry

MAX_RETRIES = 3
RETRY_DELAY = 0.1  # seconds


@dataclass
class Report:
    """Outcome of one run: counts, per-entry failures, and the preview listing."""
    succeeded: int = 0
    completed: list[tuple[RenamePlanEntry, Path]] = field(default_factory=list)
    failed: list[tuple[RenamePlanEntry, OSError]] = field(default_factory=list)
    listing: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def preview_line(entry: RenamePlanEntry) -> str:
    """One "old  ->  new" line of the preview listing."""
    return f"{entry.source.path.name}  ->  {entry.final_name}"


def transfer(src: Path, dest: Path, move: bool) -> None:
    """
    Copy (preserving file times) or move src to dest, never overwriting dest.

    A partly written dest is removed again when the copy or move fails.
    """
    if dest.exists():
        raise FileExistsError(f"{dest} already exists")
    try:
        if move:
            shutil.move(str(src), str(dest))
        else:
            shutil.copy2(src, dest)
    except OSError:
        with contextlib.suppress(OSError):
            dest.unlink(missing_ok=True)
        raise


def transfer_with_retry(src: Path, dest: Path, move: bool,
                        retries: int = MAX_RETRIES, delay: float = RETRY_DELAY) -> None:
    """Retry transient errors a few times; re-raise the last one."""
    attempt = 0
    while True:
        try:
            transfer(src, dest, move)
            return
        except FileExistsError:
            raise
        except OSError:
            attempt += 1
            if attempt >= retries:
                raise
            time.sleep(delay)


def execute(
    plan: RenamePlan,
    source_folder: Path,
    target_folder: Path,
    preview: bool,
    move: bool = False,
    progress: bool = False,
    retries: int = MAX_RETRIES,
) -> Report:
    """
    Apply a finalized plan, or just list it when preview is True.

    Entries are processed in plan order; relative source paths are taken
    relative to source_folder. A failing entry is recorded in
    Report.failed and the batch continues. Failing to create target_folder
    raises TargetFolderError, which is fatal for the run.
    """
    report = Report()

    if preview:
        report.listing = [preview_line(e) for e in plan]
        return report

    created = not target_folder.exists()
    try:
        target_folder.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise TargetFolderError(f"Could not create target folder {target_folder}: {e}") from e

    it = plan
    if progress:
        it = tqdm(plan, desc="Move" if move else "Copy", unit="file")

    for entry in it:
        src = entry.source.path
        if not src.is_absolute():
            src = source_folder / src
        dest = target_folder / entry.final_name
        try:
            transfer_with_retry(src, dest, move, retries=retries)
        except OSError as e:
            report.failed.append((entry, e))
            continue
        report.succeeded += 1
        report.completed.append((entry, dest))

    # rmdir only removes an empty folder; anything left behind stays
    if created and report.succeeded == 0:
        with contextlib.suppress(OSError):
            target_folder.rmdir()

    return report
