from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from .config import FormatConfig
from .errors import PlanError
from .naming import format_stem, validate_pattern
from .timestamps import resolve


@dataclass(frozen=True)
class SourceEntry:
    path: Path
    extension: str
    creation_time: datetime | None

    @property
    def stem(self) -> str:
        """File name without its extension (empty for dotfiles like .gitignore)."""
        if self.extension:
            return self.path.name[: -(len(self.extension) + 1)]
        return self.path.name


@dataclass(frozen=True)
class RenamePlanEntry:
    source: SourceEntry
    candidate_stem: str
    final_name: str


class RenamePlan(Sequence[RenamePlanEntry]):
    """Ordered, collision-free list of plan entries (enumeration order)."""

    def __init__(self, entries: Iterable[RenamePlanEntry]):
        self._entries = tuple(entries)
        seen: set[str] = set()
        for e in self._entries:
            if e.final_name in seen:
                raise PlanError(f"Duplicate target name in plan: {e.final_name}")
            seen.add(e.final_name)

    def __getitem__(self, index):
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RenamePlanEntry]:
        return iter(self._entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, RenamePlan):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"RenamePlan({list(self._entries)!r})"

    def mapping(self) -> dict[Path, str]:
        """Source path -> final file name."""
        return {e.source.path: e.final_name for e in self._entries}


def split_extension(name: str) -> str:
    """
    Extension of a file name, without the dot.

    A dotfile with no other dot (".gitignore") is all extension: "gitignore".
    """
    if name.startswith(".") and "." not in name[1:]:
        return name[1:]
    return Path(name).suffix[1:]


def make_entry(path: Path) -> SourceEntry:
    """Read one file into a SourceEntry, resolving its creation timestamp."""
    return SourceEntry(path=path, extension=split_extension(path.name), creation_time=resolve(path))


def scan_source(folder: Path) -> list[SourceEntry]:
    """Return the regular files directly inside folder, sorted by name."""
    try:
        paths = sorted((p for p in folder.iterdir() if p.is_file()), key=lambda p: p.name)
    except OSError as e:
        raise PlanError(f"Could not read source folder {folder}: {e}") from e
    return [make_entry(p) for p in paths]


def with_extension(stem: str, extension: str) -> str:
    """Join stem and extension, leaving out the dot when there is no extension."""
    return f"{stem}.{extension}" if extension else stem


def claim_name(stem: str, extension: str, claimed: set[str]) -> str:
    """Return stem.ext, or stem-<k>.ext with the smallest free k, and add it to claimed."""
    name = with_extension(stem, extension)
    k = 1
    while name in claimed:
        name = with_extension(f"{stem}-{k}", extension)
        k += 1
    claimed.add(name)
    return name


def plan(entries: Sequence[SourceEntry], config: FormatConfig, now: datetime | None = None) -> RenamePlan:
    """
    Build the rename plan for entries, in the order given.

    Files whose timestamp could not be resolved all get the same run-start time
    (`now`, defaulting to the time of this call). Raises FormatError for a bad
    date pattern and PlanError if no file survives filtering.
    """
    validate_pattern(config.date_pattern)
    selected = [e for e in entries if config.accepts(e.extension)]
    if not selected:
        if config.all_files:
            raise PlanError("No files found")
        if config.extension_filter is not None:
            exts = ", ".join(sorted(config.extension_filter))
            raise PlanError(f"No files found with extension(s): {exts}")
        raise PlanError("No images found. (Use '-a' or '--all' to rename any files found)")

    if now is None:
        now = datetime.now()

    candidates = [
        (e, format_stem(e.creation_time or now, config, e.stem))
        for e in selected
    ]

    # Single ordered pass: each name depends on those claimed before it.
    claimed: set[str] = set()
    out = []
    for e, stem in candidates:
        out.append(RenamePlanEntry(source=e, candidate_stem=stem,
                                   final_name=claim_name(stem, e.extension, claimed)))
    return RenamePlan(out)
