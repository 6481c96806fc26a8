from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

DEFAULT_DATE_PATTERN = "%Y-%m-%d"
DEFAULT_TARGET_FOLDER = "renamed"

# Default filter when neither --all nor --extension is given (lowercase, no dot).
IMAGE_EXTENSIONS = frozenset({
    "jpg", "jpeg", "jpe", "png", "gif", "bmp", "tif", "tiff", "webp",
    "heic", "heif", "avif", "ico", "svg",
    "nef", "cr2", "cr3", "arw", "dng", "orf", "raf", "rw2",
})


class TimeStyle(Enum):
    NONE = "none"
    TWELVE_HOUR = "12h"
    TWENTY_FOUR_HOUR = "24h"


class Position(Enum):
    PREFIX = "prefix"
    SUFFIX = "suffix"


@dataclass(frozen=True)
class FormatConfig:
    """Formatting options for one run. Built once from the command line."""
    date_pattern: str = DEFAULT_DATE_PATTERN
    time_style: TimeStyle = TimeStyle.TWENTY_FOUR_HOUR
    position: Position = Position.SUFFIX
    keep_original_name: bool = True
    custom_name: str | None = None
    custom_name_after_date: bool = False
    extension_filter: frozenset[str] | None = None
    all_files: bool = False
    time_separator: str = "_"

    def accepts(self, extension: str) -> bool:
        """Return True if a file with this extension survives filtering."""
        if self.all_files:
            return True
        allowed = self.extension_filter if self.extension_filter is not None else IMAGE_EXTENSIONS
        return extension.lower() in allowed


def parse_extensions(values: Iterable[str]) -> frozenset[str] | None:
    """
    Normalize --extension values ("jpg,PNG", ".heic") into a lowercase set.
    Returns None when nothing was given.
    """
    exts = set()
    for value in values:
        for part in value.split(","):
            part = part.strip().lstrip(".").lower()
            if part:
                exts.add(part)
    return frozenset(exts) if exts else None
