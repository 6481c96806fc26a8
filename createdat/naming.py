"""
Turn a timestamp plus a FormatConfig into a filename stem.

Separator convention:
  - date and time are joined by config.time_separator ("_", or " " with --space)
  - time parts are joined by "-": 14-30-05 (24-hour) or 02-30-05-PM (12-hour)
  - date/time, original name and custom name are joined by "-"

    photo.jpg @ 2024-07-17 14:30:05  ->  photo-2024-07-17_14-30-05
"""
from __future__ import annotations

import re
from datetime import datetime
from typing import Callable

from .config import FormatConfig, Position, TimeStyle
from .errors import FormatError

NAME_SEPARATOR = "-"
TIME_24H_PATTERN = "%H-%M-%S"
TIME_12H_PATTERN = "%I-%M-%S-%p"

MONTHS = ["January", "February", "March", "April", "May", "June", "July",
          "August", "September", "October", "November", "December"]
WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

# English names regardless of the current locale.
TOKENS: dict[str, Callable[[datetime], str]] = {
    "Y": lambda dt: f"{dt.year:04d}",
    "y": lambda dt: f"{dt.year % 100:02d}",
    "C": lambda dt: f"{dt.year // 100:02d}",
    "m": lambda dt: f"{dt.month:02d}",
    "b": lambda dt: MONTHS[dt.month - 1][:3],
    "h": lambda dt: MONTHS[dt.month - 1][:3],
    "B": lambda dt: MONTHS[dt.month - 1],
    "d": lambda dt: f"{dt.day:02d}",
    "e": lambda dt: f"{dt.day:>2d}",
    "j": lambda dt: f"{dt.timetuple().tm_yday:03d}",
    "a": lambda dt: WEEKDAYS[dt.weekday()][:3],
    "A": lambda dt: WEEKDAYS[dt.weekday()],
    "u": lambda dt: str(dt.isoweekday()),
    "w": lambda dt: str(dt.isoweekday() % 7),
    "H": lambda dt: f"{dt.hour:02d}",
    "k": lambda dt: f"{dt.hour:>2d}",
    "I": lambda dt: f"{(dt.hour % 12) or 12:02d}",
    "l": lambda dt: f"{(dt.hour % 12) or 12:>2d}",
    "M": lambda dt: f"{dt.minute:02d}",
    "S": lambda dt: f"{dt.second:02d}",
    "p": lambda dt: "AM" if dt.hour < 12 else "PM",
    "P": lambda dt: "am" if dt.hour < 12 else "pm",
    "F": lambda dt: f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}",
    "T": lambda dt: f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}",
    "D": lambda dt: f"{dt.month:02d}/{dt.day:02d}/{dt.year % 100:02d}",
    "R": lambda dt: f"{dt.hour:02d}:{dt.minute:02d}",
    "s": lambda dt: str(int(dt.timestamp())),
    "%": lambda dt: "%",
}

# Characters that are not allowed in file names on common filesystems.
ILLEGAL_RE = re.compile(r'[/\\?<>:*|"\x00-\x1f\x7f]')


def _tokenize(pattern: str) -> list[tuple[bool, str]]:
    """Split a pattern into (is_token, text) pieces, raising FormatError on bad tokens."""
    pieces: list[tuple[bool, str]] = []
    literal = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch != "%":
            literal.append(ch)
            i += 1
            continue
        if i + 1 >= len(pattern):
            raise FormatError(f"Date pattern {pattern!r} ends with a lone '%'")
        token = pattern[i + 1]
        if token not in TOKENS:
            raise FormatError(f"Unsupported token '%{token}' in date pattern {pattern!r}")
        if literal:
            pieces.append((False, "".join(literal)))
            literal = []
        pieces.append((True, token))
        i += 2
    if literal:
        pieces.append((False, "".join(literal)))
    return pieces


def validate_pattern(pattern: str) -> None:
    """Raise FormatError if the pattern cannot be rendered."""
    if not pattern:
        raise FormatError("Date pattern is empty")
    _tokenize(pattern)


def render_pattern(timestamp: datetime, pattern: str) -> str:
    """Render a strftime-style pattern using the fixed token table."""
    validate_pattern(pattern)
    return "".join(TOKENS[text](timestamp) if is_token else text
                   for is_token, text in _tokenize(pattern))


def sanitize(name: str) -> str:
    """Drop characters that are illegal in file names and trim surrounding whitespace."""
    return ILLEGAL_RE.sub("", name).strip()


def render_datetime(timestamp: datetime, config: FormatConfig) -> str:
    """Date (and time, depending on config.time_style) part of the stem."""
    rendered = render_pattern(timestamp, config.date_pattern)
    if config.time_style is TimeStyle.TWENTY_FOUR_HOUR:
        rendered += config.time_separator + render_pattern(timestamp, TIME_24H_PATTERN)
    elif config.time_style is TimeStyle.TWELVE_HOUR:
        rendered += config.time_separator + render_pattern(timestamp, TIME_12H_PATTERN)
    rendered = sanitize(rendered)
    if not rendered:
        raise FormatError(f"Date pattern {config.date_pattern!r} renders to an empty name")
    return rendered


def format_stem(timestamp: datetime, config: FormatConfig, original_stem: str) -> str:
    """
    Build the candidate stem for one file (no collision handling).

    Layout, parts joined by "-" and empty parts dropped:
      suffix (default) : [custom] original date [custom if custom_name_after_date]
      prefix (--front) : date [custom] original [custom if custom_name_after_date]
    """
    date_part = render_datetime(timestamp, config)
    original = original_stem if config.keep_original_name else ""
    custom = sanitize(config.custom_name or "")

    if config.position is Position.PREFIX:
        parts = [date_part, original]
        if custom and not config.custom_name_after_date:
            parts.insert(1, custom)
    else:
        parts = [original, date_part]
        if custom and not config.custom_name_after_date:
            parts.insert(0, custom)
    if custom and config.custom_name_after_date:
        parts.append(custom)

    return NAME_SEPARATOR.join(p for p in parts if p)
