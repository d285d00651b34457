"""Text and date formatting applied to resolved field values."""

from __future__ import annotations

import calendar
import re
from collections.abc import Callable
from datetime import UTC, datetime

ContentFilter = Callable[[str], str]

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_LINE_BREAK = re.compile(r"(\r\n|\n\r|\n|\r)")
_STORED_DATE_FORMATS = (
    "%Y%m%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%H:%M:%S",
    "%H:%M",
)


def paragraph_wrap(text: str) -> str:
    """Wrap blank-line separated blocks in ``<p>`` and turn lone newlines into ``<br />``."""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n").strip()
    if not normalized:
        return ""
    blocks = [block.strip() for block in _PARAGRAPH_BREAK.split(normalized) if block.strip()]
    paragraphs = [block.replace("\n", "<br />\n") for block in blocks]
    return "".join(f"<p>{paragraph}</p>\n" for paragraph in paragraphs)


def line_breaks(text: str) -> str:
    """Insert ``<br />`` before every line break, keeping the break itself."""
    return _LINE_BREAK.sub(r"<br />\1", text)


def apply_new_lines(value: str, mode: str | None) -> str:
    """Apply a textarea ``new_lines`` setting (``wpautop`` or ``br``)."""
    if mode == "wpautop":
        return paragraph_wrap(value)
    if mode == "br":
        return line_breaks(value)
    return value


def build_content_filter(*filters: ContentFilter) -> ContentFilter:
    """Compose filters into one pipeline applied left to right."""

    def _pipeline(text: str) -> str:
        for content_filter in filters:
            text = content_filter(text)
        return text

    return _pipeline


default_content_filter: ContentFilter = build_content_filter(str.strip, paragraph_wrap)


def parse_stored_date(value: str) -> datetime | None:
    """Parse a stored date, time or datetime value; None when no known format matches."""
    candidate = value.strip()
    for date_format in _STORED_DATE_FORMATS:
        try:
            return datetime.strptime(candidate, date_format)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        return None


def render_date(value: str, return_format: str) -> str:
    """Re-render a stored date through a PHP-style date format string.

    Values that cannot be parsed are returned unchanged.
    """
    moment = parse_stored_date(value)
    if moment is None:
        return value
    return format_php_date(moment, return_format)


def format_php_date(moment: datetime, pattern: str) -> str:
    """Render ``moment`` using PHP ``date()`` format characters."""
    rendered: list[str] = []
    escaped = False
    for char in pattern:
        if escaped:
            rendered.append(char)
            escaped = False
            continue
        if char == "\\":
            escaped = True
            continue
        token = _PHP_DATE_TOKENS.get(char)
        rendered.append(token(moment) if token else char)
    return "".join(rendered)


def _ordinal_suffix(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def _hour12(moment: datetime) -> int:
    return moment.hour % 12 or 12


def _epoch_seconds(moment: datetime) -> str:
    aware = moment if moment.tzinfo else moment.replace(tzinfo=UTC)
    return str(int(aware.timestamp()))


_PHP_DATE_TOKENS: dict[str, Callable[[datetime], str]] = {
    "d": lambda m: f"{m.day:02d}",
    "D": lambda m: m.strftime("%a"),
    "j": lambda m: str(m.day),
    "l": lambda m: m.strftime("%A"),
    "N": lambda m: str(m.isoweekday()),
    "S": lambda m: _ordinal_suffix(m.day),
    "w": lambda m: str(m.isoweekday() % 7),
    "z": lambda m: str(m.timetuple().tm_yday - 1),
    "W": lambda m: f"{m.isocalendar()[1]:02d}",
    "F": lambda m: m.strftime("%B"),
    "M": lambda m: m.strftime("%b"),
    "m": lambda m: f"{m.month:02d}",
    "n": lambda m: str(m.month),
    "t": lambda m: str(calendar.monthrange(m.year, m.month)[1]),
    "L": lambda m: "1" if calendar.isleap(m.year) else "0",
    "Y": lambda m: f"{m.year:04d}",
    "y": lambda m: f"{m.year % 100:02d}",
    "a": lambda m: "am" if m.hour < 12 else "pm",
    "A": lambda m: "AM" if m.hour < 12 else "PM",
    "g": lambda m: str(_hour12(m)),
    "G": lambda m: str(m.hour),
    "h": lambda m: f"{_hour12(m):02d}",
    "H": lambda m: f"{m.hour:02d}",
    "i": lambda m: f"{m.minute:02d}",
    "s": lambda m: f"{m.second:02d}",
    "u": lambda m: f"{m.microsecond:06d}",
    "v": lambda m: f"{m.microsecond // 1000:03d}",
    "U": _epoch_seconds,
    "c": lambda m: m.isoformat(),
}
