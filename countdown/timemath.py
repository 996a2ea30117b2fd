"""Countdown arithmetic: fixed-ratio decomposition, formatting and date input.

All functions take explicit epoch-second timestamps (`event_time`, `now`) so
they can be called from the 1-second tick and from tests alike. Years are a
fixed 365.25 days; no calendar or DST awareness beyond that ratio.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

SECONDS_PER_YEAR = 31557600
SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60

INPUT_FORMAT_SHORT = "%Y-%m-%d"
INPUT_FORMAT_LONG = "%Y-%m-%d %H:%M:%S"
# length of a rendered INPUT_FORMAT_LONG value, e.g. "2025-12-31 18:30:00"
LONG_INPUT_LENGTH = 19
# two-digit month, day and time fields only
INPUT_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}( \d{2}:\d{2}:\d{2})?")

# (label, maximum) per unit for the verbose block view
UNIT_MAXIMA = [
    ("Years", 10),
    ("Days", 365),
    ("Hours", 24),
    ("Minutes", 60),
    ("Seconds", 60),
]


@dataclass(frozen=True)
class Decomposition:
    is_past: bool
    years: int
    days: int
    hours: int
    minutes: int
    seconds: int

    @property
    def total_seconds(self) -> int:
        return (
            self.years * SECONDS_PER_YEAR
            + self.days * SECONDS_PER_DAY
            + self.hours * SECONDS_PER_HOUR
            + self.minutes * SECONDS_PER_MINUTE
            + self.seconds
        )

    @property
    def day_seconds(self) -> int:
        """Seconds left over below one day."""
        return self.hours * SECONDS_PER_HOUR + self.minutes * SECONDS_PER_MINUTE + self.seconds

    def values(self) -> list[int]:
        return [self.years, self.days, self.hours, self.minutes, self.seconds]


@dataclass(frozen=True)
class UnitRow:
    label: str
    value: int
    maximum: int
    fill: int
    bar_width: int


@dataclass(frozen=True)
class Statistics:
    seconds: int
    minutes: float
    hours: float
    days: float
    years: float

    def rows(self) -> list[tuple[str, str]]:
        """Label/value pairs with thousands separators, ready to print."""
        return [
            ("Total seconds:", format_large_number(self.seconds)),
            ("Total minutes:", format_large_float(self.minutes, 2)),
            ("Total hours:", format_large_float(self.hours, 2)),
            ("Total days:", format_large_float(self.days, 2)),
            ("Total years:", format_large_float(self.years, 4)),
        ]


def decompose(event_time: int, now: int) -> Decomposition:
    """Split |now - event_time| into years/days/hours/minutes/seconds."""
    diff = abs(int(now) - int(event_time))
    years, rest = divmod(diff, SECONDS_PER_YEAR)
    days, rest = divmod(rest, SECONDS_PER_DAY)
    hours, rest = divmod(rest, SECONDS_PER_HOUR)
    minutes, seconds = divmod(rest, SECONDS_PER_MINUTE)
    return Decomposition(
        is_past=event_time < now,
        years=years,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
    )


def format_compact(d: Decomposition) -> str:
    """Short form such as '2d 3h 4m 5s', leading zero units dropped."""
    parts = list(zip(d.values(), "ydhms"))
    start = 0
    while start < len(parts) - 1 and parts[start][0] == 0:
        start += 1
    text = " ".join(f"{value}{unit}" for value, unit in parts[start:])
    if d.is_past:
        text += " ago"
    return text


def countdown_text(event_time: int, now: int) -> str:
    return format_compact(decompose(event_time, now))


def bar_width_for(width: int) -> int:
    return max(10, min(30, width - 20))


def verbose_rows(d: Decomposition, width: int) -> list[UnitRow]:
    """One row per unit with a block bar; the years row only when non-zero."""
    bar_width = bar_width_for(width)
    rows = []
    for (label, maximum), value in zip(UNIT_MAXIMA, d.values()):
        if label == "Years" and value == 0:
            continue
        fill = round(value / maximum * bar_width)
        if value > 0 and fill == 0:
            fill = 1
        rows.append(UnitRow(label, value, maximum, min(fill, bar_width), bar_width))
    return rows


def progress_fill(value: float, maximum: float, width: int) -> int:
    """Number of filled cells for `value` out of `maximum` on a `width` bar."""
    if maximum <= 0:
        maximum = 1
    value = max(0.0, min(value, maximum))
    return min(width, int(value / maximum * width))


def day_progress(d: Decomposition) -> float:
    """Fraction of a day covered by the sub-day remainder."""
    return d.day_seconds / SECONDS_PER_DAY


def statistics(event_time: int, now: int) -> Statistics:
    diff = abs(int(now) - int(event_time))
    return Statistics(
        seconds=diff,
        minutes=diff / SECONDS_PER_MINUTE,
        hours=diff / SECONDS_PER_HOUR,
        days=diff / SECONDS_PER_DAY,
        years=diff / SECONDS_PER_YEAR,
    )


def format_large_number(n: int) -> str:
    return f"{n:,}"


def format_large_float(value: float, precision: int) -> str:
    return f"{value:,.{precision}f}"


# ── Date input ───────────────────────────────────────────

def parse_date_input(text: str) -> datetime:
    """Parse 'YYYY-MM-DD' (local midnight) or 'YYYY-MM-DD HH:MM:SS'.

    The layout is picked by length. Raises ValueError when the text does not
    match the chosen layout.
    """
    if not INPUT_PATTERN.fullmatch(text):
        raise ValueError(f"date {text!r} does not match YYYY-MM-DD [HH:MM:SS]")
    layout = INPUT_FORMAT_LONG if len(text) >= LONG_INPUT_LENGTH else INPUT_FORMAT_SHORT
    return datetime.strptime(text, layout)


def to_timestamp(dt: datetime) -> int:
    """Epoch seconds for a naive local datetime."""
    return int(dt.timestamp())


def format_input_value(ts: int) -> str:
    """Value put into the date field when editing an event."""
    return datetime.fromtimestamp(ts).strftime(INPUT_FORMAT_LONG)


def _hour12(dt: datetime) -> int:
    return dt.hour % 12 or 12


def format_preview(dt: datetime) -> str:
    """e.g. 'Wed, Dec 31, 2025 at 6:30 PM'."""
    return f"{dt:%a, %b} {dt.day}, {dt.year} at {_hour12(dt)}:{dt:%M %p}"


def date_preview(text: str, now: float) -> tuple[str, bool]:
    """Live preview for the date field: (text, is_valid)."""
    if not text:
        return "", False
    try:
        dt = parse_date_input(text)
    except ValueError:
        return "Invalid date format", False
    preview = format_preview(dt)
    if dt.timestamp() < now:
        preview += " (past event)"
    return preview, True


def format_long_date(ts: int) -> str:
    """e.g. 'Monday, January 2, 2006'."""
    dt = datetime.fromtimestamp(ts)
    return f"{dt:%A, %B} {dt.day}, {dt.year}"


def format_clock(ts: int) -> str:
    """e.g. '3:04:05 PM CET'."""
    dt = datetime.fromtimestamp(ts).astimezone()
    return f"{_hour12(dt)}:{dt:%M:%S %p} {dt.tzname() or ''}".rstrip()
