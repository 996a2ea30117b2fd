"""Proportional timeline of upcoming events.

The layout is computed as plain data (`TimelineLayout`) so the panel only has
to turn rows into markup. Each event is put in a time-scale bucket which
decides how its bar is filled and how its distance is labelled.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from countdown.data import Event
from countdown.urgency import Band, classify

SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

MIN_ROWS = 3
MAX_ROWS = 8
# title, axis, blank lines and the overflow/footer rows around the bars
ROW_CHROME = 6

MIN_BAR_WIDTH = 10
MAX_BAR_WIDTH = 40
LABEL_WIDTH = 12
MIN_NAME_WIDTH = 8
MAX_NAME_WIDTH = 24
ELLIPSIS = "..."


class Bucket(Enum):
    SUB_DAY = "sub-day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    MULTI_YEAR = "multi-year"


@dataclass(frozen=True)
class TimelineRow:
    index: int          # position in the full event collection
    name: str           # already truncated
    bucket: Bucket
    fill: int
    bar_width: int
    label: str
    band: Band
    selected: bool = False


@dataclass
class TimelineLayout:
    rows: list[TimelineRow] = field(default_factory=list)
    overflow: int = 0
    bar_width: int = MIN_BAR_WIDTH
    name_width: int = MIN_NAME_WIDTH

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def overflow_text(self) -> str:
        if self.overflow <= 0:
            return ""
        noun = "event" if self.overflow == 1 else "events"
        return f"+{self.overflow} more {noun}"


def row_budget(height: int) -> int:
    """How many event rows fit in `height` lines, clamped to [3, 8]."""
    return max(MIN_ROWS, min(MAX_ROWS, height - ROW_CHROME))


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def bucket_for(seconds_until: int) -> Bucket:
    days = seconds_until // SECONDS_PER_DAY
    if days == 0:
        return Bucket.SUB_DAY
    if days <= 7:
        return Bucket.WEEK
    if days <= 30:
        return Bucket.MONTH
    if days <= 365:
        return Bucket.YEAR
    return Bucket.MULTI_YEAR


def bucket_fraction(bucket: Bucket, seconds_until: int) -> float:
    """Position of the event inside its bucket, 0..1."""
    days = seconds_until // SECONDS_PER_DAY
    if bucket is Bucket.SUB_DAY:
        return (seconds_until / SECONDS_PER_HOUR) / 24
    if bucket is Bucket.WEEK:
        return days / 7
    if bucket is Bucket.MONTH:
        return days / 30
    if bucket is Bucket.YEAR:
        return days / 365
    return 1.0


def bucket_label(bucket: Bucket, seconds_until: int) -> str:
    days = seconds_until // SECONDS_PER_DAY
    if bucket is Bucket.SUB_DAY:
        hours = seconds_until // SECONDS_PER_HOUR
        if hours == 0:
            return "< 1 hour"
        return _plural(hours, "hour")
    if bucket in (Bucket.WEEK, Bucket.MONTH):
        return _plural(days, "day")
    if bucket is Bucket.YEAR:
        return "~" + _plural(days // 30, "month")
    return "~" + _plural(days // 365, "year")


def bar_fill(fraction: float, bar_width: int) -> int:
    """Filled cells; never zero for a positive value, never past the bar."""
    fill = round(fraction * bar_width)
    if fraction > 0 and fill == 0:
        fill = 1
    return max(0, min(bar_width, fill))


def bar_width_for(width: int) -> int:
    return max(MIN_BAR_WIDTH, min(MAX_BAR_WIDTH, width // 3))


def name_width_for(width: int, bar_width: int) -> int:
    # marker, spaces and brackets take 6 columns
    room = width - bar_width - LABEL_WIDTH - 6
    return max(MIN_NAME_WIDTH, min(MAX_NAME_WIDTH, room))


def truncate(name: str, max_len: int) -> str:
    if len(name) <= max_len:
        return name
    if max_len <= len(ELLIPSIS):
        return name[:max_len]
    return name[: max_len - len(ELLIPSIS)] + ELLIPSIS


def layout_timeline(
    events: Sequence[Event],
    selected_index: int,
    now: int,
    width: int,
    budget: int,
) -> TimelineLayout:
    """Rows for the upcoming events, earliest first, capped at `budget`."""
    bar_width = bar_width_for(width)
    name_width = name_width_for(width, bar_width)
    layout = TimelineLayout(bar_width=bar_width, name_width=name_width)

    upcoming = [(i, e) for i, e in enumerate(events) if e.time > now]
    upcoming.sort(key=lambda pair: pair[1].time)
    if len(upcoming) > budget:
        layout.overflow = len(upcoming) - budget
        upcoming = upcoming[:budget]

    for index, event in upcoming:
        seconds_until = event.time - now
        bucket = bucket_for(seconds_until)
        layout.rows.append(TimelineRow(
            index=index,
            name=truncate(event.name, name_width),
            bucket=bucket,
            fill=bar_fill(bucket_fraction(bucket, seconds_until), bar_width),
            bar_width=bar_width,
            label=bucket_label(bucket, seconds_until),
            band=classify(event.time, now),
            selected=index == selected_index,
        ))
    return layout
