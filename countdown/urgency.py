"""Urgency bands used to color countdowns and timeline markers."""
from __future__ import annotations

from enum import Enum

from countdown.theme import DEFAULT_THEME, Theme

SECONDS_PER_DAY = 86400


class Band(Enum):
    """Seven urgency classes. The value is the tier, 6 being most urgent."""

    PAST = 0
    DISTANT = 1     # >= 30 days
    UPCOMING = 2    # [14, 30) days
    NEAR = 3        # [7, 14) days
    SOON = 4        # [3, 7) days, and exactly 1 day
    URGENT = 5      # (1, 3) days
    IMMINENT = 6    # < 1 day

    @property
    def tier(self) -> int:
        return self.value

    def color(self, theme: Theme = DEFAULT_THEME) -> str:
        return theme.urgency_color(self.value)


# (lower bound in days, band), checked from the top down
_THRESHOLDS = [
    (30, Band.DISTANT),
    (14, Band.UPCOMING),
    (7, Band.NEAR),
    (3, Band.SOON),
    (1, Band.URGENT),
]


def classify(event_time: int, now: int) -> Band:
    """Band for an event at `event_time` seen from `now` (both epoch seconds)."""
    if event_time < now:
        return Band.PAST
    days_until = (event_time - now) / SECONDS_PER_DAY
    if days_until == 1:
        return Band.SOON
    for lower, band in _THRESHOLDS:
        if days_until >= lower:
            return band
    return Band.IMMINENT


def urgency_color(event_time: int, now: int, theme: Theme = DEFAULT_THEME) -> str:
    return classify(event_time, now).color(theme)
