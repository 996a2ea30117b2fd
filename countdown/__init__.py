"""Countdown — live terminal countdowns, timeline and 'on this day' facts."""

__version__ = "1.0.0"
