"""'On this day' facts from the Wikimedia feed API.

The fetch runs once per process in a worker thread. Every failure mode
(network, timeout, HTTP status, bad payload) comes back as
`OnThisDayResult.error` instead of an exception.
"""
from __future__ import annotations

import logging
import textwrap
from dataclasses import dataclass, field
from datetime import date

import requests

log = logging.getLogger(__name__)

FEED_URL = "https://api.wikimedia.org/feed/v1/wikipedia/en/onthisday/selected/{month:02d}/{day:02d}"
USER_AGENT = "CountdownApp/1.0 (https://github.com/countdown)"
DEFAULT_TIMEOUT = 10.0

LINES_PER_FACT = 4
FACT_CHROME = 8
MIN_FACTS = 3


@dataclass(frozen=True)
class HistoricalFact:
    text: str
    year: int


@dataclass
class OnThisDayResult:
    facts: list[HistoricalFact] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def build_url(day: date) -> str:
    return FEED_URL.format(month=day.month, day=day.day)


def _parse_entries(entries) -> list[HistoricalFact]:
    if not isinstance(entries, list):
        raise ValueError("feed section is not a list")
    facts = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError(f"feed entry is not an object: {entry!r}")
        text = entry.get("text")
        year = entry.get("year")
        if not isinstance(text, str) or not isinstance(year, int):
            raise ValueError(f"feed entry lacks text/year: {entry!r}")
        facts.append(HistoricalFact(text=text, year=year))
    return facts


def parse_payload(data) -> list[HistoricalFact]:
    """Facts from a feed response, using 'events' when 'selected' is empty."""
    if not isinstance(data, dict):
        raise ValueError("feed response is not an object")
    facts = _parse_entries(data.get("selected") or [])
    if not facts:
        facts = _parse_entries(data.get("events") or [])
    return facts


def fetch_on_this_day(day: date | None = None, session=None, timeout: float = DEFAULT_TIMEOUT) -> OnThisDayResult:
    day = day or date.today()
    url = build_url(day)
    http = session or requests
    log.info("fetching %s", url)
    try:
        response = http.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
        response.raise_for_status()
        facts = parse_payload(response.json())
    except requests.RequestException as exc:
        log.warning("on-this-day request failed: %s", exc)
        return OnThisDayResult(error=str(exc))
    except ValueError as exc:
        # json decode errors are ValueErrors too
        log.warning("on-this-day response malformed: %s", exc)
        return OnThisDayResult(error=f"malformed response: {exc}")
    log.info("fetched %d facts", len(facts))
    return OnThisDayResult(facts=facts)


def max_facts(height: int) -> int:
    return max(MIN_FACTS, (height - FACT_CHROME) // LINES_PER_FACT)


def wrap_fact(text: str, width: int, max_lines: int = 2) -> list[str]:
    """Word-wrap to `width`; long words and cut-off text end in '...'."""
    if width <= 0:
        width = 20
    words = []
    for word in text.split():
        if len(word) > width:
            word = word[: max(1, width - 3)] + "..."
        words.append(word)
    lines = textwrap.wrap(" ".join(words), width=width, break_long_words=False, break_on_hyphens=False)
    if len(lines) > max_lines:
        lines = lines[:max_lines]
        last = lines[-1]
        if len(last) > width - 3:
            last = last[: width - 3]
        lines[-1] = last + "..."
    return lines


def years_ago(fact: HistoricalFact, today: date | None = None) -> int:
    today = today or date.today()
    return today.year - fact.year
