"""Tests for countdown.urgency — band boundaries and colors."""
import random

import pytest

from countdown.theme import DEFAULT_THEME, Theme
from countdown.urgency import Band, classify, urgency_color

NOW = 1_750_000_000
DAY = 86400


class TestBoundaries:
    @pytest.mark.parametrize("offset, band", [
        (-1, Band.PAST),
        (-400 * DAY, Band.PAST),
        (0, Band.IMMINENT),
        (DAY - 1, Band.IMMINENT),
        (DAY, Band.SOON),
        (DAY + 1, Band.URGENT),
        (3 * DAY - 1, Band.URGENT),
        (3 * DAY, Band.SOON),
        (7 * DAY - 1, Band.SOON),
        (7 * DAY, Band.NEAR),
        (14 * DAY - 1, Band.NEAR),
        (14 * DAY, Band.UPCOMING),
        (30 * DAY - 1, Band.UPCOMING),
        (30 * DAY, Band.DISTANT),
        (5000 * DAY, Band.DISTANT),
    ])
    def test_band(self, offset, band):
        assert classify(NOW + offset, NOW) is band

    def test_tiers_grow_as_event_approaches(self):
        offsets = [60 * DAY, 20 * DAY, 10 * DAY, 5 * DAY, 2 * DAY, 3600]
        tiers = [classify(NOW + o, NOW).tier for o in offsets]
        assert tiers == [1, 2, 3, 4, 5, 6]

    def test_every_instant_has_one_band(self):
        rng = random.Random(7)
        for _ in range(500):
            offset = rng.randint(-100 * DAY, 100 * DAY)
            band = classify(NOW + offset, NOW)
            assert band in Band
            assert (band is Band.PAST) == (offset < 0)


class TestColors:
    @pytest.mark.parametrize("band, attr", [
        (Band.PAST, "past"),
        (Band.DISTANT, "urgency_1"),
        (Band.SOON, "urgency_4"),
        (Band.IMMINENT, "urgency_6"),
    ])
    def test_band_color(self, band, attr):
        assert band.color() == getattr(DEFAULT_THEME, attr)

    def test_colors_are_distinct(self):
        assert len({band.color() for band in Band}) == len(Band)

    def test_urgency_color_for_event(self):
        assert urgency_color(NOW + 2 * DAY, NOW) == DEFAULT_THEME.urgency_5
        assert urgency_color(NOW - 1, NOW) == DEFAULT_THEME.past

    def test_custom_theme(self):
        theme = Theme(urgency_6="#ffffff", past="#000000")
        assert urgency_color(NOW + 10, NOW, theme) == "#ffffff"
        assert urgency_color(NOW - 10, NOW, theme) == "#000000"
