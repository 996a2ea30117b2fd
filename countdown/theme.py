"""Colors and glyphs shared by every panel."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """Process-wide styling, loaded once and handed to the renderers."""

    error: str = "#CF002E"
    success: str = "#146034"
    warning: str = "#F39C12"
    hint: str = "#7F8C8D"
    title_fg: str = "#000000"
    title_bg: str = "#2389D3"
    detail_title: str = "#D32389"
    prompt_border: str = "#D32389"
    item_title: str = "#F5EB6D"
    item_desc: str = "#9E9742"
    text_bright: str = "#DDDDDD"
    text_normal: str = "#999999"

    # urgency tiers, least (1) to most (6) urgent
    urgency_1: str = "#347A51"  # > 30 days
    urgency_2: str = "#58D68D"  # 14-30 days
    urgency_3: str = "#F4D03F"  # 7-14 days
    urgency_4: str = "#F39C12"  # 3-7 days
    urgency_5: str = "#E74C3C"  # 1-3 days
    urgency_6: str = "#C0392B"  # < 1 day
    past: str = "#9B59B6"

    bar_empty: str = "#2C3E50"
    block_empty: str = "#333333"
    timeline_track: str = "#34495E"
    timeline_now: str = "#E74C3C"
    timeline_future: str = "#3498DB"
    timeline_selected: str = "#F39C12"

    bar_full: str = "█"
    bar_blank: str = "░"
    block_full: str = "■"
    block_blank: str = "·"
    marker: str = "●"
    marker_selected: str = "▶"

    def urgency_color(self, tier: int) -> str:
        """Color for an urgency tier; tier 0 means the event is past."""
        if tier <= 0:
            return self.past
        return getattr(self, f"urgency_{min(tier, 6)}")


DEFAULT_THEME = Theme()
