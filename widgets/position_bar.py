from __future__ import annotations

import math

from rich.text import Text
from textual.reactive import reactive
from textual.widgets import Static

from models.track import format_time
from styles import COLOR_HIGHLIGHT, COLOR_MUTED, COLOR_DIM

FILLED = "─"
HALF_CELL = "╸"
ALMOST_FULL_CELL = "╼"


def render_position(ratio: float, width: int) -> Text:
    """Progress line with a half-cell glyph marking the fractional end."""
    result = Text()
    if width <= 0:
        return result

    ratio = max(0.0, min(1.0, ratio))
    filled_width = width * ratio
    whole = math.floor(filled_width)
    result.append(FILLED * whole, style=COLOR_HIGHLIGHT)
    if whole < width:
        fraction = filled_width - whole
        result.append(HALF_CELL if fraction < 0.5 else ALMOST_FULL_CELL, style=COLOR_HIGHLIGHT)
        result.append(" " * (width - whole - 1))
    return result


def render_status_line(elapsed: float, duration: float, title: str, width: int) -> Text:
    """Elapsed time on the left, title centred, duration on the right."""
    left = f" {format_time(elapsed)}"
    right = f"{format_time(duration)} "
    middle_width = max(0, width - len(left) - len(right))

    if len(title) > middle_width:
        title = title[:max(0, middle_width - 1)] + "…" if middle_width else ""
    padding = middle_width - len(title)

    result = Text()
    result.append(left, style=COLOR_MUTED)
    result.append(" " * (padding // 2))
    result.append(title, style=f"{COLOR_HIGHLIGHT} bold")
    result.append(" " * (padding - padding // 2))
    result.append(right, style=COLOR_MUTED)
    return result


class PositionBar(Static):
    """Playback progress of the current song."""

    ratio: reactive[float] = reactive(0.0)

    DEFAULT_CSS = """
    PositionBar {
        height: 1;
        padding: 0 1;
    }
    """

    def render(self) -> Text:
        return render_position(self.ratio, self.size.width)


class StatusBar(Static):
    """Elapsed and total time around the current title."""

    elapsed: reactive[float] = reactive(0.0)
    duration: reactive[float] = reactive(0.0)
    song_title: reactive[str] = reactive("")

    DEFAULT_CSS = f"""
    StatusBar {{
        height: 1;
        color: {COLOR_DIM};
    }}
    """

    def render(self) -> Text:
        return render_status_line(self.elapsed, self.duration, self.song_title, self.size.width)
