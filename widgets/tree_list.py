from __future__ import annotations

import logging

from rich.text import Text
from textual.widget import Widget

from models.selectable_list import SelectableList
from styles import COLOR_DIM, HIGHLIGHT_STYLE

logger = logging.getLogger(__name__)


def render_window(
    selectable: SelectableList,
    height: int,
    width: int | None = None,
    highlight_style: str = HIGHLIGHT_STYLE,
) -> Text:
    """Render the slice of ``selectable`` that fits in ``height`` rows.

    Each item is indented according to its kind; the selected item is drawn
    with ``highlight_style`` on top of its own decoration.
    """
    result = Text()
    if not selectable.items or height <= 0:
        return result

    start, end = selectable.window(height, width)
    selected = selectable.selected
    for index in range(start, end):
        item = selectable.items[index]
        style = item.decoration
        if index == selected:
            style = f"{style} {highlight_style}".strip()
        if index > start:
            result.append("\n")
        result.append(item.indent)
        result.append(item.label, style=style or None)
    return result


class TreeList(Widget):
    """Shows whichever list is active, scrolled so the selection stays visible."""

    DEFAULT_CSS = """
    TreeList {
        height: 1fr;
        width: 100%;
    }
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.selectable: SelectableList | None = None
        self.empty_message = "Nothing here"

    def show(self, selectable: SelectableList | None, empty_message: str = "Nothing here") -> None:
        self.selectable = selectable
        self.empty_message = empty_message
        self.refresh()

    def render(self) -> Text:
        if self.selectable is None or not self.selectable.items:
            return Text(f" {self.empty_message}", style=COLOR_DIM)
        return render_window(self.selectable, self.size.height, self.size.width)
