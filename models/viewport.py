from __future__ import annotations

import math
from typing import Sequence

from rich.cells import cell_len


def row_height(label: str, width: int | None = None) -> int:
    """Number of terminal rows a label occupies.

    Every newline-separated line takes at least one row. When a width is
    given, lines wider than it wrap onto further rows.
    """
    lines = label.split("\n")
    if not width or width <= 0:
        return len(lines)
    return sum(max(1, math.ceil(cell_len(line) / width)) for line in lines)


def compute_visible_range(
    heights: Sequence[int],
    selected: int | None,
    offset: int,
    max_height: int,
) -> tuple[int, int]:
    """Pick the slice ``[start, end)`` of a list that fits in ``max_height`` rows.

    The window starts at the remembered ``offset`` and only moves as far as
    needed to keep ``selected`` visible. ``start`` is the offset to remember
    for the next render.

    Args:
        heights: Row height of every item, each at least 1.
        selected: Selected index, or None to treat the first item as selected.
        offset: Previously remembered start of the window.
        max_height: Available rows.

    Returns:
        Tuple of (start, end) indices.
    """
    count = len(heights)
    if count == 0 or max_height <= 0:
        return 0, 0

    offset = max(0, min(offset, count - 1))
    start = end = offset
    height = 0
    while end < count and height + heights[end] <= max_height:
        height += heights[end]
        end += 1

    selected = 0 if selected is None else max(0, min(selected, count - 1))

    while selected >= end:
        height += heights[end]
        end += 1
        while height > max_height and start < end - 1:
            height -= heights[start]
            start += 1

    while selected < start:
        start -= 1
        height += heights[start]
        while height > max_height and end - 1 > start:
            end -= 1
            height -= heights[end]

    return start, end
