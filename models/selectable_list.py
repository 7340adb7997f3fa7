from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from models.item import Item, Kind
from models.viewport import compute_visible_range, row_height


class BoundaryPolicy(Enum):
    """What happens when the cursor runs off either end of a list."""
    CLAMP = "clamp"
    WRAP = "wrap"


@dataclass
class Cursor:
    """Selection and remembered scroll offset of a list."""
    selected: int | None = 0
    offset: int = 0


@dataclass
class SelectableList:
    """Ordered items with a single cursor."""
    items: list[Item] = field(default_factory=list)
    policy: BoundaryPolicy = BoundaryPolicy.CLAMP
    cursor: Cursor = field(default_factory=Cursor)

    def __post_init__(self) -> None:
        if not self.items:
            self.cursor.selected = None

    @classmethod
    def of(
        cls,
        labels: Iterable[str],
        kind: Kind,
        policy: BoundaryPolicy = BoundaryPolicy.CLAMP,
    ) -> SelectableList:
        """Build a list whose items all share one kind."""
        return cls([Item(label, kind) for label in labels], policy)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def kind(self) -> Kind | None:
        """Dominant kind, used to place the list in the breadcrumbs."""
        if not self.items:
            return None
        return self.items[0].kind

    @property
    def selected(self) -> int | None:
        return self.cursor.selected

    def selected_item(self) -> Item | None:
        index = self.cursor.selected
        if index is None or not 0 <= index < len(self.items):
            return None
        return self.items[index]

    def select(self, index: int | None) -> None:
        """Select a row; None clears the selection and resets the offset."""
        if index is None or not self.items:
            self.cursor.selected = None
            self.cursor.offset = 0
            return
        self.cursor.selected = max(0, min(index, len(self.items) - 1))

    def advance(self) -> None:
        if not self.items:
            self.cursor.selected = None
            return
        last = len(self.items) - 1
        current = self.cursor.selected
        if current is None:
            self.cursor.selected = 0
        elif current >= last:
            self.cursor.selected = 0 if self.policy is BoundaryPolicy.WRAP else last
        else:
            self.cursor.selected = current + 1

    def retreat(self) -> None:
        if not self.items:
            self.cursor.selected = None
            return
        last = len(self.items) - 1
        current = self.cursor.selected
        if current is None:
            self.cursor.selected = 0
        elif current <= 0:
            self.cursor.selected = last if self.policy is BoundaryPolicy.WRAP else 0
        else:
            self.cursor.selected = min(current - 1, last)

    def select_last(self) -> None:
        """Pull a selection that fell past the end back onto the last row."""
        if not self.items:
            self.select(None)
            return
        current = self.cursor.selected
        if current is not None and current >= len(self.items):
            self.cursor.selected = len(self.items) - 1
            self.cursor.offset = 0

    def replace_items(self, items: list[Item]) -> None:
        """Swap in a fresh set of items, keeping the cursor inside bounds."""
        self.items = items
        if not items:
            self.select(None)
        elif self.cursor.selected is None:
            self.cursor.selected = 0
        else:
            self.select_last()

    def window(self, max_height: int, width: int | None = None) -> tuple[int, int]:
        """Visible slice for ``max_height`` rows; remembers the new offset."""
        heights = [row_height(item.indent + item.label, width) for item in self.items]
        start, end = compute_visible_range(
            heights, self.cursor.selected, self.cursor.offset, max_height
        )
        self.cursor.offset = start
        return start, end
