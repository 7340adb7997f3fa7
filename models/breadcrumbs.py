from __future__ import annotations

import logging

from models.item import Kind
from models.selectable_list import SelectableList

logger = logging.getLogger(__name__)

LEVELS = (Kind.ARTIST, Kind.ALBUM, Kind.TITLE)


class Breadcrumbs:
    """Last list shown at each level of Home → Artist → Album → Title.

    Slots may be skipped (Home → Albums goes straight to the album level),
    but recording a level always drops the levels below it, so ``ascend``
    never returns a list that was reached from a different parent.
    """

    def __init__(self, home: SelectableList) -> None:
        self.home = home
        self._slots: dict[Kind, SelectableList | None] = {kind: None for kind in LEVELS}

    @property
    def artist_level(self) -> SelectableList | None:
        return self._slots[Kind.ARTIST]

    @property
    def album_level(self) -> SelectableList | None:
        return self._slots[Kind.ALBUM]

    @property
    def title_level(self) -> SelectableList | None:
        return self._slots[Kind.TITLE]

    def depth(self) -> int:
        """Number of populated slots."""
        return sum(1 for level in self._slots.values() if level is not None)

    def record(self, level: SelectableList) -> None:
        """Remember ``level`` in the slot matching its dominant kind."""
        kind = level.kind
        if kind is Kind.HOME:
            self.home = level
            return
        if kind not in self._slots:
            return

        self._slots[kind] = level
        for deeper in LEVELS[LEVELS.index(kind) + 1:]:
            self._slots[deeper] = None
        logger.debug(f"Recorded {kind.value} level with {len(level)} items")

    def ascend(self) -> SelectableList:
        """Drop the deepest populated slot and return the list above it."""
        if self._slots[Kind.TITLE] is not None:
            self._slots[Kind.TITLE] = None
            return self._level_or_home(Kind.ALBUM)
        if self._slots[Kind.ALBUM] is not None:
            self._slots[Kind.ALBUM] = None
            return self._level_or_home(Kind.ARTIST)
        if self._slots[Kind.ARTIST] is not None:
            self._slots[Kind.ARTIST] = None
        return self.home

    def _level_or_home(self, kind: Kind) -> SelectableList:
        level = self._slots[kind]
        return level if level is not None else self.home

    def reset(self) -> None:
        """Forget every level below Home."""
        for kind in LEVELS:
            self._slots[kind] = None
