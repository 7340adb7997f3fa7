from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Kind(Enum):
    """Role of an item in the library taxonomy."""
    HOME = "home"
    ARTIST = "artist"
    ALBUM = "album"
    TITLE = "title"
    PLAYLIST = "playlist"
    BACK = "back"
    OPTION = "option"
    PLAIN = "plain"


class Capability(Enum):
    """What activating an item of a given kind is allowed to do."""
    DESCEND = "descend"
    ENQUEUE = "enqueue"
    GO_BACK = "go_back"
    SHOW_OPTIONS = "show_options"
    PLAY = "play"
    CHOOSE = "choose"


CAPABILITIES: dict[Kind, frozenset[Capability]] = {
    Kind.HOME: frozenset({Capability.DESCEND}),
    Kind.ARTIST: frozenset({Capability.DESCEND, Capability.ENQUEUE}),
    Kind.ALBUM: frozenset({Capability.DESCEND, Capability.ENQUEUE, Capability.SHOW_OPTIONS}),
    Kind.TITLE: frozenset({Capability.PLAY, Capability.ENQUEUE, Capability.SHOW_OPTIONS}),
    Kind.PLAYLIST: frozenset({Capability.DESCEND, Capability.ENQUEUE}),
    Kind.BACK: frozenset({Capability.GO_BACK}),
    Kind.OPTION: frozenset({Capability.CHOOSE}),
    Kind.PLAIN: frozenset(),
}

# MPD tag used when filtering the library by an item of this kind
FILTER_TAGS: dict[Kind, str] = {
    Kind.ARTIST: "artist",
    Kind.ALBUM: "album",
    Kind.TITLE: "title",
}

INDENTS: dict[Kind, str] = {
    Kind.ARTIST: "  ",
    Kind.ALBUM: "    ",
    Kind.TITLE: "     ",
    Kind.PLAIN: " ",
}


@dataclass(frozen=True)
class Item:
    """A single row of a browsable list."""
    label: str
    kind: Kind = Kind.PLAIN
    decoration: str = ""

    def can(self, capability: Capability) -> bool:
        return capability in CAPABILITIES[self.kind]

    @property
    def indent(self) -> str:
        return INDENTS.get(self.kind, "")

    def with_decoration(self, decoration: str) -> Item:
        """Return a copy of the item carrying a different style."""
        return Item(self.label, self.kind, decoration)
