from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any

_LEADING_NUMBER = re.compile(r"\s*(\d+)")


def _first(value: Any) -> str | None:
    """MPD repeats multi-valued tags as lists; keep the first value."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    return str(value)


def _to_int(value: Any) -> int | None:
    text = _first(value)
    if text is None:
        return None
    match = _LEADING_NUMBER.match(text)
    return int(match.group(1)) if match else None


@dataclass(frozen=True)
class Track:
    """A song as reported by the playback server."""
    title: str
    artist: str = "Unknown Artist"
    album: str = "Unknown Album"
    track_number: int | None = None
    position: int | None = None
    file: str = ""

    @classmethod
    def from_mpd(cls, song: dict[str, Any]) -> Track:
        """Build a track from an MPD song dictionary.

        Missing titles fall back to the file name, track numbers such as
        ``"3/12"`` keep their leading number.
        """
        file = _first(song.get("file")) or ""
        title = _first(song.get("title")) or PurePosixPath(file).name
        return cls(
            title=title,
            artist=_first(song.get("artist")) or "Unknown Artist",
            album=_first(song.get("album")) or "Unknown Album",
            track_number=_to_int(song.get("track")),
            position=_to_int(song.get("pos")),
            file=file,
        )

    def sort_key(self) -> tuple[int, int]:
        """Album order: numbered tracks first, by number."""
        if self.track_number is None:
            return (1, 0)
        return (0, self.track_number)


def format_time(seconds: float) -> str:
    """Format seconds as ``MM:SS``."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"
