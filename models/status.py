from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class PlaybackState(Enum):
    """Player state as reported by MPD."""
    PLAYING = "play"
    PAUSED = "pause"
    STOPPED = "stop"


def _int(value: Any, default: int | None = 0) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class PlaybackStatus:
    """Snapshot of the server's ``status`` response."""
    state: PlaybackState = PlaybackState.STOPPED
    volume: int = 0
    song_position: int | None = None
    elapsed: float = 0.0
    duration: float = 0.0
    repeat: bool = False
    random: bool = False
    single: bool = False
    consume: bool = False

    @classmethod
    def from_mpd(cls, status: dict[str, Any]) -> PlaybackStatus:
        try:
            state = PlaybackState(status.get("state", "stop"))
        except ValueError:
            state = PlaybackState.STOPPED

        duration = status.get("duration")
        if duration is None and ":" in str(status.get("time", "")):
            duration = str(status["time"]).split(":", 1)[1]

        return cls(
            state=state,
            volume=max(0, _int(status.get("volume"), 0)),
            song_position=_int(status.get("song"), None),
            elapsed=_float(status.get("elapsed")),
            duration=_float(duration),
            repeat=status.get("repeat") == "1",
            random=status.get("random") == "1",
            single=status.get("single") == "1",
            consume=status.get("consume") == "1",
        )

    @property
    def is_playing(self) -> bool:
        return self.state is PlaybackState.PLAYING

    @property
    def progress(self) -> float:
        """Elapsed fraction of the current song, between 0 and 1."""
        if self.duration <= 0:
            return 0.0
        return max(0.0, min(1.0, self.elapsed / self.duration))
