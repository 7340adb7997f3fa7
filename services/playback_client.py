"""
Playback Client Service

Synchronous wrapper around python-mpd2 exposing the calls the browser needs.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from mpd import MPDClient, MPDError
from mpd import ConnectionError as MPDConnectionError

from models.config import ServerConfig
from models.status import PlaybackStatus
from models.track import Track

logger = logging.getLogger(__name__)

Filter = Sequence[tuple[str, str]]

TOGGLE_OPTIONS = ("repeat", "random", "single", "consume")


class RemoteUnavailable(Exception):
    """Raised when the server cannot be reached or rejects a command."""
    pass


def _flatten(query: Filter) -> list[str]:
    args: list[str] = []
    for tag, value in query:
        args.extend((tag, value))
    return args


class PlaybackClient:
    """Client for a Music Player Daemon server."""

    def __init__(self, config: ServerConfig | None = None, client: MPDClient | None = None):
        """
        Initialize without connecting.

        Args:
            config: Server address and timeouts, read from the environment if omitted
            client: Pre-built MPDClient, mostly useful for tests
        """
        self.config = config or ServerConfig.from_env()
        self._client = client if client is not None else MPDClient()
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        """
        Open the connection and authenticate if a password is configured.

        Raises:
            RemoteUnavailable: If the server cannot be reached
        """
        self._client.timeout = self.config.timeout
        try:
            self._client.connect(self.config.host, self.config.port)
            if self.config.password:
                self._client.password(self.config.password)
        except (MPDError, OSError) as e:
            self._connected = False
            logger.error(f"Cannot connect to {self.config.host}:{self.config.port}: {e}")
            raise RemoteUnavailable(
                f"Cannot connect to MPD at {self.config.host}:{self.config.port}: {e}"
            ) from e

        self._connected = True
        logger.info(f"Connected to MPD {self._client.mpd_version} at {self.config.host}:{self.config.port}")

    def close(self) -> None:
        """Disconnect, ignoring a connection that is already gone."""
        if not self._connected:
            return
        self._connected = False
        try:
            self._client.close()
            self._client.disconnect()
        except (MPDError, OSError) as e:
            logger.debug(f"Error while disconnecting: {e}")

    def _call(self, command: str, *args: Any) -> Any:
        if not self._connected:
            raise RemoteUnavailable("Not connected to MPD")
        try:
            return getattr(self._client, command)(*args)
        except (MPDConnectionError, OSError) as e:
            self._connected = False
            try:
                self._client.disconnect()
            except (MPDError, OSError):
                pass
            raise RemoteUnavailable(f"Lost connection during '{command}': {e}") from e
        except MPDError as e:
            raise RemoteUnavailable(f"'{command}' failed: {e}") from e

    # Library

    def list_tag(self, tag: str, query: Filter = ()) -> list[str]:
        """
        List distinct values of a tag, optionally restricted by a filter.

        Empty values are dropped and order is preserved.
        """
        result = self._call("list", tag, *_flatten(query))
        values: list[str] = []
        seen: set[str] = set()
        for entry in result or []:
            value = entry.get(tag) if isinstance(entry, dict) else entry
            if isinstance(value, list):
                candidates: Iterable[Any] = value
            else:
                candidates = (value,)
            for candidate in candidates:
                if not candidate or candidate in seen:
                    continue
                seen.add(candidate)
                values.append(str(candidate))
        return values

    def search(self, query: Filter) -> list[Track]:
        """Songs whose tags match the filter exactly."""
        return [Track.from_mpd(song) for song in self._call("find", *_flatten(query)) or []]

    def playlists(self) -> list[str]:
        return [entry["playlist"] for entry in self._call("listplaylists") or [] if "playlist" in entry]

    def playlist_tracks(self, name: str) -> list[Track]:
        return [Track.from_mpd(song) for song in self._call("listplaylistinfo", name) or []]

    def rescan(self) -> None:
        """Ask the server to rescan its music directory."""
        self._call("update")

    # Queue

    def queue_snapshot(self) -> list[Track]:
        return [Track.from_mpd(song) for song in self._call("playlistinfo") or []]

    def current_track_position(self) -> int | None:
        """Absolute queue index of the current song, None when nothing is queued."""
        song = self._call("currentsong") or {}
        return Track.from_mpd(song).position if song else None

    def current_song(self) -> Track | None:
        song = self._call("currentsong")
        return Track.from_mpd(song) if song else None

    def enqueue_by_filter(self, query: Filter) -> None:
        self._call("findadd", *_flatten(query))

    def load_playlist(self, name: str) -> None:
        self._call("load", name)

    def delete_at(self, index: int) -> None:
        self._call("delete", index)

    def switch_to(self, index: int) -> None:
        self._call("play", index)

    def clear(self) -> None:
        self._call("clear")

    # Playback

    def status(self) -> PlaybackStatus:
        return PlaybackStatus.from_mpd(self._call("status") or {})

    def play(self) -> None:
        self._call("play")

    def pause(self) -> None:
        self._call("pause", 1)

    def toggle_pause(self) -> None:
        if self.status().is_playing:
            self.pause()
        else:
            self.play()

    def stop(self) -> None:
        self._call("stop")

    def next(self) -> None:
        self._call("next")

    def previous(self) -> None:
        self._call("previous")

    def seek_relative(self, seconds: int) -> None:
        self._call("seekcur", f"{seconds:+d}")

    def set_volume(self, volume: int) -> None:
        self._call("setvol", max(0, min(100, int(volume))))

    def set_option(self, name: str, enabled: bool) -> None:
        """Switch one of repeat/random/single/consume on or off."""
        if name not in TOGGLE_OPTIONS:
            raise ValueError(f"Unknown playback option: {name}")
        self._call(name, 1 if enabled else 0)
