import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from models.item import Item, Kind
from models.selectable_list import BoundaryPolicy, SelectableList
from models.status import PlaybackStatus
from models.track import Track
from services.playback_client import PlaybackClient

ALBUMS_BY_ARTIST = {
    "Alpha": ["Alpha Album"],
    "Beta": ["Beta First", "Beta Second"],
}

LIBRARY = {
    "artist": ["Alpha", "Beta"],
    "album": ["Alpha Album", "Beta First", "Beta Second"],
    "title": ["Intro", "Outro", "Middle"],
}

ALBUM_TRACKS = [
    Track(title="Outro", artist="Beta", album="Beta First", track_number=3),
    Track(title="Untracked", artist="Beta", album="Beta First"),
    Track(title="Intro", artist="Beta", album="Beta First", track_number=1),
    Track(title="Middle", artist="Beta", album="Beta First", track_number=2),
]


def make_tracks(count, start=0):
    """Queue snapshot of ``count`` tracks with absolute positions."""
    return [Track(title=f"Song {i}", position=i) for i in range(start, start + count)]


@pytest.fixture
def make_list():
    """Build a list of ``count`` single-row items."""
    def _make(count, kind=Kind.TITLE, policy=BoundaryPolicy.CLAMP):
        return SelectableList([Item(f"item {i}", kind) for i in range(count)], policy)
    return _make


@pytest.fixture
def fake_client():
    """Connected playback client serving a tiny library."""
    client = MagicMock(spec=PlaybackClient)
    client.connected = True

    def list_tag(tag, query=()):
        if tag == "album" and query:
            return list(ALBUMS_BY_ARTIST.get(dict(query).get("artist"), []))
        return list(LIBRARY[tag])

    client.list_tag.side_effect = list_tag
    client.playlists.return_value = ["Dance", "Chill"]
    client.playlist_tracks.return_value = [Track(title="Groove"), Track(title="Beat")]
    client.search.return_value = list(ALBUM_TRACKS)
    client.status.return_value = PlaybackStatus(volume=50)
    client.current_song.return_value = None
    client.queue_snapshot.return_value = make_tracks(5)
    client.current_track_position.return_value = 2
    return client
