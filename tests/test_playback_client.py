"""
Tests for PlaybackClient - response normalization and error translation.
"""
import pytest
from unittest.mock import MagicMock

from mpd import CommandError
from mpd import ConnectionError as MPDConnectionError

from models.config import ServerConfig
from models.status import PlaybackState
from services.playback_client import PlaybackClient, RemoteUnavailable


@pytest.fixture
def mpd():
    client = MagicMock()
    client.mpd_version = "0.23.5"
    return client


@pytest.fixture
def client(mpd):
    playback = PlaybackClient(ServerConfig(host="music.local", port=6601, timeout=3), client=mpd)
    playback.connect()
    return playback


class TestConnection:
    """Tests for connecting and losing the connection."""

    def test_connect(self, client, mpd):
        assert client.connected
        assert mpd.timeout == 3
        mpd.connect.assert_called_once_with("music.local", 6601)
        mpd.password.assert_not_called()

    def test_connect_with_password(self, mpd):
        playback = PlaybackClient(ServerConfig(password="secret"), client=mpd)
        playback.connect()
        mpd.password.assert_called_once_with("secret")

    def test_connect_refused(self, mpd):
        mpd.connect.side_effect = ConnectionRefusedError("refused")
        playback = PlaybackClient(ServerConfig(), client=mpd)

        with pytest.raises(RemoteUnavailable):
            playback.connect()
        assert not playback.connected

    def test_call_before_connect(self, mpd):
        playback = PlaybackClient(ServerConfig(), client=mpd)
        with pytest.raises(RemoteUnavailable):
            playback.status()
        mpd.status.assert_not_called()

    def test_connection_lost(self, client, mpd):
        mpd.status.side_effect = MPDConnectionError("Connection lost")

        with pytest.raises(RemoteUnavailable):
            client.status()
        assert not client.connected
        mpd.disconnect.assert_called_once()

    def test_command_error_keeps_connection(self, client, mpd):
        mpd.delete.side_effect = CommandError("Bad song index")

        with pytest.raises(RemoteUnavailable):
            client.delete_at(99)
        assert client.connected

    def test_close(self, client, mpd):
        client.close()
        assert not client.connected
        mpd.close.assert_called_once()
        client.close()
        mpd.close.assert_called_once()


class TestLibrary:
    """Tests for library listing calls."""

    def test_list_tag_dict_entries(self, client, mpd):
        mpd.list.return_value = [{"artist": "Alpha"}, {"artist": ""}, {"artist": "Beta"}, {"artist": "Alpha"}]
        assert client.list_tag("artist") == ["Alpha", "Beta"]
        mpd.list.assert_called_once_with("artist")

    def test_list_tag_string_entries(self, client, mpd):
        mpd.list.return_value = ["One", "Two", ""]
        assert client.list_tag("album") == ["One", "Two"]

    def test_list_tag_with_filter(self, client, mpd):
        mpd.list.return_value = [{"album": ["One", "One (Deluxe)"]}]
        albums = client.list_tag("album", [("artist", "Alpha")])

        assert albums == ["One", "One (Deluxe)"]
        mpd.list.assert_called_once_with("album", "artist", "Alpha")

    def test_search(self, client, mpd):
        mpd.find.return_value = [
            {"file": "a/01.flac", "title": "Intro", "track": "1/9", "album": "One"},
            {"file": "a/02 Untitled.flac"},
        ]
        tracks = client.search([("album", "One"), ("artist", "Alpha")])

        mpd.find.assert_called_once_with("album", "One", "artist", "Alpha")
        assert tracks[0].title == "Intro"
        assert tracks[0].track_number == 1
        assert tracks[1].title == "02 Untitled.flac"

    def test_playlists(self, client, mpd):
        mpd.listplaylists.return_value = [{"playlist": "Dance"}, {"playlist": "Chill"}]
        assert client.playlists() == ["Dance", "Chill"]


class TestQueueAndPlayback:
    """Tests for queue and transport commands."""

    def test_queue_snapshot(self, client, mpd):
        mpd.playlistinfo.return_value = [
            {"file": "a.mp3", "title": "A", "pos": "0"},
            {"file": "b.mp3", "title": "B", "pos": "1"},
        ]
        snapshot = client.queue_snapshot()
        assert [track.position for track in snapshot] == [0, 1]

    def test_current_track_position(self, client, mpd):
        mpd.currentsong.return_value = {"file": "a.mp3", "pos": "3"}
        assert client.current_track_position() == 3

    def test_current_track_position_empty_queue(self, client, mpd):
        mpd.currentsong.return_value = {}
        assert client.current_track_position() is None
        assert client.current_song() is None

    def test_enqueue_by_filter(self, client, mpd):
        client.enqueue_by_filter([("artist", "Alpha")])
        mpd.findadd.assert_called_once_with("artist", "Alpha")

    def test_status(self, client, mpd):
        mpd.status.return_value = {"state": "play", "volume": "40", "repeat": "1"}
        status = client.status()
        assert status.state is PlaybackState.PLAYING
        assert status.volume == 40
        assert status.repeat

    def test_toggle_pause_while_playing(self, client, mpd):
        mpd.status.return_value = {"state": "play"}
        client.toggle_pause()
        mpd.pause.assert_called_once_with(1)

    def test_toggle_pause_while_stopped(self, client, mpd):
        mpd.status.return_value = {"state": "stop"}
        client.toggle_pause()
        mpd.play.assert_called_once_with()

    def test_seek_relative(self, client, mpd):
        client.seek_relative(-5)
        mpd.seekcur.assert_called_once_with("-5")

    def test_set_volume_clamps(self, client, mpd):
        client.set_volume(104)
        mpd.setvol.assert_called_once_with(100)

    def test_set_option(self, client, mpd):
        client.set_option("random", True)
        mpd.random.assert_called_once_with(1)

    def test_set_unknown_option(self, client):
        with pytest.raises(ValueError):
            client.set_option("shuffle", True)
