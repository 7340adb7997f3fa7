from __future__ import annotations

import logging
import time
from dataclasses import replace
from enum import Enum
from typing import Callable

from models.breadcrumbs import Breadcrumbs
from models.item import FILTER_TAGS, Capability, Item, Kind
from models.selectable_list import BoundaryPolicy, SelectableList
from models.status import PlaybackStatus
from models.track import Track
from services.playback_client import PlaybackClient, RemoteUnavailable
from services.queue_reconciler import QueueReconciler

logger = logging.getLogger(__name__)

VOLUME_STEP = 2
SEEK_SECONDS = 5
RECONNECT_INTERVAL = 5.0


class Tab(Enum):
    NOW_PLAYING = 0
    LIBRARY = 1
    PLAYLISTS = 2
    QUEUE = 3
    SETTINGS = 4


class View(Enum):
    """Every list that can be on screen."""
    HOME = "home"
    ARTIST = "artist"
    ALBUM = "album"
    TITLE = "title"
    PLAYLIST = "playlist"
    QUEUE = "queue"
    SETTINGS = "settings"
    OPTIONS = "options"


KIND_VIEWS = {
    Kind.HOME: View.HOME,
    Kind.ARTIST: View.ARTIST,
    Kind.ALBUM: View.ALBUM,
    Kind.TITLE: View.TITLE,
    Kind.PLAYLIST: View.PLAYLIST,
}

# Home rows in display order: (label, view opened, item kind of that view)
HOME_ENTRIES = (
    ("Playlists", View.PLAYLIST, Kind.PLAYLIST),
    ("Artists", View.ARTIST, Kind.ARTIST),
    ("Albums", View.ALBUM, Kind.ALBUM),
    ("Titles", View.TITLE, Kind.TITLE),
)

OPTION_ADD_TO_QUEUE = "Add to Queue"
OPTION_PLAY_NOW = "Play Now"
OPTION_LABELS = (OPTION_ADD_TO_QUEUE, OPTION_PLAY_NOW)

# Settings rows: (label, MPD option or None for a database update)
SETTING_ENTRIES = (
    ("Repeat", "repeat"),
    ("Random", "random"),
    ("Single", "single"),
    ("Consume", "consume"),
    ("Update Database", None),
)

# Capability tried first when a row is activated with Enter
ACTIVATION_ORDER = (Capability.DESCEND, Capability.PLAY, Capability.GO_BACK, Capability.CHOOSE)


def format_count(count: int) -> str:
    """Compact library count, e.g. ``1.2k`` above 999."""
    if count > 999:
        return f"{count / 1000:.1f}k"
    return str(count)


class Browser:
    """Owns every list on screen and turns user actions into server commands.

    Actions that talk to the server return False when the server call failed;
    the message is kept in ``last_error`` and the on-screen state is left as
    it was.
    """

    def __init__(self, client: PlaybackClient):
        self.client = client
        self.tab = Tab.NOW_PLAYING
        self.status = PlaybackStatus()
        self.current: Track | None = None
        self.last_error: str | None = None
        self.options_open = False
        self._options_target: Item | None = None
        self._album_artist: str | None = None
        self._last_connect_attempt = 0.0

        self._library: dict[View, list[str]] = {view: [] for _, view, _ in HOME_ENTRIES}
        self.lists: dict[View, SelectableList] = {
            View.HOME: self._build_home(),
            View.ARTIST: SelectableList(),
            View.ALBUM: SelectableList(),
            View.TITLE: SelectableList(),
            View.PLAYLIST: SelectableList(),
            View.QUEUE: SelectableList(policy=BoundaryPolicy.WRAP),
            View.SETTINGS: SelectableList(policy=BoundaryPolicy.WRAP),
            View.OPTIONS: SelectableList.of(OPTION_LABELS, Kind.OPTION),
        }
        self.library_view = View.HOME
        self.breadcrumbs = Breadcrumbs(self.lists[View.HOME])
        self.queue = QueueReconciler(client, self.lists[View.QUEUE])
        self._refresh_settings()

    # Connection and refresh

    def start(self) -> bool:
        """Connect and load the library; False leaves the browser offline."""
        self._last_connect_attempt = time.monotonic()
        try:
            self.client.connect()
        except RemoteUnavailable as e:
            self.last_error = str(e)
            return False
        return self.load_library() and self.poll()

    def load_library(self) -> bool:
        """Rebuild every library list and reset navigation to Home."""
        try:
            library = {
                View.PLAYLIST: self.client.playlists(),
                View.ARTIST: self.client.list_tag("artist"),
                View.ALBUM: self.client.list_tag("album"),
                View.TITLE: self.client.list_tag("title"),
            }
        except RemoteUnavailable as e:
            logger.error(f"Error loading library: {e}")
            self.last_error = str(e)
            return False

        self._library = library
        for label, view, kind in HOME_ENTRIES:
            self.lists[view] = SelectableList.of(library[view], kind)
        self.lists[View.HOME] = self._build_home()
        self.breadcrumbs = Breadcrumbs(self.lists[View.HOME])
        self.library_view = View.HOME
        self._album_artist = None
        logger.info(
            "Library loaded: "
            + ", ".join(f"{len(library[view])} {label.lower()}" for label, view, _ in HOME_ENTRIES)
        )
        return True

    def poll(self) -> bool:
        """Fetch status and the current song; refresh the queue while it is shown."""
        if not self.client.connected:
            return self._reconnect()
        try:
            self.status = self.client.status()
            self.current = self.client.current_song()
            if self.tab is Tab.QUEUE:
                self.queue.sync()
        except RemoteUnavailable as e:
            logger.warning(f"Status refresh failed: {e}")
            self.last_error = str(e)
            return False
        self._refresh_settings()
        return True

    def _reconnect(self) -> bool:
        now = time.monotonic()
        if now - self._last_connect_attempt < RECONNECT_INTERVAL:
            return False
        logger.info("Attempting to reconnect to MPD")
        return self.start()

    def _build_home(self) -> SelectableList:
        items = [
            Item(f"{label} ({format_count(len(self._library[view]))})", Kind.HOME)
            for label, view, _ in HOME_ENTRIES
        ]
        return SelectableList(items)

    def _refresh_settings(self) -> None:
        items = []
        for label, option in SETTING_ENTRIES:
            if option is None:
                items.append(Item(f"    {label}", Kind.OPTION))
            else:
                mark = "x" if getattr(self.status, option) else " "
                items.append(Item(f"[{mark}] {label}", Kind.OPTION))
        self.lists[View.SETTINGS].replace_items(items)

    def _attempt(self, description: str, action: Callable[[], object]) -> bool:
        try:
            action()
        except RemoteUnavailable as e:
            logger.error(f"Error during {description}: {e}")
            self.last_error = str(e)
            return False
        return True

    # Views

    def active_view(self) -> View | None:
        """List that currently receives navigation keys, None on Now Playing."""
        if self.options_open:
            return View.OPTIONS
        if self.tab is Tab.LIBRARY:
            return self.library_view
        if self.tab is Tab.PLAYLISTS:
            return View.PLAYLIST
        if self.tab is Tab.QUEUE:
            return View.QUEUE
        if self.tab is Tab.SETTINGS:
            return View.SETTINGS
        return None

    def active_list(self) -> SelectableList | None:
        view = self.active_view()
        return self.lists[view] if view is not None else None

    def select_tab(self, tab: Tab) -> bool:
        self.tab = tab
        self.options_open = False
        if tab is Tab.QUEUE:
            return self._attempt("queue refresh", self.queue.sync)
        return True

    def next_tab(self) -> bool:
        return self.select_tab(Tab((self.tab.value + 1) % len(Tab)))

    def previous_tab(self) -> bool:
        return self.select_tab(Tab((self.tab.value - 1) % len(Tab)))

    # Navigation

    def move_up(self) -> bool:
        if self.active_view() is None:
            return self._attempt("seek", lambda: self.client.seek_relative(SEEK_SECONDS))
        self.active_list().retreat()
        return True

    def move_down(self) -> bool:
        if self.active_view() is None:
            return self._attempt("seek", lambda: self.client.seek_relative(-SEEK_SECONDS))
        self.active_list().advance()
        return True

    def activate(self) -> bool:
        """Act on the selected row of the active list (Enter)."""
        if self.options_open:
            return self.choose_option()
        if self.tab is Tab.NOW_PLAYING:
            return self.toggle_pause()
        if self.tab is Tab.QUEUE:
            return self._attempt("queue switch", self.queue.play_row)
        if self.tab is Tab.SETTINGS:
            return self._apply_setting()

        item = self.active_list().selected_item()
        if item is None:
            return True
        if self.tab is Tab.PLAYLISTS:
            return self.play_now(item)

        for capability in ACTIVATION_ORDER:
            if item.can(capability):
                return self._activations[capability](self, item)
        return True

    def descend(self, item: Item) -> bool:
        """Open the list below ``item`` on the library tab."""
        if item.kind is Kind.HOME:
            return self._descend_home()

        try:
            if item.kind is Kind.ARTIST:
                albums = self.client.list_tag("album", [("artist", item.label)])
                level, view = SelectableList.of(albums, Kind.ALBUM), View.ALBUM
                self._album_artist = item.label
            elif item.kind is Kind.ALBUM:
                tracks = sorted(self.client.search(self._filter_for(item)), key=Track.sort_key)
                level, view = SelectableList.of([track.title for track in tracks], Kind.TITLE), View.TITLE
            elif item.kind is Kind.PLAYLIST:
                tracks = self.client.playlist_tracks(item.label)
                level, view = SelectableList.of([track.title for track in tracks], Kind.TITLE), View.TITLE
            else:
                return True
        except RemoteUnavailable as e:
            logger.error(f"Error opening {item.kind.value} '{item.label}': {e}")
            self.last_error = str(e)
            return False

        if not level.items:
            logger.debug(f"Nothing below {item.kind.value} '{item.label}'")
            return True
        self._show(level, view)
        return True

    def _descend_home(self) -> bool:
        index = self.lists[View.HOME].selected
        if index is None:
            return True
        _, view, kind = HOME_ENTRIES[index]
        self.breadcrumbs.reset()
        self._album_artist = None
        self._show(SelectableList.of(self._library[view], kind), view)
        return True

    def _show(self, level: SelectableList, view: View) -> None:
        self.lists[view] = level
        self.library_view = view
        self.breadcrumbs.record(level)
        logger.debug(f"Showing {view.value} list with {len(level)} items")

    def back(self) -> bool:
        """Return to the parent level of the library tab."""
        if self.options_open:
            self.options_open = False
            return True
        if self.tab is not Tab.LIBRARY or self.library_view is View.HOME:
            return True
        level = self.breadcrumbs.ascend()
        view = KIND_VIEWS.get(level.kind, View.HOME)
        self.lists[view] = level
        self.library_view = view
        if view in (View.HOME, View.ARTIST):
            self._album_artist = None
        return True

    def _go_back(self, item: Item) -> bool:
        return self.back()

    # Queue

    def _filter_for(self, item: Item) -> list[tuple[str, str]]:
        """Library filter matching ``item``; albums opened from an artist keep that artist."""
        query = [(FILTER_TAGS[item.kind], item.label)]
        if item.kind is Kind.ALBUM and self._album_artist:
            query.append(("artist", self._album_artist))
        return query

    def enqueue_target(self) -> Item | None:
        """Row that ``enqueue`` would queue right now, None when it would do nothing."""
        active = self.active_list()
        item = active.selected_item() if active is not None else None
        if item is None or not item.can(Capability.ENQUEUE):
            return None
        return item

    def enqueue(self, item: Item | None = None) -> bool:
        """Append the selected (or given) artist, album, title or playlist to the queue."""
        if item is None:
            item = self.enqueue_target()
        if item is None or not item.can(Capability.ENQUEUE):
            return True

        if item.kind is Kind.PLAYLIST:
            ok = self._attempt("playlist load", lambda: self.client.load_playlist(item.label))
        else:
            query = self._filter_for(item)
            ok = self._attempt("enqueue", lambda: self.client.enqueue_by_filter(query))
        if ok:
            logger.info(f"Queued {item.kind.value} '{item.label}'")
        return ok

    def play_now(self, item: Item) -> bool:
        """Replace the queue with ``item`` and start playing."""
        if not item.can(Capability.ENQUEUE):
            return True
        if not self._attempt("queue clear", self.client.clear):
            return False
        return self.enqueue(item) and self._attempt("play", self.client.play)

    def _play_title(self, item: Item) -> bool:
        return self.play_now(item)

    def delete_selected(self) -> bool:
        if self.tab is not Tab.QUEUE:
            return True
        return self._attempt("queue delete", self.queue.delete_row)

    # Options overlay

    def toggle_options(self) -> bool:
        if self.options_open:
            self.options_open = False
            return True
        if self.tab not in (Tab.LIBRARY, Tab.PLAYLISTS):
            return True
        item = self.active_list().selected_item()
        if item is None or not item.can(Capability.SHOW_OPTIONS):
            return True
        self._options_target = item
        self.lists[View.OPTIONS].select(0)
        self.options_open = True
        return True

    def choose_option(self, item: Item | None = None) -> bool:
        options = self.lists[View.OPTIONS]
        chosen = item or options.selected_item()
        target = self._options_target
        self.options_open = False
        if chosen is None or target is None:
            return True
        if chosen.label == OPTION_ADD_TO_QUEUE:
            return self.enqueue(target)
        if chosen.label == OPTION_PLAY_NOW:
            return self.play_now(target)
        return True

    # Playback

    def toggle_pause(self) -> bool:
        action = self.client.pause if self.status.is_playing else self.client.play
        return self._attempt("play/pause", action)

    def stop(self) -> bool:
        return self._attempt("stop", self.client.stop)

    def next_track(self) -> bool:
        ok = self._attempt("next track", self.client.next)
        if ok and self.tab is Tab.QUEUE:
            self._attempt("queue refresh", self.queue.sync)
        return ok

    def previous_track(self) -> bool:
        return self._attempt("previous track", self.client.previous)

    def volume_up(self) -> bool:
        return self._set_volume(self.status.volume + VOLUME_STEP)

    def volume_down(self) -> bool:
        return self._set_volume(self.status.volume - VOLUME_STEP)

    def _set_volume(self, volume: int) -> bool:
        volume = max(0, min(100, volume))
        if not self._attempt("volume change", lambda: self.client.set_volume(volume)):
            return False
        self.status = replace(self.status, volume=volume)
        return True

    def rescan(self) -> bool:
        """Update the server database and rebuild the library lists."""
        if not self._attempt("database update", self.client.rescan):
            return False
        return self.load_library()

    def _apply_setting(self) -> bool:
        index = self.lists[View.SETTINGS].selected
        if index is None:
            return True
        _, option = SETTING_ENTRIES[index]
        if option is None:
            return self.rescan()

        enabled = not getattr(self.status, option)
        if not self._attempt(f"{option} toggle", lambda: self.client.set_option(option, enabled)):
            return False
        self.status = replace(self.status, **{option: enabled})
        self._refresh_settings()
        return True

    _activations: dict[Capability, Callable[[Browser, Item], bool]] = {
        Capability.DESCEND: descend,
        Capability.PLAY: _play_title,
        Capability.GO_BACK: _go_back,
        Capability.CHOOSE: choose_option,
    }
