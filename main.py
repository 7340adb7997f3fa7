from textual.app import App, ComposeResult
from textual.widgets import Footer, ContentSwitcher
from textual.binding import Binding
import logging
import os
from pathlib import Path

from widgets import Header, HelpScreen, PositionBar, StatusBar
from views import LibraryView, NowPlayingView
from models.config import ServerConfig
from services.browser import Browser, Tab, View
from services.playback_client import PlaybackClient

TICK_INTERVAL = 0.25

log_dir = Path.home() / '.local' / 'share' / 'tapedeck'
log_dir.mkdir(parents=True, exist_ok=True)
log_file = log_dir / 'tapedeck.log'

logging.basicConfig(
    level=getattr(logging, os.environ.get('TAPEDECK_LOG_LEVEL', 'INFO').upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(log_file)
    ]
)

logger = logging.getLogger(__name__)

VIEW_HEADINGS = {
    View.HOME: "Library",
    View.ARTIST: "Library › Artists",
    View.ALBUM: "Library › Albums",
    View.TITLE: "Library › Titles",
    View.PLAYLIST: "Playlists",
    View.QUEUE: "Queue",
    View.SETTINGS: "Settings",
    View.OPTIONS: "Options",
}

# Actions still allowed while a modal screen is open
MODAL_SAFE_ACTIONS = {"quit"}


class TapedeckApp(App):
    """A terminal browser for a Music Player Daemon server."""

    CSS_PATH = "styles/app.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit", priority=True),
        Binding("1", "select_tab(0)", "Now", show=False),
        Binding("2", "select_tab(1)", "Library", show=False),
        Binding("3", "select_tab(2)", "Playlists", show=False),
        Binding("4", "select_tab(3)", "Queue", show=False),
        Binding("5", "select_tab(4)", "Settings", show=False),
        Binding("right", "next_tab", "Next tab", show=False, priority=True),
        Binding("left", "previous_tab", "Prev tab", show=False, priority=True),
        Binding("up", "move_up", "Up", show=False, priority=True),
        Binding("down", "move_down", "Down", show=False, priority=True),
        Binding("enter", "activate", "Select", priority=True),
        Binding("b", "back", "Back", priority=True),
        Binding("backspace", "back", "Back", show=False, priority=True),
        Binding("a", "enqueue", "Add", priority=True),
        Binding("o", "toggle_options", "Options", priority=True),
        Binding("d", "delete", "Delete", show=False, priority=True),
        Binding("space", "play_pause", "Play/Pause"),
        Binding("p", "play_pause", "Play/Pause", show=False),
        Binding("s", "stop", "Stop", priority=True),
        Binding("full_stop", "next_track", "Next", priority=True),
        Binding("comma", "previous_track", "Prev", priority=True),
        Binding("plus", "volume_up", "Vol+", priority=True),
        Binding("equals_sign", "volume_up", "Vol+", show=False, priority=True),
        Binding("minus", "volume_down", "Vol-", priority=True),
        Binding("u", "rescan", "Update DB", show=False, priority=True),
        Binding("h", "show_help", "Help", priority=True),
        Binding("question_mark", "show_help", "Help", show=False, priority=True),
    ]

    def __init__(self, config: ServerConfig | None = None, *args, **kwargs):
        super().__init__(*args, **kwargs)

        logger.info("Starting TAPEDECK application")

        self.config = config or ServerConfig.from_env()
        self.browser = Browser(PlaybackClient(self.config))
        self._shown_error: str | None = None
        logger.info(f"Using MPD server {self.config.host}:{self.config.port}")

    def compose(self) -> ComposeResult:
        """Compose the main application layout."""
        yield Header()

        with ContentSwitcher(id="view-switcher", initial="now-playing"):
            yield NowPlayingView(id="now-playing")
            yield LibraryView(id="library")

        yield PositionBar()
        yield StatusBar()
        yield Footer()

    def on_mount(self) -> None:
        """Connect to the server and start polling."""
        if self.browser.start():
            self.notify(
                f"✓ Connected to {self.config.host}:{self.config.port}",
                severity="information",
                timeout=3
            )
        else:
            self._report_error("❌ Cannot reach MPD")

        self._render_state()
        self.set_interval(TICK_INTERVAL, self._tick)

    def on_unmount(self) -> None:
        self.browser.client.close()

    def _tick(self) -> None:
        """Refresh server state and redraw.

        Errors are reported once until the next successful refresh.
        """
        try:
            if self.browser.poll():
                if self._shown_error:
                    logger.info("Server connection restored")
                self._shown_error = None
            elif not self.browser.client.connected:
                self._report_error("❌ Lost connection to MPD")
        except Exception as e:
            logger.error(f"Unexpected error during refresh: {type(e).__name__}: {e}", exc_info=True)
        self._render_state()

    def _report_error(self, title: str) -> None:
        message = self.browser.last_error or "Unknown error"
        if message == self._shown_error:
            return
        self._shown_error = message
        self.notify(f"{title}\n\n{message[:80]}", severity="error", timeout=5)

    def _render_state(self) -> None:
        """Push the browser's state into every widget."""
        browser = self.browser
        status = browser.status

        header = self.query_one(Header)
        header.tab_index = browser.tab.value
        header.is_playing = status.is_playing
        header.volume_level = status.volume
        header.is_connected = browser.client.connected

        switcher = self.query_one("#view-switcher", ContentSwitcher)
        view = browser.active_view()
        if view is None:
            switcher.current = "now-playing"
            self.query_one("#now-playing", NowPlayingView).update_track(browser.current, status)
        else:
            switcher.current = "library"
            selectable = browser.lists[view] if browser.client.connected else None
            self.query_one("#library", LibraryView).show(
                VIEW_HEADINGS[view], selectable, options=browser.options_open
            )

        self.query_one(PositionBar).ratio = status.progress
        status_bar = self.query_one(StatusBar)
        status_bar.elapsed = status.elapsed
        status_bar.duration = status.duration
        status_bar.song_title = browser.current.title if browser.current else ""

    def _run(self, action, failure: str) -> None:
        try:
            if not action():
                self._report_error(failure)
            else:
                self._shown_error = None
        except Exception as e:
            logger.error(f"Error handling '{failure}': {type(e).__name__}: {e}", exc_info=True)
            self.notify(f"❌ {failure}", severity="error", timeout=3)
        self._render_state()

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Keep browser keys away from the help screen."""
        if len(self.screen_stack) > 1 and action not in MODAL_SAFE_ACTIONS:
            return False
        return True

    def action_quit(self) -> None:
        """Handle quit action for clean shutdown."""
        self.exit()

    def action_select_tab(self, index: int) -> None:
        self._run(lambda: self.browser.select_tab(Tab(index)), "Cannot refresh queue")

    def action_next_tab(self) -> None:
        self._run(self.browser.next_tab, "Cannot refresh queue")

    def action_previous_tab(self) -> None:
        self._run(self.browser.previous_tab, "Cannot refresh queue")

    def action_move_up(self) -> None:
        self._run(self.browser.move_up, "Cannot seek")

    def action_move_down(self) -> None:
        self._run(self.browser.move_down, "Cannot seek")

    def action_activate(self) -> None:
        self._run(self.browser.activate, "Cannot open selection")

    def action_back(self) -> None:
        self._run(self.browser.back, "Cannot go back")

    def action_enqueue(self) -> None:
        """Add the selection to the queue."""
        item = self.browser.enqueue_target()
        self._run(self.browser.enqueue, "Cannot add to queue")
        if item is not None and self._shown_error is None:
            self.notify(f"➕ {item.label}", timeout=1.5)

    def action_toggle_options(self) -> None:
        self._run(self.browser.toggle_options, "Cannot show options")

    def action_delete(self) -> None:
        self._run(self.browser.delete_selected, "Cannot delete queue entry")

    def action_play_pause(self) -> None:
        """Toggle play/pause state."""
        self._run(self.browser.toggle_pause, "Cannot toggle playback")

    def action_stop(self) -> None:
        """Stop playback."""
        self._run(self.browser.stop, "Cannot stop playback")

    def action_next_track(self) -> None:
        """Skip to next track."""
        self._run(self.browser.next_track, "Cannot play next track")

    def action_previous_track(self) -> None:
        """Skip to previous track."""
        self._run(self.browser.previous_track, "Cannot play previous track")

    def action_volume_up(self) -> None:
        """Increase volume."""
        self._run(self.browser.volume_up, "Cannot change volume")
        if self._shown_error is None:
            self.notify(f"🔊 Volume ▲ {self.browser.status.volume}%", timeout=1.5)

    def action_volume_down(self) -> None:
        """Decrease volume."""
        self._run(self.browser.volume_down, "Cannot change volume")
        if self._shown_error is None:
            volume_pct = self.browser.status.volume
            mute_icon = "🔇" if volume_pct == 0 else "🔉"
            self.notify(f"{mute_icon} Volume ▼ {volume_pct}%", timeout=1.5)

    def action_rescan(self) -> None:
        """Update the server database and reload the library."""
        self._run(self.browser.rescan, "Cannot update database")
        if self._shown_error is None:
            self.notify("✓ Library reloaded", severity="information", timeout=2)

    def action_show_help(self) -> None:
        """Show help screen."""
        try:
            self.push_screen(HelpScreen())
        except Exception as e:
            logger.error(f"Error showing help screen: {e}")
            self.notify("❌ Cannot show help", severity="error")


def main():
    """Entry point for the TAPEDECK application.

    Handles initialization errors and provides user-friendly error messages.
    """
    try:
        logger.info("=" * 60)
        logger.info("TAPEDECK starting up")
        logger.info("=" * 60)

        app = TapedeckApp()
        app.run()

        logger.info("TAPEDECK shut down cleanly")

    except KeyboardInterrupt:
        logger.info("TAPEDECK interrupted by user")
        print("\n\nGoodbye! 👋\n")
        exit(0)
    except Exception as e:
        logger.critical(f"Unexpected fatal error: {type(e).__name__}: {e}", exc_info=True)
        print("\n❌ TAPEDECK encountered an unexpected error\n")
        print(f"{type(e).__name__}: {e}\n")
        print(f"Check {log_file} for more details.\n")
        exit(1)


if __name__ == "__main__":
    main()
