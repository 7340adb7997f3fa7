from textual.app import ComposeResult
from textual.containers import Container, Vertical
from textual.widgets import Static
from rich.text import Text
from models.status import PlaybackStatus
from models.track import Track
from styles import COLOR_HIGHLIGHT, COLOR_MUTED, COLOR_DIM


def render_modes(status: PlaybackStatus) -> Text:
    """Repeat/random/single/consume indicators."""
    result = Text(" ")
    for label, enabled in (
        ("repeat", status.repeat),
        ("random", status.random),
        ("single", status.single),
        ("consume", status.consume),
    ):
        result.append(f"{label} ", style=f"{COLOR_HIGHLIGHT} bold" if enabled else COLOR_DIM)
    return result


class NowPlayingView(Container):
    """Artist, album and playback modes of the current song."""

    DEFAULT_CSS = f"""
    NowPlayingView {{
        padding: 1 1;
    }}

    NowPlayingView .np-label {{
        color: {COLOR_HIGHLIGHT};
        text-style: bold;
    }}

    NowPlayingView .np-value {{
        padding: 0 0 1 2;
    }}
    """

    def compose(self) -> ComposeResult:
        """Compose the now playing view with track info."""
        with Vertical():
            yield Static("Title:", classes="np-label")
            yield Static("No track playing", id="np-title", classes="np-value")
            yield Static("Artist:", classes="np-label")
            yield Static("Unknown Artist", id="np-artist", classes="np-value")
            yield Static("Album:", classes="np-label")
            yield Static("Unknown Album", id="np-album", classes="np-value")
            yield Static(render_modes(PlaybackStatus()), id="np-modes")

    def update_track(self, track: Track | None, status: PlaybackStatus) -> None:
        """Refresh every field from the latest server state."""
        try:
            if track:
                self.query_one("#np-title", Static).update(track.title)
                self.query_one("#np-artist", Static).update(track.artist)
                self.query_one("#np-album", Static).update(track.album)
            else:
                self.query_one("#np-title", Static).update(Text("No track playing", style=COLOR_MUTED))
                self.query_one("#np-artist", Static).update("Unknown Artist")
                self.query_one("#np-album", Static).update("Unknown Album")
            self.query_one("#np-modes", Static).update(render_modes(status))
        except Exception:
            pass
