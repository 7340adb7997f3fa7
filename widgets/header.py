from textual.widgets import Static
from textual.reactive import reactive
from textual.containers import Horizontal
from textual.app import ComposeResult
from rich.text import Text
from styles import COLOR_HIGHLIGHT, COLOR_MUTED, COLOR_DIM, COLOR_FOREGROUND

TAB_TITLES = ("Now Playing", "Library", "Playlists", "Queue", "Settings")
TAB_DIVIDER = " │ "
PLAYING_ICON = "▶"
PAUSED_ICON = "⏸"


def render_tabs(active: int, is_playing: bool) -> Text:
    result = Text()
    result.append(f" {PLAYING_ICON if is_playing else PAUSED_ICON} ", style=f"{COLOR_HIGHLIGHT} bold")
    for index, title in enumerate(TAB_TITLES):
        if index:
            result.append(TAB_DIVIDER, style=COLOR_DIM)
        if index == active:
            result.append(f"{index + 1} {title}", style=f"{COLOR_HIGHLIGHT} bold underline")
        else:
            result.append(f"{index + 1} {title}", style=COLOR_FOREGROUND)
    return result


def render_volume(volume_level: int, connected: bool) -> Text:
    result = Text()
    if not connected:
        result.append("offline ", style=f"{COLOR_MUTED} italic")
        return result
    result.append(f"{volume_level}%", style=f"{COLOR_HIGHLIGHT} bold")
    result.append(" ")
    return result


class Header(Horizontal):
    tab_index: reactive[int] = reactive(0)
    is_playing: reactive[bool] = reactive(False)
    volume_level: reactive[int] = reactive(0)
    is_connected: reactive[bool] = reactive(False)

    DEFAULT_CSS = """
    Header {
        height: 2;
        border-bottom: solid #504945;
    }

    #header-tabs {
        width: 1fr;
    }

    #header-volume {
        width: 10;
        content-align: right middle;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static(render_tabs(self.tab_index, self.is_playing), id="header-tabs")
        yield Static(render_volume(self.volume_level, self.is_connected), id="header-volume")

    def _update_tabs(self) -> None:
        try:
            self.query_one("#header-tabs", Static).update(render_tabs(self.tab_index, self.is_playing))
        except Exception:
            pass

    def _update_volume(self) -> None:
        try:
            self.query_one("#header-volume", Static).update(
                render_volume(self.volume_level, self.is_connected)
            )
        except Exception:
            pass

    def watch_tab_index(self, new_value: int) -> None:
        self._update_tabs()

    def watch_is_playing(self, new_value: bool) -> None:
        self._update_tabs()

    def watch_volume_level(self, new_value: int) -> None:
        self._update_volume()

    def watch_is_connected(self, new_value: bool) -> None:
        self._update_volume()
