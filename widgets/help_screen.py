from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from styles import COLOR_BACKGROUND, COLOR_DIM, COLOR_FOREGROUND, COLOR_HIGHLIGHT

# (section, [(keys, description), ...]) in display order
KEY_REFERENCE = (
    ("Tabs", [
        ("1-5", "Now Playing, Library, Playlists, Queue, Settings"),
        ("←/→", "Previous/next tab"),
    ]),
    ("Lists", [
        ("↑/↓", "Move selection (seek ±5s on Now Playing)"),
        ("Enter", "Open, play, jump to queue row or toggle setting"),
        ("b/Backspace", "Back to the parent list"),
        ("o", "Options for the selected album or title"),
        ("a", "Add selection to the queue"),
        ("d", "Delete selected queue row"),
    ]),
    ("Playback", [
        ("Space/p", "Play/Pause"),
        ("s", "Stop"),
        (".", "Next track"),
        (",", "Previous track"),
        ("+/=", "Volume up"),
        ("-", "Volume down"),
    ]),
    ("Other", [
        ("u", "Update the server database and reload"),
        ("h/?", "Show this help"),
        ("q", "Quit"),
    ]),
)

KEY_COLUMN = 13


def render_key_reference() -> Text:
    """Key reference grouped by section."""
    result = Text()
    result.append("TAPEDECK - Terminal MPD Browser\n", style=f"bold {COLOR_HIGHLIGHT}")
    for section, keys in KEY_REFERENCE:
        result.append(f"\n{section.upper()}\n", style="bold")
        for key, description in keys:
            result.append(f"  {key:<{KEY_COLUMN}}", style=COLOR_HIGHLIGHT)
            result.append(f"{description}\n", style=COLOR_FOREGROUND)
    result.append(
        "\nServer: TAPEDECK_HOST/TAPEDECK_PORT, then MPD_HOST/MPD_PORT (default localhost:6600)",
        style=COLOR_DIM,
    )
    return result


class HelpScreen(ModalScreen[None]):
    """Modal key reference."""

    BINDINGS = [
        ("escape", "dismiss", "Close"),
        ("j", "scroll_help(1)", "Down"),
        ("k", "scroll_help(-1)", "Up"),
    ]

    DEFAULT_CSS = f"""
    HelpScreen {{
        align: center middle;
    }}

    #keys-panel {{
        width: 72;
        height: 80%;
        background: {COLOR_BACKGROUND};
        border: thick {COLOR_HIGHLIGHT};
        padding: 1 2;
    }}

    #keys-scroll {{
        height: 1fr;
    }}

    #keys-close {{
        width: 100%;
        color: {COLOR_HIGHLIGHT};
        border: solid {COLOR_HIGHLIGHT};
    }}
    """

    def compose(self) -> ComposeResult:
        with Container(id="keys-panel"):
            with VerticalScroll(id="keys-scroll"):
                yield Static(render_key_reference())
            yield Button("Close (Esc)", id="keys-close")

    def on_mount(self) -> None:
        self.query_one("#keys-close", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "keys-close":
            self.dismiss()

    def action_scroll_help(self, direction: int) -> None:
        scroll = self.query_one("#keys-scroll", VerticalScroll)
        if direction > 0:
            scroll.scroll_down()
        else:
            scroll.scroll_up()
