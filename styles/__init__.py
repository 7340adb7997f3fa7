"""Shared style constants for TAPEDECK."""

COLORS = {
    "foreground": "#918374",
    "background": "#282828",
    "highlight": "#d3bd97",
    "selected": "#4f4c4b",
    "muted": "#7c6f64",
    "dim": "#504945",
}

COLOR_FOREGROUND = COLORS["foreground"]
COLOR_BACKGROUND = COLORS["background"]
COLOR_HIGHLIGHT = COLORS["highlight"]
COLOR_SELECTED = COLORS["selected"]
COLOR_MUTED = COLORS["muted"]
COLOR_DIM = COLORS["dim"]

HIGHLIGHT_STYLE = f"bold {COLOR_HIGHLIGHT}"
NOW_PLAYING_STYLE = f"italic {COLOR_HIGHLIGHT}"
