"""
Tests for the text rendering helpers behind the list, header and position widgets.
"""
from models.item import Item, Kind
from models.selectable_list import SelectableList
from styles import HIGHLIGHT_STYLE
from widgets.header import render_tabs, render_volume
from widgets.help_screen import render_key_reference
from widgets.position_bar import render_position, render_status_line
from widgets.tree_list import render_window


class TestRenderWindow:
    """Tests for drawing the visible slice of a list."""

    def test_visible_slice(self, make_list):
        selectable = make_list(10, kind=Kind.PLAIN)
        selectable.select(5)

        lines = render_window(selectable, 3).plain.split("\n")

        assert lines == [" item 3", " item 4", " item 5"]
        assert selectable.cursor.offset == 3

    def test_indent_by_kind(self):
        selectable = SelectableList.of(["One"], Kind.ALBUM)
        assert render_window(selectable, 5).plain == "    One"

    def test_selection_highlighted(self, make_list):
        selectable = make_list(3, kind=Kind.PLAIN)
        selectable.select(1)
        text = render_window(selectable, 3)

        styled = [text.plain[span.start:span.end] for span in text.spans if span.style == HIGHLIGHT_STYLE]
        assert styled == ["item 1"]

    def test_empty_list(self):
        assert render_window(SelectableList(), 5).plain == ""

    def test_decoration_kept(self):
        selectable = SelectableList([Item("Now", Kind.PLAIN, "italic"), Item("Next")])
        selectable.select(1)
        text = render_window(selectable, 2)
        assert any(span.style == "italic" for span in text.spans)


class TestPositionBar:
    """Tests for the progress line."""

    def test_half_way(self):
        assert render_position(0.5, 10).plain == "─" * 5 + "╸" + " " * 4

    def test_fraction_glyph(self):
        assert render_position(0.57, 10).plain == "─" * 5 + "╼" + " " * 4

    def test_full(self):
        assert render_position(1.0, 8).plain == "─" * 8

    def test_empty(self):
        assert render_position(0.0, 4).plain == "╸   "

    def test_no_width(self):
        assert render_position(0.3, 0).plain == ""


class TestStatusLine:
    """Tests for the elapsed/title/duration line."""

    def test_layout(self):
        plain = render_status_line(65, 200, "Song", 30).plain
        assert len(plain) == 30
        assert plain.startswith(" 01:05")
        assert plain.endswith("03:20 ")
        assert "Song" in plain

    def test_long_title_truncated(self):
        plain = render_status_line(0, 0, "A very long song title indeed", 20).plain
        assert len(plain) == 20
        assert "…" in plain


class TestHeader:
    """Tests for the tab strip and volume readout."""

    def test_tabs(self):
        plain = render_tabs(1, True).plain
        assert "▶" in plain
        assert "2 Library" in plain
        assert "5 Settings" in plain

    def test_paused_icon(self):
        assert "⏸" in render_tabs(0, False).plain

    def test_volume(self):
        assert render_volume(42, True).plain.strip() == "42%"
        assert render_volume(42, False).plain.strip() == "offline"


class TestHelp:
    """Tests for the key reference text."""

    def test_lists_every_section(self):
        plain = render_key_reference().plain
        for section in ("TABS", "LISTS", "PLAYBACK", "OTHER"):
            assert section in plain
        assert "Delete selected queue row" in plain
