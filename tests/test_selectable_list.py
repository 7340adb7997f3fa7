"""
Tests for SelectableList - cursor movement, boundary policies, empty lists.
"""
from models.item import Item, Kind
from models.selectable_list import BoundaryPolicy, SelectableList


class TestCursorMovement:
    """Tests for advance/retreat under both policies."""

    def test_starts_on_first_item(self, make_list):
        assert make_list(3).selected == 0

    def test_clamp_stops_at_ends(self, make_list):
        selectable = make_list(4)
        for _ in range(10):
            selectable.advance()
        assert selectable.selected == 3
        for _ in range(10):
            selectable.retreat()
        assert selectable.selected == 0

    def test_wrap_cycles(self, make_list):
        selectable = make_list(4, policy=BoundaryPolicy.WRAP)
        for _ in range(4):
            selectable.advance()
        assert selectable.selected == 0
        selectable.retreat()
        assert selectable.selected == 3

    def test_wrap_full_cycle_backwards(self, make_list):
        selectable = make_list(5, policy=BoundaryPolicy.WRAP)
        for _ in range(5):
            selectable.retreat()
        assert selectable.selected == 0

    def test_none_selection_moves_to_first(self, make_list):
        selectable = make_list(3)
        selectable.select(None)
        selectable.advance()
        assert selectable.selected == 0

    def test_selected_item(self, make_list):
        selectable = make_list(3)
        selectable.advance()
        assert selectable.selected_item().label == "item 1"


class TestEmptyList:
    """Movement on an empty list never fails."""

    def test_empty_has_no_selection(self):
        assert SelectableList().selected is None

    def test_moves_are_safe(self):
        selectable = SelectableList(policy=BoundaryPolicy.WRAP)
        selectable.advance()
        selectable.retreat()
        selectable.select_last()
        assert selectable.selected is None
        assert selectable.selected_item() is None

    def test_kind_of_empty_list(self):
        assert SelectableList().kind is None


class TestSelection:
    """Tests for explicit selection and item replacement."""

    def test_select_clamps(self, make_list):
        selectable = make_list(3)
        selectable.select(99)
        assert selectable.selected == 2
        selectable.select(-4)
        assert selectable.selected == 0

    def test_select_none_resets_offset(self, make_list):
        selectable = make_list(10)
        selectable.cursor.offset = 4
        selectable.select(None)
        assert selectable.selected is None
        assert selectable.cursor.offset == 0

    def test_select_last_pulls_back(self, make_list):
        selectable = make_list(5)
        selectable.select(4)
        selectable.items = selectable.items[:3]
        selectable.select_last()
        assert selectable.selected == 2
        assert selectable.cursor.offset == 0

    def test_select_last_keeps_valid_selection(self, make_list):
        selectable = make_list(5)
        selectable.select(1)
        selectable.select_last()
        assert selectable.selected == 1

    def test_replace_items_shrinks_selection(self, make_list):
        selectable = make_list(5)
        selectable.select(4)
        selectable.replace_items([Item("only", Kind.PLAIN)])
        assert selectable.selected == 0

    def test_replace_items_with_nothing(self, make_list):
        selectable = make_list(5)
        selectable.replace_items([])
        assert selectable.selected is None

    def test_replace_items_restores_selection(self):
        selectable = SelectableList()
        selectable.replace_items([Item("a"), Item("b")])
        assert selectable.selected == 0

    def test_of_sets_kind(self):
        selectable = SelectableList.of(["One", "Two"], Kind.ALBUM)
        assert selectable.kind is Kind.ALBUM
        assert len(selectable) == 2


class TestWindow:
    """Tests for the remembered scroll offset."""

    def test_window_remembers_offset(self, make_list):
        selectable = make_list(20)
        selectable.select(10)
        assert selectable.window(5) == (6, 11)
        assert selectable.cursor.offset == 6

        selectable.retreat()
        assert selectable.window(5) == (6, 11)

    def test_window_accounts_for_indent_width(self):
        """Album rows are indented, so a 6-cell label wraps at width 8."""
        selectable = SelectableList.of(["abcdef", "ghijkl"], Kind.ALBUM)
        selectable.select(1)
        assert selectable.window(2, width=8) == (1, 2)
