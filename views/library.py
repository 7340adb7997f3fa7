from textual.app import ComposeResult
from textual.widgets import Label
from textual.containers import Container
from models.selectable_list import SelectableList
from widgets.tree_list import TreeList


class LibraryView(Container):
    """Titled pane showing the list the browser currently navigates."""

    DEFAULT_CSS = """
    LibraryView {
        padding: 0 1;
    }

    LibraryView > Label {
        color: #d3bd97;
        text-style: bold;
        padding: 0 0 1 0;
    }

    LibraryView.options {
        padding: 0 3;
        border: solid #d3bd97;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the pane with a heading and the list."""
        yield Label("", id="library-heading")
        yield TreeList(id="library-list")

    def show(self, heading: str, selectable: SelectableList | None, options: bool = False) -> None:
        """Swap in the active list and its heading."""
        try:
            self.query_one("#library-heading", Label).update(heading)
            empty_message = "Not connected" if selectable is None else "Nothing here"
            self.query_one("#library-list", TreeList).show(selectable, empty_message)
            self.set_class(options, "options")
        except Exception:
            pass
