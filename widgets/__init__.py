from .header import Header
from .tree_list import TreeList
from .position_bar import PositionBar, StatusBar
from .help_screen import HelpScreen

__all__ = [
    "Header",
    "TreeList",
    "PositionBar",
    "StatusBar",
    "HelpScreen",
]
