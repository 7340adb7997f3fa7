from .item import Item, Kind, Capability
from .selectable_list import SelectableList, Cursor, BoundaryPolicy
from .breadcrumbs import Breadcrumbs
from .track import Track
from .status import PlaybackStatus, PlaybackState
from .config import ServerConfig

__all__ = [
    "Item",
    "Kind",
    "Capability",
    "SelectableList",
    "Cursor",
    "BoundaryPolicy",
    "Breadcrumbs",
    "Track",
    "PlaybackStatus",
    "PlaybackState",
    "ServerConfig",
]
