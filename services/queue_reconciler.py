from __future__ import annotations

import logging
from typing import Sequence

from models.item import Item, Kind
from models.selectable_list import BoundaryPolicy, SelectableList
from models.track import Track
from services.playback_client import PlaybackClient, RemoteUnavailable
from styles import NOW_PLAYING_STYLE

logger = logging.getLogger(__name__)

RETENTION_THRESHOLD = 20


class QueueReconciler:
    """Mirror of the server queue holding only the current and upcoming songs.

    ``drained`` counts the already-played songs cut from the head of the
    mirror. It is the only bridge between a row of the displayed queue and
    the server's absolute queue index, so every command addressing a queue
    row goes through :meth:`to_remote`.
    """

    def __init__(self, client: PlaybackClient, queue_list: SelectableList | None = None):
        self.client = client
        self.list = queue_list if queue_list is not None else SelectableList(policy=BoundaryPolicy.WRAP)
        self.drained = 0
        self.highlight_index: int | None = None

    @property
    def items(self) -> list[Item]:
        return self.list.items

    def refresh(self, snapshot: Sequence[Track], current_index: int | None) -> tuple[list[Item], int | None]:
        """Rebuild the mirror from a queue snapshot.

        Args:
            snapshot: Every queued track, in server order.
            current_index: Absolute index of the playing song, or None.

        Returns:
            Tuple of (display items, row of the playing song or None).
        """
        items: list[Item] = []
        drained = 0
        for absolute, track in enumerate(snapshot):
            position = track.position if track.position is not None else absolute
            if not items and current_index is not None and position < current_index:
                drained += 1
                continue
            items.append(Item(track.title, Kind.PLAIN))

        highlight = None
        if current_index is not None and 0 <= current_index - drained < len(items):
            highlight = current_index - drained
            items[highlight] = items[highlight].with_decoration(NOW_PLAYING_STYLE)

        self.drained = drained
        self.highlight_index = highlight
        self.list.replace_items(items)

        if current_index is not None and current_index > RETENTION_THRESHOLD:
            try:
                self.client.delete_at(0)
                # every remote index below the mirror moved down by one
                self.drained = max(0, self.drained - 1)
                logger.debug(f"Trimmed oldest queue entry (playing #{current_index})")
            except RemoteUnavailable as e:
                logger.debug(f"Queue trim skipped: {e}")

        return items, highlight

    def sync(self) -> tuple[list[Item], int | None]:
        """Fetch the queue and current position and rebuild from them.

        Raises:
            RemoteUnavailable: If the server cannot be queried
        """
        snapshot = self.client.queue_snapshot()
        current = self.client.current_track_position()
        return self.refresh(snapshot, current)

    def to_remote(self, local_index: int, one_based: bool = False) -> int:
        """Translate a displayed row into the server's absolute queue index."""
        return local_index + self.drained + (1 if one_based else 0)

    def delete_row(self, local_index: int | None = None) -> bool:
        """Remove a displayed row (the selected one by default) from the server queue.

        Raises:
            RemoteUnavailable: If the deletion or the following refresh fails
        """
        if local_index is None:
            local_index = self.list.selected
        if local_index is None or not 0 <= local_index < len(self.list):
            return False

        self.client.delete_at(self.to_remote(local_index))
        self.sync()
        self.list.select_last()
        return True

    def play_row(self, local_index: int | None = None) -> bool:
        """Switch playback to a displayed row (the selected one by default).

        Raises:
            RemoteUnavailable: If the server rejects the switch
        """
        if local_index is None:
            local_index = self.list.selected
        if local_index is None or not 0 <= local_index < len(self.list):
            return False

        self.client.switch_to(self.to_remote(local_index))
        return True
