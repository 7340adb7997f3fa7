from .playback_client import PlaybackClient, RemoteUnavailable
from .queue_reconciler import QueueReconciler
from .browser import Browser, Tab, View

__all__ = [
    'PlaybackClient',
    'RemoteUnavailable',
    'QueueReconciler',
    'Browser',
    'Tab',
    'View',
]
