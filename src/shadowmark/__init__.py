"""shadowmark - time markers for shadow-reading practice on videos."""

from shadowmark.identity import InvalidLocationError, video_key
from shadowmark.models import Marker, MarkerSet
from shadowmark.navigation import (
    LoopSegment,
    find_at,
    find_loop_segment,
    find_next,
    find_previous,
)
from shadowmark.store import (
    CorruptRecordError,
    MarkerStore,
    MarkerStoreError,
    StorageError,
)
from shadowmark.timeutils import format_time

__version__ = "0.1.0"

__all__ = [
    "CorruptRecordError",
    "InvalidLocationError",
    "LoopSegment",
    "Marker",
    "MarkerSet",
    "MarkerStore",
    "MarkerStoreError",
    "StorageError",
    "__version__",
    "find_at",
    "find_loop_segment",
    "find_next",
    "find_previous",
    "format_time",
    "video_key",
]
