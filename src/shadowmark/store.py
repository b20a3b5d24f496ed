"""Persistent marker lists, one JSON record per video."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

from pydantic import ValidationError

from shadowmark.config import Settings
from shadowmark.identity import marker_filename
from shadowmark.models import Marker, MarkerSet
from shadowmark.storage import MarkerStorage, MarkerStoreError, StorageError
from shadowmark.timeutils import default_label

logger = logging.getLogger(__name__)

__all__ = [
    "CorruptRecordError",
    "MarkerStore",
    "MarkerStoreError",
    "StorageError",
]


class CorruptRecordError(MarkerStoreError):
    """Exception raised when a marker record exists but cannot be parsed."""

    pass


class MarkerStore:
    """Loads, saves and edits the marker list of each video.

    Every mutation is written through to storage and the result is read
    back, so callers always see the on-disk state rather than a local copy.
    Records that fail to parse are reported, never repaired or deleted.

    Attributes:
        settings: Application settings
        storage: File storage holding the records
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        storage: Optional[MarkerStorage] = None,
    ) -> None:
        """Initialize marker store.

        Args:
            settings: Application settings (uses defaults if None)
            storage: Storage backend (defaults to settings.storage_dir)
        """
        self.settings = settings or Settings()
        self.storage = storage or MarkerStorage(self.settings.storage_dir)
        logger.info(f"Initialized MarkerStore with root={self.storage.root}")

    def _record_name(self, location: str) -> str:
        return marker_filename(location, self.settings.marker_suffix)

    def record_path(self, location: str) -> Path:
        """Get the path of the record backing a video.

        Raises:
            InvalidLocationError: If location is empty
        """
        return self.storage.path_for(self._record_name(location))

    def load_set(self, location: str) -> Optional[MarkerSet]:
        """Load the full marker record for a video.

        Args:
            location: Video URI or path

        Returns:
            Stored MarkerSet, or None if the video has no record yet

        Raises:
            InvalidLocationError: If location is empty
            CorruptRecordError: If the record cannot be parsed
            StorageError: If the record cannot be read
        """
        name = self._record_name(location)
        try:
            raw = self.storage.read_bytes(name)
        except FileNotFoundError:
            logger.debug(f"No marker record for {location}")
            return None

        try:
            marker_set = MarkerSet.from_json(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            msg = f"Corrupt marker record {self.storage.path_for(name)}: {e}"
            logger.error(msg)
            raise CorruptRecordError(msg) from e

        logger.debug(f"Loaded {len(marker_set.markers)} markers for {location}")
        return marker_set

    def load(self, location: str) -> list[Marker]:
        """Load the markers of a video in stored order.

        A video without a record has no markers; that is not an error.

        Args:
            location: Video URI or path

        Returns:
            List of markers, empty if none were saved

        Raises:
            InvalidLocationError: If location is empty
            CorruptRecordError: If the record cannot be parsed
            StorageError: If the record cannot be read
        """
        marker_set = self.load_set(location)
        if marker_set is None:
            return []
        return list(marker_set.markers)

    def save(self, location: str, markers: Iterable[Marker]) -> MarkerSet:
        """Replace the stored markers of a video.

        Markers are sorted ascending by time before writing. The previous
        record stays intact if the write fails.

        Args:
            location: Video URI or path, recorded in the file as given
            markers: Markers to store

        Returns:
            The MarkerSet that was written

        Raises:
            InvalidLocationError: If location is empty
            StorageError: If the record cannot be written
        """
        name = self._record_name(location)
        marker_set = MarkerSet(video_uri=location, markers=list(markers)).sorted_by_time()
        self.storage.write_bytes(name, marker_set.to_json().encode("utf-8"))
        logger.info(f"Saved {len(marker_set.markers)} markers for {location}")
        return marker_set

    def add_marker(
        self, location: str, time_ms: int, label: Optional[str] = None
    ) -> list[Marker]:
        """Add a marker and return the stored list.

        Duplicate times are accepted.

        Args:
            location: Video URI or path
            time_ms: Marker position in milliseconds
            label: Marker text (defaults to "marked at HH:MM:SS")

        Returns:
            The reloaded, sorted marker list

        Raises:
            InvalidLocationError: If location is empty
            CorruptRecordError: If the existing record cannot be parsed
            StorageError: If storage fails
            pydantic.ValidationError: If time_ms is negative
        """
        if label is None:
            label = default_label(time_ms)
        marker = Marker(time_ms=time_ms, label=label)

        markers = self.load(location)
        markers.append(marker)
        self.save(location, markers)
        logger.info(f"Added marker at {time_ms}ms for {location}")
        return self.load(location)

    def remove_marker(self, location: str, time_ms: int) -> list[Marker]:
        """Remove every marker at exactly time_ms and return the stored list.

        Args:
            location: Video URI or path
            time_ms: Position of the markers to remove

        Returns:
            The reloaded, sorted marker list

        Raises:
            InvalidLocationError: If location is empty
            CorruptRecordError: If the existing record cannot be parsed
            StorageError: If storage fails
        """
        markers = self.load(location)
        remaining = [m for m in markers if m.time_ms != time_ms]
        self.save(location, remaining)
        logger.info(
            f"Removed {len(markers) - len(remaining)} marker(s) at {time_ms}ms "
            f"for {location}"
        )
        return self.load(location)
