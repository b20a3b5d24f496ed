"""Shadow-reading session driving a media player from stored markers."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Optional, Protocol

from shadowmark.identity import video_key
from shadowmark.navigation import (
    LoopSegment,
    find_at,
    find_loop_segment,
    find_next,
    find_previous,
)
from shadowmark.store import MarkerStoreError

if TYPE_CHECKING:
    from shadowmark.config import Settings
    from shadowmark.models import Marker
    from shadowmark.store import MarkerStore

logger = logging.getLogger(__name__)


class PlayerState(str, Enum):
    """Playback states reported by a media player."""

    IDLE = "idle"
    BUFFERING = "buffering"
    READY = "ready"
    ENDED = "ended"


class MediaPlayer(Protocol):
    """Playback capability a session controls."""

    def set_source(self, location: str) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def seek(self, time_ms: int) -> None: ...

    def current_position(self) -> int: ...

    def set_playback_rate(self, rate: float) -> None: ...

    def is_playing(self) -> bool: ...


class ShadowingSession:
    """Marker navigation, looping and speed control for one open video.

    The session never polls on its own. Hosts call tick() every
    settings.poll_interval_ms and forward player state changes to
    on_state_changed().

    Attributes:
        store: Marker store backing the session
        player: Media player being controlled
        settings: Application settings
    """

    def __init__(
        self,
        store: MarkerStore,
        player: MediaPlayer,
        settings: Optional[Settings] = None,
    ) -> None:
        """Initialize the session.

        Args:
            store: Marker store to read and write markers
            player: Media player to control
            settings: Application settings (defaults to the store's)
        """
        self.store = store
        self.player = player
        self.settings = settings or store.settings
        self._location: Optional[str] = None
        self._markers: list[Marker] = []
        self._loop: Optional[LoopSegment] = None
        self._speed = self.settings.default_speed
        self._last_error: Optional[MarkerStoreError] = None

    @property
    def location(self) -> Optional[str]:
        return self._location

    @property
    def markers(self) -> list[Marker]:
        return list(self._markers)

    @property
    def loop(self) -> Optional[LoopSegment]:
        return self._loop

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def last_error(self) -> Optional[MarkerStoreError]:
        """Error from the most recent failed marker load, if any."""
        return self._last_error

    def _require_open(self) -> str:
        if self._location is None:
            raise RuntimeError("No video is open")
        return self._location

    def open(self, location: str) -> list[Marker]:
        """Open a video and load its markers.

        A marker record that cannot be loaded leaves the session with no
        markers and the error in last_error; playback still works.

        Args:
            location: Video URI or path

        Returns:
            Loaded markers

        Raises:
            InvalidLocationError: If location is empty
        """
        key = video_key(location)
        self.player.set_source(location)
        self.player.set_playback_rate(self._speed)
        self._location = location
        self._loop = None
        self._last_error = None

        try:
            self._markers = self.store.load(location)
        except MarkerStoreError as e:
            logger.warning(f"Could not load markers for {location}: {e}")
            self._markers = []
            self._last_error = e

        logger.info(
            f"Opened {location} (key {key}) with {len(self._markers)} markers"
        )
        return self.markers

    def mark_here(self, label: Optional[str] = None) -> list[Marker]:
        """Add a marker at the current playback position."""
        location = self._require_open()
        position = self.player.current_position()
        self._markers = self.store.add_marker(location, position, label)
        return self.markers

    def delete_here(self) -> bool:
        """Delete the markers at the current position while paused.

        Returns:
            True if markers were removed
        """
        location = self._require_open()
        if self.player.is_playing():
            logger.debug("Ignoring delete while playing")
            return False

        position = self.player.current_position()
        if find_at(self._markers, position) is None:
            return False

        self._markers = self.store.remove_marker(location, position)
        return True

    def previous_marker(self) -> Optional[Marker]:
        """Marker a jump back would land on."""
        return find_previous(self._markers, self.player.current_position())

    def next_marker(self) -> Optional[Marker]:
        """Marker a jump forward would land on."""
        return find_next(self._markers, self.player.current_position())

    def jump_previous(self) -> Optional[Marker]:
        """Seek to the previous marker, if there is one."""
        marker = self.previous_marker()
        if marker is not None:
            self.player.seek(marker.time_ms)
        return marker

    def jump_next(self) -> Optional[Marker]:
        """Seek to the next marker, if there is one."""
        marker = self.next_marker()
        if marker is not None:
            self.player.seek(marker.time_ms)
        return marker

    def toggle_loop(self) -> Optional[LoopSegment]:
        """Start looping the segment around the current position, or stop.

        Returns:
            The active loop segment, or None if looping is now off
        """
        if self._loop is not None:
            logger.info(f"Loop off ({self._loop.start_ms}-{self._loop.end_ms}ms)")
            self._loop = None
            return None

        segment = find_loop_segment(self._markers, self.player.current_position())
        if segment is not None:
            logger.info(f"Loop on ({segment.start_ms}-{segment.end_ms}ms)")
        self._loop = segment
        return segment

    def set_speed(self, rate: float) -> None:
        """Change the playback rate.

        Raises:
            ValueError: If rate is not one of settings.playback_speeds
        """
        if rate not in self.settings.playback_speeds:
            msg = f"Speed must be one of {self.settings.playback_speeds}, got {rate}"
            raise ValueError(msg)
        self.player.set_playback_rate(rate)
        self._speed = rate

    def tick(self) -> None:
        """Restart the loop once playback reaches its end."""
        if self._loop is None:
            return
        if self.player.current_position() >= self._loop.end_ms:
            self.player.seek(self._loop.start_ms)
            self.player.play()

    def on_state_changed(self, state: PlayerState) -> None:
        """Keep a ready player inside the active loop."""
        if state is not PlayerState.READY or self._loop is None:
            return
        if self.player.current_position() < self._loop.start_ms:
            self.player.seek(self._loop.start_ms)
