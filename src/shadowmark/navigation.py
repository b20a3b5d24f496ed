"""Positional queries over a sorted marker list."""

from __future__ import annotations

from typing import Optional, Sequence

from pydantic import BaseModel, Field, field_validator

from shadowmark.models import Marker


class LoopSegment(BaseModel):
    """Span between two markers that playback is confined to."""

    start_ms: int = Field(..., ge=0)
    end_ms: int = Field(..., ge=0)

    model_config = {"frozen": True}

    @field_validator("end_ms")
    @classmethod
    def end_after_start(cls, v, info):
        """Validate that end_ms > start_ms."""
        if "start_ms" in info.data and v <= info.data["start_ms"]:
            raise ValueError("end_ms must be greater than start_ms")
        return v

    def contains(self, position_ms: int) -> bool:
        """Whether position_ms lies in [start_ms, end_ms)."""
        return self.start_ms <= position_ms < self.end_ms


def find_previous(markers: Sequence[Marker], position_ms: int) -> Optional[Marker]:
    """Return the last marker strictly before position_ms."""
    return next((m for m in reversed(markers) if m.time_ms < position_ms), None)


def find_next(markers: Sequence[Marker], position_ms: int) -> Optional[Marker]:
    """Return the first marker strictly after position_ms."""
    return next((m for m in markers if m.time_ms > position_ms), None)


def find_at(markers: Sequence[Marker], position_ms: int) -> Optional[Marker]:
    """Return a marker at exactly position_ms."""
    return next((m for m in markers if m.time_ms == position_ms), None)


def find_loop_segment(
    markers: Sequence[Marker], position_ms: int
) -> Optional[LoopSegment]:
    """Find the segment surrounding a playback position.

    The segment starts at the last marker at or before position_ms and
    ends at the first marker after it. Standing on a marker therefore
    loops the segment that begins there.

    Args:
        markers: Markers sorted ascending by time
        position_ms: Current playback position

    Returns:
        LoopSegment, or None when there is no marker on either side
    """
    start = next((m for m in reversed(markers) if m.time_ms <= position_ms), None)
    end = find_next(markers, position_ms)
    if start is None or end is None:
        return None
    return LoopSegment(start_ms=start.time_ms, end_ms=end.time_ms)
