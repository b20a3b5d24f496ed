"""Stable identifiers for video locations."""

from __future__ import annotations

import hashlib
from typing import Optional

MARKER_SUFFIX = ".markers.json"


class InvalidLocationError(ValueError):
    """Exception raised when a video location is empty or missing."""

    pass


def video_key(location: Optional[str]) -> str:
    """Derive the storage key for a video location.

    Uses the MD5 digest of the UTF-8 encoded location, so the same string
    always maps to the same 32 character lowercase hex key.

    Args:
        location: Video URI or filesystem path

    Returns:
        32 character hex digest, safe to use as a filename stem

    Raises:
        InvalidLocationError: If location is None or empty
    """
    if not location:
        raise InvalidLocationError("Video location must be a non-empty string")
    return hashlib.md5(str(location).encode("utf-8")).hexdigest()


def marker_filename(location: Optional[str], suffix: str = MARKER_SUFFIX) -> str:
    """Return the record filename for a video location."""
    return f"{video_key(location)}{suffix}"
