"""Tests for video key derivation."""

import re

import pytest

from shadowmark.identity import InvalidLocationError, marker_filename, video_key


class TestVideoKey:
    """Tests for video_key."""

    def test_known_digest(self) -> None:
        """Test that the key is the MD5 hex digest of the location."""
        assert video_key("abc") == "900150983cd24fb0d6963f7d28e17f72"

    def test_key_is_32_lowercase_hex(self) -> None:
        """Test key format for a content URI."""
        key = video_key("content://media/external/video/media/42")
        assert re.fullmatch(r"[0-9a-f]{32}", key)

    def test_deterministic(self) -> None:
        """Test that the same location always yields the same key."""
        location = "/sdcard/Movies/lesson 01.mp4"
        assert video_key(location) == video_key(location)

    def test_distinct_locations_distinct_keys(self) -> None:
        """Test that different locations yield different keys."""
        locations = [
            "/videos/a.mp4",
            "/videos/b.mp4",
            "/videos/a.mp4 ",
            "content://media/external/video/media/1",
            "content://media/external/video/media/2",
        ]
        keys = {video_key(loc) for loc in locations}
        assert len(keys) == len(locations)

    def test_non_ascii_location(self) -> None:
        """Test that non-ASCII locations hash their UTF-8 bytes."""
        key = video_key("/视频/影子跟读.mp4")
        assert re.fullmatch(r"[0-9a-f]{32}", key)

    @pytest.mark.parametrize("location", ["", None])
    def test_empty_location_rejected(self, location) -> None:
        """Test that empty or missing locations fail fast."""
        with pytest.raises(InvalidLocationError):
            video_key(location)

    def test_invalid_location_is_value_error(self) -> None:
        """Test that InvalidLocationError can be caught as ValueError."""
        with pytest.raises(ValueError):
            video_key("")


class TestMarkerFilename:
    """Tests for marker_filename."""

    def test_default_suffix(self) -> None:
        """Test filename uses the markers suffix."""
        assert marker_filename("abc") == "900150983cd24fb0d6963f7d28e17f72.markers.json"

    def test_custom_suffix(self) -> None:
        """Test filename with a custom suffix."""
        assert marker_filename("abc", ".json").endswith("f72.json")
