"""Tests for marker data models."""

import json

import pytest
from pydantic import ValidationError

from shadowmark.models import Marker, MarkerSet


class TestMarker:
    """Tests for Marker."""

    def test_create_by_field_name(self) -> None:
        """Test creating a marker with Python field names."""
        marker = Marker(time_ms=2000, label="a")
        assert marker.time_ms == 2000
        assert marker.label == "a"

    def test_create_by_alias(self) -> None:
        """Test creating a marker from JSON field names."""
        marker = Marker.model_validate({"timeMs": 2000, "label": "a"})
        assert marker == Marker(time_ms=2000, label="a")

    def test_negative_time_rejected(self) -> None:
        """Test that negative times are rejected."""
        with pytest.raises(ValidationError):
            Marker(time_ms=-1, label="before start")

    @pytest.mark.parametrize("value", [True, False])
    def test_boolean_time_rejected(self, value: bool) -> None:
        """Test that JSON booleans are not accepted as times."""
        with pytest.raises(ValidationError):
            Marker.model_validate({"timeMs": value, "label": "x"})

    def test_numeric_string_time_accepted(self) -> None:
        """Test that numeric strings are still coerced."""
        assert Marker.model_validate({"timeMs": "1500", "label": "x"}).time_ms == 1500

    def test_label_required(self) -> None:
        """Test that a label must be given."""
        with pytest.raises(ValidationError):
            Marker.model_validate({"timeMs": 1})

    def test_label_is_opaque(self) -> None:
        """Test that arbitrary label text is kept as-is."""
        marker = Marker(time_ms=0, label="  标记了 00:00:00\n")
        assert marker.label == "  标记了 00:00:00\n"

    def test_frozen_and_hashable(self) -> None:
        """Test that markers are immutable and usable in sets."""
        marker = Marker(time_ms=1, label="x")
        with pytest.raises(ValidationError):
            marker.time_ms = 2
        assert len({marker, Marker(time_ms=1, label="x")}) == 1


class TestMarkerSet:
    """Tests for MarkerSet."""

    def test_sorted_by_time(self) -> None:
        """Test that sorting orders markers ascending by time."""
        marker_set = MarkerSet(
            video_uri="X",
            markers=[
                Marker(time_ms=9000, label="c"),
                Marker(time_ms=1000, label="a"),
                Marker(time_ms=5000, label="b"),
            ],
        )
        ordered = marker_set.sorted_by_time()
        assert [m.time_ms for m in ordered.markers] == [1000, 5000, 9000]
        assert [m.time_ms for m in marker_set.markers] == [9000, 1000, 5000]

    def test_sort_is_stable_for_duplicates(self) -> None:
        """Test that markers sharing a time keep their order."""
        marker_set = MarkerSet(
            video_uri="X",
            markers=[
                Marker(time_ms=5000, label="first"),
                Marker(time_ms=1000, label="a"),
                Marker(time_ms=5000, label="second"),
            ],
        )
        labels = [m.label for m in marker_set.sorted_by_time().markers]
        assert labels == ["a", "first", "second"]

    def test_to_json_layout(self) -> None:
        """Test the on-disk field names and ordering."""
        marker_set = MarkerSet(
            video_uri="content://video/1",
            markers=[Marker(time_ms=12345, label="marked at 00:00:12")],
        )
        data = json.loads(marker_set.to_json())
        assert list(data) == ["videoUri", "markers"]
        assert data["videoUri"] == "content://video/1"
        assert data["markers"] == [{"timeMs": 12345, "label": "marked at 00:00:12"}]

    def test_to_json_keeps_non_ascii(self) -> None:
        """Test that non-ASCII text is written unescaped."""
        marker_set = MarkerSet(video_uri="/视频.mp4", markers=[])
        assert "/视频.mp4" in marker_set.to_json()

    def test_from_json(self) -> None:
        """Test parsing a record written by another tool."""
        text = '{"videoUri": "X", "markers": [{"timeMs": 2000, "label": "a"}]}'
        marker_set = MarkerSet.from_json(text)
        assert marker_set.video_uri == "X"
        assert marker_set.markers == [Marker(time_ms=2000, label="a")]

    def test_from_json_does_not_sort(self) -> None:
        """Test that loading keeps file order."""
        text = json.dumps(
            {
                "videoUri": "X",
                "markers": [
                    {"timeMs": 3000, "label": "b"},
                    {"timeMs": 1000, "label": "a"},
                ],
            }
        )
        marker_set = MarkerSet.from_json(text)
        assert [m.time_ms for m in marker_set.markers] == [3000, 1000]

    def test_from_json_wrong_shape(self) -> None:
        """Test that a record missing fields fails validation."""
        with pytest.raises(ValidationError):
            MarkerSet.from_json('{"markers": []}')

    def test_from_json_invalid_json(self) -> None:
        """Test that malformed JSON raises a decode error."""
        with pytest.raises(json.JSONDecodeError):
            MarkerSet.from_json('{"videoUri": ')
