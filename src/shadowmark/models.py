"""Data models for shadowmark."""

import json

from pydantic import BaseModel, Field, field_validator


class Marker(BaseModel):
    """A labelled point in time on a video."""

    time_ms: int = Field(
        ..., ge=0, alias="timeMs", description="Milliseconds from video start"
    )
    label: str = Field(..., description="Display text, stored as given")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("time_ms", mode="before")
    @classmethod
    def reject_bool_time(cls, v):
        """Reject booleans, which would otherwise coerce to 0 or 1."""
        if isinstance(v, bool):
            raise ValueError("timeMs must be an integer, not a boolean")
        return v


class MarkerSet(BaseModel):
    """All markers recorded for one video.

    Attributes:
        video_uri: Location string the set was last saved under
        markers: Markers in file order (ascending once saved)
    """

    video_uri: str = Field(..., alias="videoUri")
    markers: list[Marker] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    def sorted_by_time(self) -> "MarkerSet":
        """Return a copy with markers ordered ascending by time.

        The sort is stable, so markers sharing a time keep their order.
        """
        ordered = sorted(self.markers, key=lambda marker: marker.time_ms)
        return self.model_copy(update={"markers": ordered})

    def to_json(self) -> str:
        """Serialize to the on-disk JSON layout."""
        payload = self.model_dump(by_alias=True)
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"

    @classmethod
    def from_json(cls, json_str: str) -> "MarkerSet":
        """Deserialize from JSON string."""
        data = json.loads(json_str)
        return cls.model_validate(data)
