"""Configuration system for shadowmark."""

from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    """Application settings with support for environment variables."""

    storage_dir: Path = Field(
        default_factory=lambda: Path.home() / ".local" / "share" / "shadowmark",
        description="Directory holding one marker file per video",
    )
    marker_suffix: str = Field(
        default=".markers.json",
        description="Filename suffix appended to the video key",
    )
    playback_speeds: Annotated[list[float], NoDecode] = Field(
        default=[0.5, 0.6, 0.7, 0.8, 0.9, 1.0, 1.2],
        description="Playback rates offered to the user",
    )
    default_speed: float = Field(
        default=1.0,
        gt=0.0,
        description="Playback rate applied when a video is opened",
    )
    poll_interval_ms: int = Field(
        default=100,
        ge=1,
        description="How often hosts should call ShadowingSession.tick()",
    )
    log_level: str = Field(default="WARNING", description="Root logging level")

    model_config = {
        "env_prefix": "SHADOWMARK_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    @field_validator("marker_suffix")
    @classmethod
    def validate_marker_suffix(cls, v: str) -> str:
        """Validate that the suffix is a plain file extension."""
        if not v.startswith(".") or "/" in v or "\\" in v:
            msg = f"marker_suffix must start with '.' and contain no path separator, got '{v}'"
            raise ValueError(msg)
        return v

    @field_validator("playback_speeds", mode="before")
    @classmethod
    def parse_playback_speeds(cls, v):
        """Parse playback_speeds from comma-separated string if needed."""
        if isinstance(v, str):
            return [float(s.strip()) for s in v.split(",") if s.strip()]
        return v

    @field_validator("playback_speeds")
    @classmethod
    def validate_playback_speeds(cls, v: list[float]) -> list[float]:
        """Validate that every playback speed is positive."""
        if not v:
            raise ValueError("playback_speeds must not be empty")
        if any(speed <= 0 for speed in v):
            raise ValueError(f"playback_speeds must all be positive, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalise the logging level name."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        level = v.upper()
        if level not in allowed_levels:
            msg = f"log_level must be one of {allowed_levels}, got '{v}'"
            raise ValueError(msg)
        return level

    @model_validator(mode="after")
    def default_speed_offered(self) -> "Settings":
        """Validate that default_speed is one of playback_speeds."""
        if self.default_speed not in self.playback_speeds:
            msg = (
                f"default_speed {self.default_speed} must be one of "
                f"playback_speeds {self.playback_speeds}"
            )
            raise ValueError(msg)
        return self
