"""
Models describing upload artifacts, media metadata and workflow results.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from shared.enums import SubtitleFormat


class MediaToolConfig(BaseModel):
    """Locations of the media tools, fixed once at startup."""

    model_config = ConfigDict(frozen=True)

    ffmpeg_path: str = Field(default="ffmpeg", description="ffmpeg executable")
    ffprobe_path: str = Field(default="ffprobe", description="ffprobe executable")
    probe_timeout_seconds: float = Field(default=30.0, gt=0)


class UploadedArtifact(BaseModel):
    """A file received from the caller and stored in the upload directory."""

    path: Path = Field(..., description="Request-unique storage path")
    original_filename: str = Field(..., description="Filename as sent by the client")


class VideoMetadata(BaseModel):
    """Metadata reported by the media prober."""

    duration: float | None = Field(None, description="Duration in seconds")
    format_name: str | None = None
    size: int | None = None
    bit_rate: int | None = None


class WorkflowResult(BaseModel):
    """Outcome of a prepared upload, ready to be delivered."""

    subtitle_path: Path
    download_filename: str
    source_format: SubtitleFormat
    metadata: VideoMetadata
    cleanup_paths: list[Path] = Field(default_factory=list)
