"""
Enums and constants used across the application.
"""

from enum import Enum


class SubtitleFormat(str, Enum):
    """Subtitle formats accepted on upload."""

    SRT = "srt"
    VTT = "vtt"

    @classmethod
    def from_extension(cls, extension: str) -> "SubtitleFormat | None":
        """Map a dotted extension (any case) to a format, or ``None`` if unsupported."""
        normalized = extension.lower().lstrip(".")
        for member in cls:
            if member.value == normalized:
                return member
        return None


class WorkflowState(str, Enum):
    """States an upload passes through while being handled."""

    VALIDATING = "validating"
    FORMAT_BRANCH = "format_branch"
    CONVERTING_SRT = "converting_srt"
    PASSTHROUGH_VTT = "passthrough_vtt"
    REJECTED = "rejected"
    PROBING = "probing"
    RESPONDING = "responding"
    CLEANING_UP = "cleaning_up"
    DONE = "done"
