"""Error types raised while handling a subtitle upload."""

from __future__ import annotations

from typing import Any


class SubtitleSyncError(Exception):
    """Base error carrying the HTTP status and payload for the caller."""

    status_code = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(SubtitleSyncError):
    """Missing upload field or unsupported subtitle extension."""

    status_code = 400


class ConversionError(SubtitleSyncError):
    """Reading the SRT source or writing the WebVTT output failed."""


class ProbeError(SubtitleSyncError):
    """The media prober could not analyze the video."""


class DeliveryError(SubtitleSyncError):
    """The subtitle could not be sent back to the caller."""


class CleanupError(SubtitleSyncError):
    """A temporary artifact could not be deleted. Logged, never returned."""
