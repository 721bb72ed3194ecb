"""Video metadata probing through ffprobe."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from services.subtitle_sync.errors import ProbeError
from shared.logging_utils import setup_logging
from shared.subtitle_models import MediaToolConfig, VideoMetadata

logger = setup_logging("media-prober")


class MediaProber:
    """Read container metadata from a media file with ffprobe."""

    def __init__(self, tool_config: MediaToolConfig):
        self.tool_config = tool_config

    def build_command(self, media_path: str | Path) -> list[str]:
        return [
            self.tool_config.ffprobe_path,
            "-v",
            "error",
            "-show_format",
            "-of",
            "json",
            str(media_path),
        ]

    async def probe(self, media_path: str | Path) -> VideoMetadata:
        """Probe ``media_path`` and return its metadata.

        Raises:
            ProbeError: If ffprobe is missing, times out, fails or prints unusable output
        """
        command = self.build_command(media_path)
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ProbeError("Error analyzing video file", details=f"Cannot run ffprobe: {exc}") from exc

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self.tool_config.probe_timeout_seconds
            )
        except asyncio.TimeoutError as exc:
            process.kill()
            await process.wait()
            raise ProbeError(
                "Error analyzing video file",
                details=f"ffprobe timed out after {self.tool_config.probe_timeout_seconds}s",
            ) from exc

        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip() or f"exit code {process.returncode}"
            raise ProbeError("Error analyzing video file", details=message)

        return self.parse_output(stdout.decode("utf-8", errors="replace"))

    @staticmethod
    def parse_output(raw: str) -> VideoMetadata:
        """Parse ffprobe ``-show_format -of json`` output."""
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ProbeError("Error analyzing video file", details=f"Invalid ffprobe output: {exc}") from exc

        fmt: dict[str, Any] = data.get("format") if isinstance(data, dict) else None
        if not isinstance(fmt, dict):
            raise ProbeError("Error analyzing video file", details="ffprobe reported no format information")

        return VideoMetadata(
            duration=_to_number(fmt.get("duration"), float),
            format_name=fmt.get("format_name"),
            size=_to_number(fmt.get("size"), int),
            bit_rate=_to_number(fmt.get("bit_rate"), int),
        )


def _to_number(value: Any, kind: type) -> Any:
    if value in (None, "", "N/A"):
        return None
    try:
        return kind(value)
    except (TypeError, ValueError):
        logger.debug("Ignoring non-numeric ffprobe value: %r", value)
        return None
