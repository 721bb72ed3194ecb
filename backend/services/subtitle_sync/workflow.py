"""Per-request coordination of a subtitle upload."""

from __future__ import annotations

import asyncio
from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from services.subtitle_sync.converter import convert_srt_file, derive_vtt_path
from services.subtitle_sync.errors import CleanupError, DeliveryError, ValidationError
from services.subtitle_sync.prober import MediaProber
from services.subtitle_sync.receiver import save_upload
from shared.enums import SubtitleFormat, WorkflowState
from shared.file_utils import file_extension
from shared.logging_utils import setup_logging
from shared.subtitle_models import UploadedArtifact, WorkflowResult

logger = setup_logging("subtitle-workflow")


class UploadWorkflow:
    """Drive one upload from validation to cleanup.

    An instance is created per request and moves through ``WorkflowState`` in
    order: validate, pick the format branch, convert SRT if needed, probe the
    video, hand the subtitle over for delivery and finally clean up. Every file
    written on behalf of the request is recorded in ``artifacts`` so it can be
    removed whichever way the request ends.
    """

    def __init__(self, prober: MediaProber, cleanup_delay_seconds: float = 1.0):
        if cleanup_delay_seconds <= 0:
            raise ValueError("cleanup_delay_seconds must be positive")
        self.prober = prober
        self.cleanup_delay_seconds = cleanup_delay_seconds
        self.state = WorkflowState.VALIDATING
        self.artifacts: list[Path] = []

    def validate(self, video: UploadFile | None, subtitle: UploadFile | None) -> None:
        self.state = WorkflowState.VALIDATING
        if video is None or subtitle is None:
            raise ValidationError("Both video and subtitle files are required")

    def detect_format(self, filename: str) -> SubtitleFormat:
        """Pick the branch from the subtitle's extension, case-insensitively."""
        self.state = WorkflowState.FORMAT_BRANCH
        subtitle_format = SubtitleFormat.from_extension(file_extension(filename))
        if subtitle_format is None:
            self.state = WorkflowState.REJECTED
            raise ValidationError("Unsupported subtitle format. Please upload an SRT or VTT file.")
        return subtitle_format

    async def run(
        self,
        video: UploadFile | None,
        subtitle: UploadFile | None,
        upload_dir: str | Path,
    ) -> WorkflowResult:
        """Validate and store the uploads, then prepare the subtitle for delivery."""
        self.validate(video, subtitle)
        subtitle_format = self.detect_format(subtitle.filename or "")

        video_artifact = await save_upload(video, upload_dir)
        self.artifacts.append(video_artifact.path)
        subtitle_artifact = await save_upload(subtitle, upload_dir)
        self.artifacts.append(subtitle_artifact.path)

        return await self.prepare(video_artifact, subtitle_artifact, subtitle_format)

    async def prepare(
        self,
        video: UploadedArtifact,
        subtitle: UploadedArtifact,
        subtitle_format: SubtitleFormat,
    ) -> WorkflowResult:
        if subtitle_format is SubtitleFormat.SRT:
            self.state = WorkflowState.CONVERTING_SRT
            subtitle_path = derive_vtt_path(subtitle.path)
            self._track(subtitle_path)
            await run_in_threadpool(convert_srt_file, subtitle.path, subtitle_path)
        else:
            self.state = WorkflowState.PASSTHROUGH_VTT
            subtitle_path = subtitle.path

        self.state = WorkflowState.PROBING
        logger.info("Processing video: %s", video.path)
        metadata = await self.prober.probe(video.path)
        logger.info("Video duration: %s seconds", metadata.duration)

        return WorkflowResult(
            subtitle_path=subtitle_path,
            download_filename=self.download_filename(subtitle.original_filename),
            source_format=subtitle_format,
            metadata=metadata,
            cleanup_paths=list(self.artifacts),
        )

    def check_deliverable(self, result: WorkflowResult) -> None:
        """Confirm the subtitle can be streamed before response headers are sent."""
        self.state = WorkflowState.RESPONDING
        if not result.subtitle_path.is_file():
            raise DeliveryError(
                "Error sending subtitle file",
                details=f"{result.subtitle_path.name} is no longer available",
            )

    async def cleanup(self, paths: list[Path] | None = None) -> None:
        """Delete temporary artifacts after a short delay.

        Failures are logged and never raised; the response has already been
        committed by the time this runs.
        """
        self.state = WorkflowState.CLEANING_UP
        targets = list(self.artifacts if paths is None else paths)
        await asyncio.sleep(self.cleanup_delay_seconds)

        for path in targets:
            try:
                if path.exists():
                    path.unlink()
                    logger.debug("Removed temporary file %s", path)
            except OSError as exc:
                error = CleanupError("Error cleaning up files", details=str(exc))
                logger.error("%s: %s", error.message, error.details)

        self.state = WorkflowState.DONE

    @staticmethod
    def download_filename(original_filename: str) -> str:
        stem = Path(original_filename or "").stem
        return f"{stem or 'subtitle'}.vtt"

    def _track(self, path: Path) -> None:
        if path not in self.artifacts:
            self.artifacts.append(path)
