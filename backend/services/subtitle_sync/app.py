"""Subtitle sync service API endpoints."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.background import BackgroundTask

from services.subtitle_sync import __version__
from services.subtitle_sync.errors import SubtitleSyncError
from services.subtitle_sync.prober import MediaProber
from services.subtitle_sync.workflow import UploadWorkflow
from shared.config import config
from shared.file_utils import ensure_directory
from shared.logging_utils import setup_logging
from shared.response_models import ErrorResponse, FormatInfo, FormatsResponse, HealthResponse
from shared.subtitle_models import MediaToolConfig

logger = setup_logging("subtitle-sync-service")


def build_tool_config() -> MediaToolConfig:
    """Snapshot the configured media tool locations."""
    return MediaToolConfig(
        ffmpeg_path=config.get("ffmpeg_path", "ffmpeg"),
        ffprobe_path=config.get("ffprobe_path", "ffprobe"),
        probe_timeout_seconds=config.get("probe_timeout_seconds", 30.0),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_directory(config.get("upload_dir", "uploads"))
    app.state.tool_config = build_tool_config()
    app.state.prober = MediaProber(app.state.tool_config)
    logger.info(
        "Subtitle sync service ready (uploads: %s, ffprobe: %s)",
        config.get("upload_dir"),
        app.state.tool_config.ffprobe_path,
    )
    yield


app = FastAPI(
    title="Subtitle Sync Service",
    description="Normalize uploaded subtitles to WebVTT alongside their video",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("allowed_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def upload_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed upload fields as missing files."""
    if request.url.path != "/upload":
        return await request_validation_exception_handler(request, exc)
    logger.warning(f"Upload failed validation: {exc.errors()}")
    error = ErrorResponse(error="Both video and subtitle files are required")
    return JSONResponse(status_code=400, content=error.model_dump(exclude_none=True))


def _error_response(error: SubtitleSyncError, workflow: UploadWorkflow) -> JSONResponse:
    background = BackgroundTask(workflow.cleanup, list(workflow.artifacts)) if workflow.artifacts else None
    return JSONResponse(status_code=error.status_code, content=error.to_payload(), background=background)


@app.post(
    "/upload",
    response_class=FileResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_files(
    video: UploadFile | None = File(None),
    subtitle: UploadFile | None = File(None),
):
    """Accept a video and a subtitle file and return the subtitle as WebVTT.

    SRT subtitles are converted, WebVTT subtitles are returned unchanged. The
    video is probed to confirm it is a readable media file. Uploaded and
    converted files are deleted shortly after the response has been sent.
    """
    workflow = UploadWorkflow(
        prober=app.state.prober,
        cleanup_delay_seconds=config.get("cleanup_delay_seconds", 1.0),
    )

    try:
        result = await workflow.run(video, subtitle, config.get("upload_dir", "uploads"))
        workflow.check_deliverable(result)
    except SubtitleSyncError as e:
        log = logger.warning if e.status_code < 500 else logger.error
        log(f"Upload failed in state {workflow.state.value}: {e.message} ({e.details or 'no details'})")
        return _error_response(e, workflow)
    except Exception as e:
        logger.error(f"Error processing files: {e}")
        return _error_response(SubtitleSyncError("Error processing files", details=str(e)), workflow)

    return FileResponse(
        result.subtitle_path,
        media_type="text/vtt",
        filename=result.download_filename,
        background=BackgroundTask(workflow.cleanup, result.cleanup_paths),
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for the subtitle sync service."""
    tool_config = app.state.tool_config
    return HealthResponse(
        status="ok",
        message="Subtitle Sync Service is healthy",
        version=__version__,
        upload_dir=str(config.get("upload_dir")),
        dependencies={
            "ffmpeg_path": tool_config.ffmpeg_path,
            "ffprobe_path": tool_config.ffprobe_path,
        },
    )


@app.get("/formats", response_model=FormatsResponse)
async def get_supported_formats() -> FormatsResponse:
    """Get list of accepted subtitle formats."""
    return FormatsResponse(
        formats=[
            FormatInfo(
                name="SRT",
                extension="srt",
                mime_type="application/x-subrip",
                description="SubRip subtitle format, converted to WebVTT",
                converted=True,
            ),
            FormatInfo(
                name="WebVTT",
                extension="vtt",
                mime_type="text/vtt",
                description="Web Video Text Tracks format, returned unchanged",
                converted=False,
            ),
        ],
        output_format="vtt",
    )


if __name__ == "__main__":
    try:
        import uvicorn
    except ImportError as e:
        raise RuntimeError("uvicorn must be installed to run this service.") from e
    uvicorn.run(app, host=config.get("host", "0.0.0.0"), port=config.get("port", 3000))
