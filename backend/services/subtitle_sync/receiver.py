"""Persist multipart uploads to the temporary upload directory."""

from __future__ import annotations

from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from shared.file_utils import ensure_directory, unique_upload_path
from shared.subtitle_models import UploadedArtifact

CHUNK_SIZE = 1024 * 1024


async def save_upload(upload: UploadFile, upload_dir: str | Path) -> UploadedArtifact:
    """Stream ``upload`` to a unique path under ``upload_dir``."""
    ensure_directory(upload_dir)
    original_filename = upload.filename or ""
    target = unique_upload_path(upload_dir, original_filename)

    try:
        with open(target, "wb") as out:
            while chunk := await upload.read(CHUNK_SIZE):
                await run_in_threadpool(out.write, chunk)
    except Exception:
        target.unlink(missing_ok=True)
        raise
    finally:
        await upload.close()

    return UploadedArtifact(path=target, original_filename=original_filename)
