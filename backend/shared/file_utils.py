"""
File and path utilities for temporary upload storage.
"""

import uuid
from pathlib import Path


def sanitize_filename(filename: str) -> str:
    """Sanitize filename for safe storage."""
    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        filename = filename.replace(char, "_")
    return filename.strip().lstrip(".")


def ensure_directory(path: str | Path) -> None:
    """Ensure directory exists, create if not."""
    Path(path).mkdir(parents=True, exist_ok=True)


def unique_upload_path(upload_dir: str | Path, original_filename: str) -> Path:
    """Build a request-unique storage path that keeps the original name readable."""
    safe_name = sanitize_filename(Path(original_filename or "").name) or "upload"
    return Path(upload_dir) / f"{uuid.uuid4().hex}_{safe_name}"


def file_extension(filename: str) -> str:
    """Return the lowercased extension of ``filename`` including the dot."""
    return Path(filename or "").suffix.lower()
