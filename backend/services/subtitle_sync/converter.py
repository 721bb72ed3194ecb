"""SRT to WebVTT conversion."""

from __future__ import annotations

import re
from pathlib import Path

from services.subtitle_sync.errors import ConversionError
from shared.logging_utils import setup_logging

logger = setup_logging("subtitle-converter")

VTT_HEADER = "WEBVTT\n\n"
SRT_TIMESTAMP_PATTERN = re.compile(r"(\d{2}):(\d{2}):(\d{2}),(\d{3})")


def convert_srt_to_vtt(srt_text: str) -> str:
    """Convert SRT text to WebVTT text.

    Carriage returns are dropped, every ``HH:MM:SS,mmm`` timestamp becomes
    ``HH:MM:SS.mmm`` and each newline is doubled so that every original line is
    followed by a blank one. The ``WEBVTT`` header is prepended. Cue numbering
    and timing ranges are not validated.
    """
    body = srt_text.replace("\r", "")
    body = SRT_TIMESTAMP_PATTERN.sub(r"\1:\2:\3.\4", body)
    body = body.replace("\n", "\n\n")
    return VTT_HEADER + body


def derive_vtt_path(subtitle_path: str | Path) -> Path:
    """Return the sibling ``.vtt`` path sharing the subtitle's base name."""
    return Path(subtitle_path).with_suffix(".vtt")


def convert_srt_file(srt_path: str | Path, vtt_path: str | Path) -> Path:
    """Convert the SRT file at ``srt_path`` and write the result to ``vtt_path``.

    Bytes that are not valid UTF-8 are replaced with U+FFFD rather than
    rejected.

    Raises:
        ConversionError: If the source cannot be read or the output cannot be written
    """
    source = Path(srt_path)
    target = Path(vtt_path)
    try:
        srt_text = source.read_text(encoding="utf-8", errors="replace")
        target.write_text(convert_srt_to_vtt(srt_text), encoding="utf-8")
    except OSError as exc:
        logger.error("Error converting SRT to VTT: %s", exc)
        raise ConversionError("Error converting subtitle file", details=str(exc)) from exc

    logger.info("Converted %s to %s", source.name, target.name)
    return target
