"""Subtitle sync service.

This service handles:
- Receiving a video and a subtitle file (SRT or WebVTT)
- Normalizing SRT subtitles to WebVTT
- Probing the video with ffprobe to confirm it is a readable media file
- Returning the WebVTT subtitle and cleaning up temporary uploads
"""

__version__ = "1.0.0"
