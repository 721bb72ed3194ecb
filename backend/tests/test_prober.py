"""Tests for the ffprobe-backed media prober."""

import asyncio
import json

import pytest

from services.subtitle_sync.errors import ProbeError
from services.subtitle_sync.prober import MediaProber
from shared.subtitle_models import MediaToolConfig


class FakeProcess:
    def __init__(self, stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0, delay: float = 0.0):
        self._stdout = stdout
        self._stderr = stderr
        self._delay = delay
        self.returncode = returncode
        self.killed = False

    async def communicate(self):
        if self._delay:
            await asyncio.sleep(self._delay)
        return self._stdout, self._stderr

    def kill(self) -> None:
        self.killed = True

    async def wait(self) -> int:
        return self.returncode


@pytest.fixture
def prober() -> MediaProber:
    return MediaProber(MediaToolConfig(ffprobe_path="/opt/tools/ffprobe", probe_timeout_seconds=0.5))


def _patch_exec(monkeypatch, process: FakeProcess, calls: list | None = None) -> None:
    async def fake_exec(*args, **kwargs):
        if calls is not None:
            calls.append(args)
        return process

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_exec)


class TestMediaProber:
    """Test probing behaviour."""

    def test_build_command_uses_configured_path(self, prober: MediaProber) -> None:
        command = prober.build_command("/tmp/video.mp4")
        assert command[0] == "/opt/tools/ffprobe"
        assert command[-1] == "/tmp/video.mp4"
        assert "-show_format" in command

    @pytest.mark.asyncio
    async def test_probe_returns_duration(self, prober: MediaProber, monkeypatch) -> None:
        output = json.dumps(
            {"format": {"duration": "12.480000", "format_name": "matroska,webm", "size": "2048", "bit_rate": "1312"}}
        ).encode()
        calls: list = []
        _patch_exec(monkeypatch, FakeProcess(stdout=output), calls)

        metadata = await prober.probe("/tmp/video.mkv")

        assert metadata.duration == pytest.approx(12.48)
        assert metadata.format_name == "matroska,webm"
        assert metadata.size == 2048
        assert metadata.bit_rate == 1312
        assert calls[0][0] == "/opt/tools/ffprobe"

    @pytest.mark.asyncio
    async def test_probe_nonzero_exit_raises(self, prober: MediaProber, monkeypatch) -> None:
        _patch_exec(
            monkeypatch,
            FakeProcess(stderr=b"/tmp/video.mp4: Invalid data found when processing input", returncode=1),
        )

        with pytest.raises(ProbeError) as exc_info:
            await prober.probe("/tmp/video.mp4")

        assert exc_info.value.message == "Error analyzing video file"
        assert "Invalid data found" in exc_info.value.details

    @pytest.mark.asyncio
    async def test_probe_timeout_kills_process(self, monkeypatch) -> None:
        prober = MediaProber(MediaToolConfig(probe_timeout_seconds=0.01))
        process = FakeProcess(delay=1.0)
        _patch_exec(monkeypatch, process)

        with pytest.raises(ProbeError) as exc_info:
            await prober.probe("/tmp/video.mp4")

        assert process.killed
        assert "timed out" in exc_info.value.details

    @pytest.mark.asyncio
    async def test_missing_executable_raises(self, tmp_path) -> None:
        prober = MediaProber(MediaToolConfig(ffprobe_path=str(tmp_path / "no-ffprobe")))

        with pytest.raises(ProbeError) as exc_info:
            await prober.probe(tmp_path / "video.mp4")

        assert "Cannot run ffprobe" in exc_info.value.details


class TestParseOutput:
    """Test parsing of ffprobe JSON output."""

    def test_missing_duration_is_none(self) -> None:
        metadata = MediaProber.parse_output(json.dumps({"format": {"format_name": "image2", "duration": "N/A"}}))
        assert metadata.duration is None
        assert metadata.format_name == "image2"

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(ProbeError):
            MediaProber.parse_output("not json")

    def test_missing_format_section_raises(self) -> None:
        with pytest.raises(ProbeError):
            MediaProber.parse_output(json.dumps({"streams": []}))
