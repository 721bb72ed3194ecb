"""Tests for file utilities module."""

from pathlib import Path
from unittest.mock import patch

from shared.file_utils import ensure_directory, file_extension, sanitize_filename, unique_upload_path


class TestFileUtils:
    """Test file utility functions."""

    def test_sanitize_filename_basic(self) -> None:
        """Test basic filename sanitization."""
        assert sanitize_filename("My Movie.srt") == "My Movie.srt"

    def test_sanitize_filename_invalid_chars(self) -> None:
        """Test sanitizing filename with invalid characters."""
        result = sanitize_filename('bad/file\\name:with*invalid"chars<>|?.srt')

        for char in '<>:"/\\|?*':
            assert char not in result
        assert result.endswith(".srt")
        assert "_" in result

    def test_sanitize_filename_hidden(self) -> None:
        """Leading dots are dropped so uploads never become hidden files."""
        assert sanitize_filename("..movie.vtt") == "movie.vtt"
        assert sanitize_filename("") == ""

    def test_ensure_directory(self) -> None:
        """Test directory creation."""
        with patch('pathlib.Path.mkdir') as mock_mkdir:
            ensure_directory("/test/path")
            mock_mkdir.assert_called_once_with(parents=True, exist_ok=True)

    def test_unique_upload_path(self, tmp_path: Path) -> None:
        first = unique_upload_path(tmp_path, "movie.srt")
        second = unique_upload_path(tmp_path, "movie.srt")

        assert first != second
        assert first.parent == tmp_path
        assert first.name.endswith("_movie.srt")
        assert first.suffix == ".srt"

    def test_unique_upload_path_strips_directories(self, tmp_path: Path) -> None:
        path = unique_upload_path(tmp_path, "../../etc/passwd.srt")
        assert path.parent == tmp_path
        assert path.name.endswith("_passwd.srt")

    def test_unique_upload_path_without_name(self, tmp_path: Path) -> None:
        assert unique_upload_path(tmp_path, "").name.endswith("_upload")

    def test_file_extension(self) -> None:
        assert file_extension("Movie.SRT") == ".srt"
        assert file_extension("clip.en.vtt") == ".vtt"
        assert file_extension("noext") == ""
        assert file_extension("") == ""
