"""
Configuration management for the subtitle sync service.
"""

import json
import os
import shutil
from typing import Any

import yaml

from dotenv import load_dotenv


class ServiceConfig:
    """Configuration management using environment variables and an optional YAML file."""

    def __init__(self) -> None:
        """Initialize configuration by loading environment variables."""
        # Always load .env from the backend directory
        env_path = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.env"))
        load_dotenv(dotenv_path=env_path, override=False)
        self.config: dict[str, Any] = {}
        self.file_config: dict[str, Any] = {}
        self.settings_path = os.getenv(
            "SUBSYNC_SETTINGS_PATH",
            os.path.join(os.path.dirname(__file__), "../../config/subsync.yaml"),
        )
        self.load_settings_file()
        self.load_from_env()

    def load_from_env(self) -> None:
        """Load configuration from environment variables, falling back to the settings file."""
        self.config = {
            "upload_dir": self._setting("UPLOAD_DIR", "upload_dir", "uploads"),
            "ffmpeg_path": self._setting("FFMPEG_PATH", "ffmpeg_path", shutil.which("ffmpeg") or "ffmpeg"),
            "ffprobe_path": self._setting("FFPROBE_PATH", "ffprobe_path", shutil.which("ffprobe") or "ffprobe"),
            "probe_timeout_seconds": float(self._setting("PROBE_TIMEOUT_SECONDS", "probe_timeout_seconds", 30)),
            "cleanup_delay_seconds": float(self._setting("CLEANUP_DELAY_SECONDS", "cleanup_delay_seconds", 1.0)),
            "allowed_origins": self._parse_origins(self._setting("ALLOWED_ORIGINS", "allowed_origins", ["*"])),
            "log_level": str(self._setting("LOG_LEVEL", "log_level", "INFO")).upper(),
            "debug": str(self._setting("DEBUG", "debug", "false")).lower() == "true",
            "host": self._setting("HOST", "host", "0.0.0.0"),
            "port": int(self._setting("PORT", "port", 3000)),
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return self.config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value.

        Args:
            key: Configuration key
            value: Configuration value
        """
        self.config[key] = value

    def reload(self) -> None:
        """Reload configuration from the settings file and environment variables."""
        self.load_settings_file()
        self.load_from_env()

    def load_settings_file(self) -> None:
        """Load optional YAML settings used as defaults beneath environment variables."""
        path = os.path.abspath(self.settings_path)
        try:
            with open(path, "r", encoding="utf-8") as stream:
                data = yaml.safe_load(stream) or {}
        except FileNotFoundError:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {path} must contain a mapping")
        self.file_config = data

    def _setting(self, env_key: str, file_key: str, default: Any) -> Any:
        env_value = os.getenv(env_key)
        if env_value is not None and env_value != "":
            return env_value
        value = self.file_config.get(file_key)
        return default if value is None else value

    @staticmethod
    def _parse_origins(raw: Any) -> list[str]:
        if isinstance(raw, list):
            return [str(origin) for origin in raw]
        return json.loads(raw)


# Global configuration instance
config = ServiceConfig()
