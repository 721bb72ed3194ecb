import sys
from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

ROOT_DIR = Path(__file__).resolve().parents[1]
PROJECT_ROOT = ROOT_DIR.parent
for path in (PROJECT_ROOT, ROOT_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from services.subtitle_sync.app import app as subtitle_sync_app
from shared.config import config as service_config
from shared.subtitle_models import VideoMetadata


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def mock_prober() -> MagicMock:
    """Prober stand-in reporting a 12.5 second video."""
    prober = MagicMock()
    prober.probe = AsyncMock(return_value=VideoMetadata(duration=12.5, format_name="mov,mp4,m4a,3gp,3g2,mj2"))
    return prober


@pytest.fixture(autouse=True)
def test_environment(upload_dir: Path) -> Generator:
    """Point the service at a per-test upload directory."""
    original = {
        key: service_config.get(key) for key in ("upload_dir", "cleanup_delay_seconds")
    }
    service_config.set("upload_dir", str(upload_dir))
    service_config.set("cleanup_delay_seconds", 0.01)

    try:
        yield
    finally:
        for key, value in original.items():
            service_config.set(key, value)


@pytest.fixture
def client(test_environment, mock_prober: MagicMock) -> Generator[TestClient, None, None]:
    """Test client running the app lifespan, with the prober swapped for a fake."""
    with TestClient(subtitle_sync_app) as test_client:
        subtitle_sync_app.state.prober = mock_prober
        yield test_client
