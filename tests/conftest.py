"""Shared fixtures for unit tests.

Provides an isolated Config (staging directory under tmp_path), a fake
inference client whose ``generate`` is an AsyncMock, and a FastAPI
TestClient wired to both.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.providers.gemini import GeminiClient
from src.utils.config import Config

# JPEG magic bytes (FF D8 FF) followed by a JFIF header and filler
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01" + b"\x00" * 64
# PNG magic bytes (89 50 4E 47 0D 0A 1A 0A) followed by an IHDR chunk header
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR" + b"\x00" * 64
PDF_BYTES = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n" + b"0" * 64

CONFIG_ENV_VARS = (
    "GEMINI_MODEL",
    "IMAGE_DETECTION_MODEL",
    "HOST",
    "PORT",
    "MAX_IMAGE_SIZE_MB",
    "GEMINI_TIMEOUT_MS",
    "TEMPERATURE",
    "MAX_OUTPUT_TOKENS",
    "CORS_ORIGINS",
)


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def pdf_bytes() -> bytes:
    return PDF_BYTES


@pytest.fixture
def upload_dir(tmp_path):
    """Staging directory for the test (created on demand by UploadStaging)."""
    return tmp_path / "uploads"


@pytest.fixture
def settings(monkeypatch, upload_dir) -> Config:
    """Config built from a clean environment with a fake API key."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GEMINI_API_KEY", "test-gemini-key")
    monkeypatch.setenv("UPLOAD_DIR", str(upload_dir))
    return Config()


@pytest.fixture
def inference_client() -> MagicMock:
    """Fake provider: ``generate`` returns a comma-separated ingredient reply by default."""
    client = MagicMock(spec=GeminiClient)
    client.generate = AsyncMock(return_value="tomato, onion, garlic")
    return client


@pytest.fixture
def api_client(settings, inference_client) -> TestClient:
    """TestClient for an app using the fake inference client."""
    app = create_app(settings, inference_client=inference_client)
    with TestClient(app) as client:
        yield client
