"""Pytest configuration and fixtures for integration tests.

Loads .env from the project root and skips the whole directory when no
GEMINI_API_KEY is configured, since every test here calls the real API.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from src.providers.gemini import GeminiClient
from src.utils.config import Config


def pytest_configure(config):
    """Load .env before collection so the key check below sees it."""
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)


@pytest.fixture(scope="session", autouse=True)
def check_api_key():
    """Skip integration tests if GEMINI_API_KEY is not configured."""
    if not os.getenv("GEMINI_API_KEY"):
        pytest.skip(
            "Integration tests skipped. Missing API key: GEMINI_API_KEY. Please set it in your .env file.",
            allow_module_level=True,
        )


@pytest.fixture(scope="session")
def live_settings() -> Config:
    settings = Config()
    settings.validate()
    return settings


@pytest.fixture(scope="session")
def gemini_client(live_settings) -> GeminiClient:
    return GeminiClient.from_config(live_settings)
