"""Configuration management for Recipe Vision Service.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Inference provider credential. Never hardcode: supply via env or a secret store
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Text model used for recipe synthesis and video query derivation
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
        # Vision model used for ingredient extraction from images
        self.IMAGE_DETECTION_MODEL: str = os.getenv("IMAGE_DETECTION_MODEL", "gemini-1.5-flash")
        # Server bind address and port
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "5007"))
        # Maximum image size (in MB) accepted by /api/analyze-image. Default: 10 MB
        self.MAX_IMAGE_SIZE_MB: int = int(os.getenv("MAX_IMAGE_SIZE_MB", "10"))
        # Directory where uploads are staged for the lifetime of one request
        self.UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "uploads")
        # Network timeout for a single provider call, in milliseconds
        self.GEMINI_TIMEOUT_MS: int = int(os.getenv("GEMINI_TIMEOUT_MS", "60000"))
        # LLM Model Parameters
        # Temperature: 0.7 leaves room for creative recipes
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))
        # Max Output Tokens: 2048 fits the eight recipe sections comfortably
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "2048"))
        # Comma-separated list of allowed CORS origins ("*" allows all)
        self.CORS_ORIGINS: list[str] = [
            origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
        ]

    @property
    def max_image_bytes(self) -> int:
        """Upload limit in bytes."""
        return self.MAX_IMAGE_SIZE_MB * 1024 * 1024

    def validate(self) -> None:
        """Validate required configuration.

        Raises:
            ValueError: If the API key is missing or invalid values provided.
        """
        if not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY environment variable is required")
        if not (1 <= self.PORT <= 65535):
            raise ValueError(f"PORT must be between 1 and 65535, got: {self.PORT}")
        if self.MAX_IMAGE_SIZE_MB < 1:
            raise ValueError(
                f"MAX_IMAGE_SIZE_MB must be at least 1, got: {self.MAX_IMAGE_SIZE_MB}"
            )
        if self.GEMINI_TIMEOUT_MS < 1000:
            raise ValueError(
                f"GEMINI_TIMEOUT_MS must be at least 1000, got: {self.GEMINI_TIMEOUT_MS}"
            )
        if not (0.0 <= self.TEMPERATURE <= 2.0):
            raise ValueError(
                f"TEMPERATURE must be between 0.0 and 2.0, got: {self.TEMPERATURE}"
            )
        if self.MAX_OUTPUT_TOKENS < 64:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 64, got: {self.MAX_OUTPUT_TOKENS}"
            )


# Module-level config instance. Validated by the server entry points, not on import
config = Config()
