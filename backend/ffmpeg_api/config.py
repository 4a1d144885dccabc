"""Service configuration using pydantic settings management.

Values are loaded from FFMPEG_API_* environment variables (or an .env
file) and exposed through the cached `get_settings()`.
"""

import tempfile
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide configuration. Storage credentials come per request."""

    model_config = SettingsConfigDict(
        env_prefix="FFMPEG_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Job directories are created under this root
    temp_root: str = Field(default_factory=tempfile.gettempdir)

    # Name on PATH or absolute path
    ffmpeg_binary: str = "ffmpeg"

    # None waits forever, like the storage fetches
    http_timeout_seconds: Optional[float] = None

    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8080


@lru_cache()
def get_settings() -> Settings:
    return Settings()
