"""Centralized application settings loaded from environment variables."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./blogcms.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    LOG_LEVEL: str = "INFO"

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # Post fields
    TITLE_MAX_LENGTH: int = 200
    REQUIRE_DESCRIPTION: bool = False
    REQUIRE_CONTENT: bool = False

    # Image upload
    MAX_IMAGE_SIZE: int = 5 * 1024 * 1024  # 5 MiB
    ALLOWED_IMAGE_EXTENSIONS: List[str] = ["jpeg", "jpg", "png", "gif", "webp"]
    UPLOAD_DIR: str = "uploads"

    # Listing
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # Content client
    API_BASE_URL: str = "http://localhost:8000"
    API_TIMEOUT_SECONDS: float = 30.0

    class Config:
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
