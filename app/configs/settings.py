"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the blog API.
"""

from pathlib import Path
from typing import Literal

from pydantic import SecretStr
from pydantic_settings.main import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Field length caps applied by the sanitizer ---
MAX_TITLE_LENGTH = 200
MAX_CONTENT_LENGTH = 50000
MAX_AUTHOR_LENGTH = 100
MAX_EXCERPT_LENGTH = 500
MAX_TAG_LENGTH = 50
MAX_TAGS_COUNT = 10
MAX_SLUG_LENGTH = 100

MAX_COMMENT_AUTHOR_LENGTH = 100
MAX_COMMENT_EMAIL_LENGTH = 254
MAX_COMMENT_CONTENT_LENGTH = 5000

# --- Pagination ---
MAX_PAGE = 1000
MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10

# Response constants
DEFAULT_ERROR_MESSAGE = "Internal server error"
UNKNOWN_CLIENT = "unknown"


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Blog Edge API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Environment
    ENVIRONMENT: Literal["development", "testing", "staging", "production"] = "development"
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/app.log"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./blog.db"
    DATABASE_ECHO: bool = False
    DB_STATEMENT_TIMEOUT: float = 10.0  # seconds
    POOL_SIZE: int = 5
    MAX_OVERFLOW: int = 10
    POOL_RECYCLE: int = 1800

    # Authentication
    API_SECRET: SecretStr | None = None
    AUTH_CONSTANT_TIME_COMPARE: bool = True

    # Rate limiting (fixed window)
    RATE_LIMIT_REQUESTS: int = 60
    RATE_LIMIT_WINDOW: int = 60  # seconds
    CLIENT_IP_HEADER: str = "CF-Connecting-IP"

    # CORS
    ALLOWED_ORIGINS: list[str] = [
        "http://localhost:8787",
        "http://localhost:3000",
    ]

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured store is SQLite."""
        return self.DATABASE_URL.startswith("sqlite")


settings = Settings()
