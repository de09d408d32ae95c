import logging
import secrets
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings."""

    APP_NAME: str = "Potluck API"
    API_PREFIX: str = "/api"

    # Database
    DATABASE_URL: str = "sqlite:///./data/potluck.db"
    AUTO_CREATE_TABLES: bool = True

    # JWT Authentication
    SECRET_KEY: str = Field(default="", description="JWT secret key - should be set in .env file")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days

    # File Storage
    UPLOAD_DIR: str = "./uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"
    MAX_FILE_SIZE: int = 5 * 1024 * 1024  # 5MB
    ALLOWED_EXTENSIONS: set[str] = {
        ".jpg",
        ".jpeg",
        ".png",
        ".gif",
        ".webp",
    }

    # Feed
    FEED_PAGE_SIZE: int = 50

    # Frontend origin for CORS
    CLIENT_URL: str = "http://localhost:5173"

    # Development settings
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    def model_post_init(self, __context: Any) -> None:
        """Fill in a temporary secret when none is configured."""
        if not self.SECRET_KEY:
            logger.warning("SECRET_KEY not set in .env file. Generating a temporary one.")
            logger.warning("Issued tokens will not survive a restart; set SECRET_KEY for production.")
            self.SECRET_KEY = secrets.token_urlsafe(32)


settings = Settings()
