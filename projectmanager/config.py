"""Project Manager Configuration Settings."""

import os
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(BASE_DIR, ".."))
DEFAULT_DB_PATH = os.path.join(PROJECT_ROOT, "data", "projectmanager.db")


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Database
    DATABASE_URL: Optional[str] = None
    DATABASE_ECHO: bool = False

    # Application
    APP_NAME: str = "TECHY | Project Manager"
    APP_VERSION: str = "1.0.0"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

    # Validation rules
    PASSWORD_MIN_LENGTH: int = Field(default=8, ge=1)
    USERNAME_MIN_LENGTH: int = Field(default=3, ge=1)
    PROJECT_NAME_MIN_LENGTH: int = Field(default=3, ge=1)

    @property
    def database_url(self) -> str:
        """Return the configured database URL, falling back to the local SQLite file."""

        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite:///{DEFAULT_DB_PATH}"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
