"""
Application Configuration
Location tracker API settings
"""
from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator
from pathlib import Path

# Get the directory where config.py is located
CONFIG_DIR = Path(__file__).resolve().parent
BACKEND_DIR = CONFIG_DIR.parent.parent
ENV_FILE = BACKEND_DIR / ".env"


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Location Tracker API"
    APP_VERSION: str = "2.0.0"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # Database - SQLite by default, Postgres via DATABASE_URL or POSTGRES_URL
    DATABASE_URL: str = "sqlite+aiosqlite:///./locations.db"
    POSTGRES_URL: Optional[str] = None
    DATABASE_ECHO: bool = False

    @model_validator(mode='after')
    def configure_database_url(self):
        """Prefer POSTGRES_URL when set and switch postgres URLs to the asyncpg driver"""
        url = self.POSTGRES_URL or self.DATABASE_URL
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        self.DATABASE_URL = url
        return self

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Query limits
    HISTORY_DEFAULT_LIMIT: int = 50
    HISTORY_MAX_LIMIT: int = 1000
    RECENT_USERS_LIMIT: int = 20

    # Reject latitude outside [-90, 90] and longitude outside [-180, 180] on write
    VALIDATE_COORDINATE_RANGE: bool = True

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            # Handle both JSON array and comma-separated formats
            if v.startswith("["):
                import json
                return json.loads(v)
            return [origin.strip() for origin in v.split(",")]
        return v

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        case_sensitive=True,
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
