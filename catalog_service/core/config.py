"""
Application configuration using Pydantic Settings
"""
from typing import List, Literal
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings"""
    # App
    APP_NAME: str = "Translation Catalog"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./translations.db")

    # Cache
    CACHE_BACKEND: Literal["redis", "memory"] = "redis"
    REDIS_URL: str = Field(default="redis://localhost:6379")
    EXPORT_CACHE_TTL: int = 300  # seconds
    METADATA_CACHE_TTL: int = 3600  # locales / tags lists
    # Disable on backends where SCAN is unavailable or too expensive;
    # tag-filtered exports then live until their TTL runs out.
    EXPORT_CACHE_PATTERN_INVALIDATION: bool = True

    # API
    DEFAULT_EXPORT_LOCALE: str = "en"
    DEFAULT_PER_PAGE: int = 15
    MAX_PER_PAGE: int = 100

    # Server
    PORT: int = Field(default=8000)

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
