"""
Configuration management for the authentication service
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Auth service configuration loaded from environment variables"""

    # Server Configuration
    AUTH_HOST: str = "0.0.0.0"
    AUTH_PORT: int = 50051
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Dev monitor
    DEV_MODE: bool = False
    EVENT_LOG_CAPACITY: int = Field(1000, ge=1)

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
