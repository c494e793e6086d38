"""
Configuration management for the Health Check Service
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal


class Settings(BaseSettings):
    """Health check service configuration loaded from environment variables"""

    # Auth Service Integration
    # Set to 'auth' when running next to the auth service in Docker
    AUTH_SERVICE_HOST_NAME: str = "localhost"
    AUTH_SERVICE_PORT: int = 50051

    # Probe Configuration
    PROBE_INTERVAL_SECONDS: float = Field(5.0, gt=0)
    PROBE_TIMEOUT_SECONDS: float = Field(2.0, gt=0)
    PROBE_MODE: Literal["cycle", "liveness"] = "cycle"

    # Reporter Configuration
    REPORTER_CAPACITY: int = Field(100, ge=1)

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def AUTH_SERVICE_URL(self) -> str:
        return f"http://{self.AUTH_SERVICE_HOST_NAME}:{self.AUTH_SERVICE_PORT}"


# Global settings instance
settings = Settings()
