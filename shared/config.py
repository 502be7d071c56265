"""
Shared configuration management for the image upload gateway.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="GATEWAY_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Downstream services
    storage_write_url: str = Field(default="http://localhost:3030")
    save_image_url: str = Field(default="http://localhost:3032")
    downstream_timeout_seconds: float = Field(default=30.0)

    # Outbound connection pool
    max_connections: int = Field(default=100)
    max_keepalive_connections: int = Field(default=20)

    # CORS
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator("downstream_timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("downstream_timeout_seconds must be positive")
        return value


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: Optional[int] = None
    host: str = "127.0.0.1"


def get_config(service_name: str, port: int, **overrides) -> ServiceConfig:
    """Get configuration for a specific service.

    ``port`` is only a default: GATEWAY_PORT and explicit overrides win.
    """
    config = ServiceConfig(service_name=service_name, **overrides)
    if config.port is None:
        config.port = port
    return config
