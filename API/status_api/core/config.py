from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, ConfigDict


class Settings(BaseSettings):
    HOST: str = Field(default="0.0.0.0", description="Address the HTTP server binds to")
    PORT: int = Field(default=8911, ge=1, le=65535, description="Port the HTTP server listens on")

    DOCKER_TIMEOUT: float = Field(
        default=5.0,
        gt=0,
        description="Seconds allowed for a single Docker engine call"
    )

    DOCKER_MAX_POOL_SIZE: int = Field(
        default=10,
        gt=0,
        description="Connections kept open to the Docker socket"
    )

    DISCONNECT_POLL_INTERVAL: float = Field(
        default=0.25,
        gt=0,
        description="Seconds between client disconnect checks while an engine call is pending"
    )

    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = ["*"]

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )
