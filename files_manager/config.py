"""Configuration management using pydantic-settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, model_validator, field_validator
from typing import Optional
import os


VALID_QUEUE_BACKENDS = ["redis", "memory"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    port: int = 5000
    host: str = "0.0.0.0"

    # Database Configuration
    database_url: str = "sqlite:///./data/files_manager.db"

    # Redis Configuration
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: Optional[str] = None
    redis_db: int = 0

    # Application Configuration
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")
    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")

    @model_validator(mode="before")
    @classmethod
    def map_node_env(cls, data: dict) -> dict:
        """Map NODE_ENV to ENVIRONMENT if ENVIRONMENT is not set"""
        if isinstance(data, dict) and not ({"ENVIRONMENT", "environment"} & data.keys()):
            node_env = data.get("NODE_ENV") or os.environ.get("NODE_ENV")
            if node_env:
                data["ENVIRONMENT"] = node_env
        return data

    # Blob Storage
    folder_path: str = Field(default="/tmp/files_manager", description="Directory holding uploaded blobs")

    # Sessions
    session_ttl_seconds: int = Field(default=60 * 60 * 24, description="Lifetime of an auth token in seconds")

    # Listing
    page_size: int = Field(default=20, description="Number of files per listing page")

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v):
        if v <= 0:
            raise ValueError(f"page_size must be positive, got {v}")
        return v

    # Job Queue Configuration
    job_queue_backend: str = Field(default="redis", description="Job queue backend (redis or memory)")
    file_queue_name: str = Field(default="fileQueue", description="Queue consumed by the thumbnail worker")
    user_queue_name: str = Field(default="userQueue", description="Queue consumed by the welcome worker")
    worker_poll_timeout: int = Field(default=1, description="Seconds a worker waits for a job before polling again")

    @field_validator("job_queue_backend", mode="before")
    @classmethod
    def validate_job_queue_backend(cls, v):
        """Normalize and validate the queue backend name"""
        value = str(v).strip().lower()
        if value not in VALID_QUEUE_BACKENDS:
            raise ValueError(
                f"Invalid job_queue_backend: {v}. Valid values: {VALID_QUEUE_BACKENDS}"
            )
        return value


# Global settings instance
settings = Settings()
