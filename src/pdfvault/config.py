"""Application configuration from environment variables."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pdfvault.domain.value_objects import ConflictPolicy

MAX_UPLOAD_BYTES = 800 * 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="PDFVAULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Storage
    storage_root: Path = Field(
        default=Path("var/documents"),
        description="Directory holding the stored PDF files",
    )
    create_storage_root: bool = Field(
        default=True,
        description="Create the storage root on startup if it is missing",
    )
    max_upload_bytes: int = Field(
        default=MAX_UPLOAD_BYTES,
        gt=0,
        description="Largest accepted upload in bytes",
    )
    chunk_size: int = Field(
        default=64 * 1024,
        gt=0,
        description="Read/write chunk size for streaming",
    )
    default_on_conflict: ConflictPolicy = Field(
        default=ConflictPolicy.OVERWRITE,
        description="What an upload does when the filename already exists",
    )

    # HTTP
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3001, description="Bind port")
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed CORS origins",
    )

    # Application
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment name",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
