"""Environment-based application settings. Read-only; no business logic."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# 50 MiB of characters
MAX_DOCUMENT_CHARS = 50 * 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="docchunk", description="Service name")
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Runtime environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Log level name")

    # Chunking engine limits (see services/chunking/guards)
    max_document_chars: int = Field(
        default=MAX_DOCUMENT_CHARS, ge=1, description="Hard ceiling on document length (characters)"
    )
    default_max_chunk_size: int = Field(
        default=4000, ge=1, description="Chunk size used when a caller passes a non-positive max_chunk_size"
    )
    slow_run_seconds: float = Field(default=30.0, gt=0, description="Duration above which a run is logged as slow")
    memory_warning_mb: int = Field(default=100, ge=1, description="Allocation delta (MiB) above which a run is logged")
    observe_memory: bool = Field(default=False, description="Sample allocation delta with tracemalloc")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Use for app lifetime."""
    return Settings()
