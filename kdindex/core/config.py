"""Library configuration using Pydantic Settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings, overridable through ``KDINDEX_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="KDINDEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Index Configuration
    default_index_type: Literal["auto", "kdtree", "linear"] = "auto"
    kdtree_partition: Literal["select", "sort"] = "select"
    thread_safe: bool = True

    # Query Configuration
    default_distance: str = "euclidean"
    default_minkowski_p: float = Field(default=2.0, ge=1.0)
    default_k: int = Field(default=10, ge=0)

    # Logging Configuration
    log_level: str = "INFO"
    log_queries: bool = False
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# Global settings instance
settings = Settings()
