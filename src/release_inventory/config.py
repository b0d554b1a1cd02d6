"""Configuration and environment for the release inventory."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Inventory settings loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_prefix="RELEASE_INVENTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Kubernetes
    kubeconfig: Path | None = Field(
        default=None,
        description="Path to kubeconfig; uses KUBECONFIG env or default location if unset",
    )
    context: str | None = Field(default=None, description="Kubernetes context to use")
    in_cluster_only: bool = Field(
        default=False,
        description="Only use in-cluster configuration; never fall back to kubeconfig",
    )
    request_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout forwarded to every list call; client default if unset",
    )

    # Fetch behavior
    parallel_fetch: bool = Field(
        default=False,
        description="List pods, services and deployments concurrently",
    )


def get_settings() -> Settings:
    """Return validated settings instance."""
    return Settings()
