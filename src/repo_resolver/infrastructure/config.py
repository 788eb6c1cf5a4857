"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from ``REPO_RESOLVER_*`` env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_prefix="REPO_RESOLVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    azure_base_url: str = "https://dev.azure.com"
    cache_enabled: bool = True
    http_timeout_seconds: float = 300.0
    # Azure DevOps Server installs often sit behind self-signed certificates
    tls_verify: bool = False
    trust_env_proxy: bool = True
    download_root: str = "/tmp/repo-resolver"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
