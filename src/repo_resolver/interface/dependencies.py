"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx

from repo_resolver.infrastructure.archive import ZipArchiveExtractor
from repo_resolver.infrastructure.azure_adapter import AzureDevOpsAdapter
from repo_resolver.infrastructure.config import Settings, get_settings
from repo_resolver.infrastructure.repo_cache import RepoCache
from repo_resolver.services.repo_content import RepoContentService

_http_client: httpx.AsyncClient | None = None
_cache: RepoCache | None = None
_service: RepoContentService | None = None


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Shared transport: TLS verification, env proxies and timeout come from settings."""
    return httpx.AsyncClient(
        verify=settings.tls_verify,
        trust_env=settings.trust_env_proxy,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
    )


def build_service(
    client: httpx.AsyncClient, settings: Settings, cache: RepoCache
) -> RepoContentService:
    azure = AzureDevOpsAdapter(
        client,
        base_url=settings.azure_base_url,
        cache=cache,
        extractor=ZipArchiveExtractor(),
    )
    return RepoContentService(azure_provider=azure)


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _cache, _service  # noqa: PLW0603

    settings = get_settings()
    _http_client = create_http_client(settings)
    # one service for the process lifetime so its cache is shared across requests
    _cache = RepoCache(enabled=settings.cache_enabled)
    _service = build_service(_http_client, settings, _cache)


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _cache, _service  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    if _cache:
        _cache.clear()
        _cache = None
    _service = None


def get_service() -> RepoContentService:
    """Return the process-wide content service."""
    assert _service is not None, "startup() was not called"
    return _service


def get_app_settings() -> Settings:
    return get_settings()
