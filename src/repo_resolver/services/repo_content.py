"""Repository content use case — routes each call to the provider that owns the URL.

Azure DevOps URLs are served by the REST fast path.  Everything else goes to
the optional fallback provider (typically a native git backend).  The
dispatch happens here, once, so providers never have to recognise URLs they
do not own.
"""

from __future__ import annotations

import logging
from pathlib import Path

from repo_resolver.domain.entities import CloneOptions, FetchOptions
from repo_resolver.domain.exceptions import UnsupportedRepositoryError
from repo_resolver.domain.ports.repo_provider import RepoProvider
from repo_resolver.domain.value_objects import is_azure_url

logger = logging.getLogger(__name__)


class RepoContentService:
    """Uniform entry point for fetching repository content."""

    def __init__(
        self,
        azure_provider: RepoProvider,
        fallback_provider: RepoProvider | None = None,
    ) -> None:
        self._azure = azure_provider
        self._fallback = fallback_provider

    def provider_for(self, repository_url: str) -> RepoProvider:
        """Pick the provider responsible for *repository_url*."""
        if is_azure_url(repository_url):
            return self._azure
        if self._fallback is not None:
            return self._fallback
        raise UnsupportedRepositoryError(
            f"No provider configured for repository URL '{repository_url}'"
        )

    async def download(
        self,
        destination: str | Path,
        options: CloneOptions,
        *,
        timeout: float | None = None,
    ) -> None:
        provider = self.provider_for(options.repository_url)
        await provider.download(destination, options, timeout=timeout)

    async def latest_commit_id(
        self, options: FetchOptions, *, timeout: float | None = None
    ) -> str:
        provider = self.provider_for(options.repository_url)
        return await provider.latest_commit_id(options, timeout=timeout)

    async def list_remote(
        self, options: CloneOptions, *, timeout: float | None = None
    ) -> list[str]:
        provider = self.provider_for(options.repository_url)
        return await provider.list_remote(options, timeout=timeout)

    async def list_tree(
        self, options: FetchOptions, *, timeout: float | None = None
    ) -> list[str]:
        provider = self.provider_for(options.repository_url)
        paths = await provider.list_tree(options, timeout=timeout)
        logger.debug(
            "Listed %d paths for %s @ %s",
            len(paths),
            options.repository_url,
            options.reference_name,
        )
        return paths

    def remove_cache(self, options: CloneOptions) -> None:
        """Invalidate cached state, e.g. after the caller pushed to the repository."""
        self.provider_for(options.repository_url).remove_cache(options)
