"""Port: repository content provider — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from repo_resolver.domain.entities import CloneOptions, FetchOptions


class RepoProvider(Protocol):
    """Abstract contract shared by every hosting provider and the native git backend.

    Every coroutine accepts a keyword-only ``timeout`` (seconds) bounding the
    whole operation; ``None`` leaves only the transport timeout in force.
    """

    async def download(
        self,
        destination: str | Path,
        options: CloneOptions,
        *,
        timeout: float | None = None,
    ) -> None:
        """Materialise the repository content at ``options.reference_name`` into *destination*."""
        ...

    async def latest_commit_id(
        self, options: FetchOptions, *, timeout: float | None = None
    ) -> str:
        """Return the commit id the reference currently points to."""
        ...

    async def list_remote(
        self, options: CloneOptions, *, timeout: float | None = None
    ) -> list[str]:
        """Return the remote reference names, excluding ``HEAD``."""
        ...

    async def list_tree(
        self, options: FetchOptions, *, timeout: float | None = None
    ) -> list[str]:
        """Return file paths at the reference, filtered by ``options.extensions``."""
        ...

    def remove_cache(self, options: CloneOptions) -> None:
        """Drop cached refs for the repository and the tree for its reference."""
        ...
