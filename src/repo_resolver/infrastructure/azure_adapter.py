"""Azure DevOps REST adapter — implements the RepoProvider port."""

from __future__ import annotations

import asyncio
import logging
import tempfile
import zipfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import IO, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from repo_resolver.domain.entities import CloneOptions, FetchOptions, RootItem
from repo_resolver.domain.exceptions import (
    AuthenticationError,
    IncompleteDataError,
    LocalStorageError,
    MalformedResponseError,
    ReferenceNotFoundError,
    RemoteCallError,
    RepositoryNotFoundError,
    RequestTimeoutError,
)
from repo_resolver.domain.ports.archive_extractor import ArchiveExtractor
from repo_resolver.domain.value_objects import AzureRepoLocator
from repo_resolver.infrastructure.archive import ZipArchiveExtractor
from repo_resolver.infrastructure.azure_endpoints import AzureEndpointBuilder
from repo_resolver.infrastructure.azure_schemas import ItemList, RefList, TreeResponse
from repo_resolver.infrastructure.repo_cache import RepoCache
from repo_resolver.services.extension_filter import filter_paths

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)

_HEAD = "HEAD"


@asynccontextmanager
async def _deadline(timeout: float | None, what: str) -> AsyncIterator[None]:
    """Bound the enclosed block by *timeout* seconds (``None`` = unbounded)."""
    try:
        async with asyncio.timeout(timeout):
            yield
    except TimeoutError as exc:
        raise RequestTimeoutError(f"Timed out after {timeout}s trying to {what}") from exc


class AzureDevOpsAdapter:
    """Concrete RepoProvider backed by the Azure DevOps Git REST API (v6.0).

    Refs and file trees are cached in a :class:`RepoCache` owned by this
    instance, so listing a tree and then downloading it does not pay for
    the ref lookup twice.  Nothing here retries; callers own retry policy.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str = "https://dev.azure.com",
        cache: RepoCache | None = None,
        extractor: ArchiveExtractor | None = None,
    ) -> None:
        self._client = client
        self._endpoints = AzureEndpointBuilder(base_url)
        self._cache = cache if cache is not None else RepoCache(enabled=True)
        self._extractor = extractor if extractor is not None else ZipArchiveExtractor()

    @property
    def cache(self) -> RepoCache:
        return self._cache

    # ── Public operations ───────────────────────────────────────────────

    async def download(
        self,
        destination: str | Path,
        options: CloneOptions,
        *,
        timeout: float | None = None,
    ) -> None:
        """Download the repository as a zip and unpack it into *destination*.

        The temporary archive is removed on every exit path.  A failed
        extraction may leave partial content in *destination*.
        """
        locator = AzureRepoLocator.from_string(options.repository_url)
        url = self._endpoints.download_url(locator, options.reference_name)
        auth = _auth(options.username, options.password, locator)

        try:
            tmp = tempfile.NamedTemporaryFile(
                prefix="azure-git-repo-", suffix=".zip", delete=False
            )
        except OSError as exc:
            raise LocalStorageError(f"Failed to create temp file: {exc}") from exc

        archive_path = Path(tmp.name)
        try:
            with tmp:
                async with _deadline(timeout, "download zip"):
                    await self._stream_to_file(url, auth, tmp)
            await self._extract(archive_path, Path(destination))
        finally:
            archive_path.unlink(missing_ok=True)

        logger.info(
            "Downloaded %s @ %s into %s",
            options.repository_url,
            options.reference_name or "default branch",
            destination,
        )

    async def latest_commit_id(
        self, options: FetchOptions, *, timeout: float | None = None
    ) -> str:
        """Return the commit id of the root item at ``options.reference_name``."""
        locator = AzureRepoLocator.from_string(options.repository_url)
        async with _deadline(timeout, "get latest commit"):
            root = await self._get_root_item(locator, options)
        return root.commit_id

    async def list_remote(
        self, options: CloneOptions, *, timeout: float | None = None
    ) -> list[str]:
        """Return the remote's reference names (``HEAD`` excluded) and cache them."""
        async with _deadline(timeout, "list refs"):
            return await self._list_remote(options)

    async def list_tree(
        self, options: FetchOptions, *, timeout: float | None = None
    ) -> list[str]:
        """Return every file path at the reference, filtered by extension."""
        async with _deadline(timeout, "list tree"):
            return await self._list_tree(options)

    def remove_cache(self, options: CloneOptions) -> None:
        """Evict cached refs for the repository and its tree at the given reference."""
        self._cache.invalidate(options.repository_url, options.reference_name)
        logger.info(
            "Evicted cache for %s @ %r", options.repository_url, options.reference_name
        )

    # ── Resolution steps ────────────────────────────────────────────────

    async def _list_remote(self, options: CloneOptions) -> list[str]:
        locator = AzureRepoLocator.from_string(options.repository_url)
        url = self._endpoints.refs_url(locator)
        resp = await self._api_get(
            url, _auth(options.username, options.password, locator), "list refs"
        )
        refs = _decode(resp, RefList, "refs")

        names = [ref.name for ref in refs.value if ref.name != _HEAD]
        self._cache.set_refs(options.repository_url, names)
        return names

    async def _list_tree(self, options: FetchOptions) -> list[str]:
        cached = self._cache.get_tree(options.repository_url, options.reference_name)
        if cached is not None:
            logger.debug(
                "Tree cache hit for %s @ %s", options.repository_url, options.reference_name
            )
            return filter_paths(cached, options.extensions)

        refs = self._cache.get_refs(options.repository_url)
        if refs is None:
            refs = await self._list_remote(options.as_clone_options())
        if options.reference_name not in refs:
            raise ReferenceNotFoundError(
                f"Reference '{options.reference_name}' not found in {options.repository_url}"
            )

        locator = AzureRepoLocator.from_string(options.repository_url)
        root = await self._get_root_item(locator, options)

        url = self._endpoints.tree_url(locator, root.object_id)
        resp = await self._api_get(
            url, _auth(options.username, options.password, locator), "list tree"
        )
        tree = _decode(resp, TreeResponse, "tree")

        all_paths = [entry.relative_path for entry in tree.tree_entries]
        self._cache.set_tree(options.repository_url, options.reference_name, all_paths)
        return filter_paths(all_paths, options.extensions)

    async def _get_root_item(
        self, locator: AzureRepoLocator, options: FetchOptions
    ) -> RootItem:
        url = self._endpoints.root_item_url(locator, options.reference_name)
        resp = await self._api_get(
            url,
            _auth(options.username, options.password, locator),
            "get repository root item",
        )
        items = _decode(resp, ItemList, "items")

        if not items.value or not items.value[0].commit_id:
            raise IncompleteDataError(
                f"Failed to get latest commit id in {options.repository_url}"
            )
        first = items.value[0]
        return RootItem(object_id=first.object_id, commit_id=first.commit_id, path=first.path)

    # ── HTTP helpers ────────────────────────────────────────────────────

    async def _api_get(
        self, url: str, auth: httpx.BasicAuth | None, purpose: str
    ) -> httpx.Response:
        """Perform an Azure DevOps API GET request with error translation."""
        logger.debug("GET %s (%s)", url, purpose)
        try:
            resp = await self._client.get(url, auth=auth)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(f"Timed out trying to {purpose}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise RemoteCallError(f"Failed to {purpose}: {exc}") from exc

        _raise_for_status(resp, purpose)
        return resp

    async def _stream_to_file(
        self, url: str, auth: httpx.BasicAuth | None, fh: IO[bytes]
    ) -> None:
        logger.debug("GET %s (download zip)", url)
        try:
            async with self._client.stream("GET", url, auth=auth) as resp:
                _raise_for_status(resp, "download zip")
                async for chunk in resp.aiter_bytes():
                    await asyncio.to_thread(fh.write, chunk)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(f"Timed out downloading zip: {exc}") from exc
        except httpx.HTTPError as exc:
            raise RemoteCallError(f"Failed to download zip: {exc}") from exc
        except OSError as exc:
            raise LocalStorageError(
                f"Failed to save HTTP response to {fh.name}: {exc}"
            ) from exc

    async def _extract(self, archive_path: Path, destination: Path) -> None:
        try:
            await asyncio.to_thread(self._extractor.extract, archive_path, destination)
        except (OSError, zipfile.BadZipFile) as exc:
            raise LocalStorageError(f"Failed to unzip file: {exc}") from exc


def _auth(
    username: str, password: str, locator: AzureRepoLocator
) -> httpx.BasicAuth | None:
    """Call-scoped credentials win over URL-embedded ones."""
    if username or password:
        return httpx.BasicAuth(username, password)
    if locator.has_credentials:
        return httpx.BasicAuth(locator.username, locator.password)
    return None


def _raise_for_status(resp: httpx.Response, purpose: str) -> None:
    status = resp.status_code
    if status == 200:
        return

    if status == 404:
        raise RepositoryNotFoundError(
            f"Repository not found while trying to {purpose}. "
            "Check that the repository URL is correct."
        )

    # Azure answers 203 with a sign-in page when credentials are missing
    if status in (401, 203):
        raise AuthenticationError(
            f"Authentication failed while trying to {purpose}. "
            "Check the username and personal access token."
        )

    raise RemoteCallError(
        f'Failed to {purpose} with a status "{status} {resp.reason_phrase}"',
        status_code=status,
    )


def _decode(resp: httpx.Response, model: type[_M], what: str) -> _M:
    try:
        return model.model_validate_json(resp.content)
    except ValidationError as exc:
        raise MalformedResponseError(f"Could not parse Azure {what} response: {exc}") from exc
