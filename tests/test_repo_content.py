from __future__ import annotations

from pathlib import Path

import pytest

from conftest import REPO_URL, FakeAzure
from repo_resolver.domain.entities import CloneOptions, FetchOptions
from repo_resolver.domain.exceptions import UnsupportedRepositoryError, UrlParseError
from repo_resolver.infrastructure.azure_adapter import AzureDevOpsAdapter
from repo_resolver.services.repo_content import RepoContentService

GITHUB_URL = "https://github.com/org/repo.git"


class RecordingProvider:
    """Stands in for a native git backend."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    async def download(
        self, destination: str | Path, options: CloneOptions, *, timeout: float | None = None
    ) -> None:
        self.calls.append(("download", destination))

    async def latest_commit_id(
        self, options: FetchOptions, *, timeout: float | None = None
    ) -> str:
        self.calls.append(("latest_commit_id", options))
        return "native-sha"

    async def list_remote(
        self, options: CloneOptions, *, timeout: float | None = None
    ) -> list[str]:
        self.calls.append(("list_remote", options))
        return ["refs/heads/native"]

    async def list_tree(
        self, options: FetchOptions, *, timeout: float | None = None
    ) -> list[str]:
        self.calls.append(("list_tree", options))
        return ["native.yml"]

    def remove_cache(self, options: CloneOptions) -> None:
        self.calls.append(("remove_cache", options))


@pytest.mark.asyncio
async def test_list_tree_given_azure_url_when_dispatched_then_azure_provider_used(
    adapter: AzureDevOpsAdapter, fake_azure: FakeAzure
) -> None:
    # Given
    fallback = RecordingProvider()
    service = RepoContentService(adapter, fallback)

    # When
    paths = await service.list_tree(
        FetchOptions(repository_url=REPO_URL, reference_name="refs/heads/main", extensions=(".yml",))
    )

    # Then
    assert paths == ["deploy/stack.yml"]
    assert fallback.calls == []


@pytest.mark.asyncio
async def test_operations_given_other_host_when_dispatched_then_fallback_provider_used(
    adapter: AzureDevOpsAdapter, fake_azure: FakeAzure
) -> None:
    # Given
    fallback = RecordingProvider()
    service = RepoContentService(adapter, fallback)
    clone = CloneOptions(repository_url=GITHUB_URL, reference_name="refs/heads/native")
    fetch = FetchOptions(repository_url=GITHUB_URL, reference_name="refs/heads/native")

    # When
    refs = await service.list_remote(clone)
    paths = await service.list_tree(fetch)
    commit = await service.latest_commit_id(fetch)
    await service.download("/tmp/x", clone)
    service.remove_cache(clone)

    # Then
    assert refs == ["refs/heads/native"]
    assert paths == ["native.yml"]
    assert commit == "native-sha"
    assert [name for name, _ in fallback.calls] == [
        "list_remote",
        "list_tree",
        "latest_commit_id",
        "download",
        "remove_cache",
    ]
    assert fake_azure.requests == []


def test_provider_for_given_no_fallback_when_other_host_then_unsupported_repository(
    adapter: AzureDevOpsAdapter,
) -> None:
    service = RepoContentService(adapter)

    with pytest.raises(UnsupportedRepositoryError) as exc_info:
        service.provider_for(GITHUB_URL)
    assert isinstance(exc_info.value, UrlParseError)


@pytest.mark.asyncio
async def test_remove_cache_given_cached_tree_when_invalidated_through_service_then_evicted(
    adapter: AzureDevOpsAdapter, fake_azure: FakeAzure
) -> None:
    service = RepoContentService(adapter)
    options = FetchOptions(repository_url=REPO_URL, reference_name="refs/heads/main")
    await service.list_tree(options)

    service.remove_cache(options.as_clone_options())

    assert adapter.cache.get_tree(REPO_URL, "refs/heads/main") is None
    assert adapter.cache.get_refs(REPO_URL) is None
