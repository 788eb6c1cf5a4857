"""Azure DevOps Git REST endpoint construction."""

from __future__ import annotations

from urllib.parse import quote, urlencode

import httpx

from repo_resolver.domain.exceptions import EndpointBuildError
from repo_resolver.domain.value_objects import (
    AzureRepoLocator,
    format_reference_name,
    get_version_type,
)

API_VERSION = "6.0"


class AzureEndpointBuilder:
    """Builds versioned REST URLs for one Azure DevOps base URL."""

    def __init__(self, base_url: str = "https://dev.azure.com") -> None:
        self._base_url = base_url.rstrip("/")

    def refs_url(self, locator: AzureRepoLocator) -> str:
        """GET …/refs — every ref of the repository."""
        return self._build(locator, "refs", {}, "list refs")

    def root_item_url(self, locator: AzureRepoLocator, reference_name: str) -> str:
        """GET …/items?scopePath=/ — root tree object and commit at the reference."""
        params = {"scopePath": "/"}
        params.update(_version_descriptor(reference_name))
        return self._build(locator, "items", params, "root item")

    def tree_url(self, locator: AzureRepoLocator, object_id: str) -> str:
        """GET …/trees/{object_id}?recursive=true — the full file tree."""
        return self._build(
            locator,
            f"trees/{quote(object_id, safe='')}",
            {"recursive": "true"},
            "list tree",
        )

    def download_url(self, locator: AzureRepoLocator, reference_name: str) -> str:
        """GET …/items as a zip archive of the whole repository."""
        params = {"scopePath": "/", "download": "true"}
        params.update(_version_descriptor(reference_name))
        params["$format"] = "zip"
        params["recursionLevel"] = "full"
        return self._build(locator, "items", params, "download")

    def _build(
        self,
        locator: AzureRepoLocator,
        resource: str,
        params: dict[str, str],
        purpose: str,
    ) -> str:
        raw_url = (
            f"{self._base_url}/{locator.escaped_organisation}/{locator.escaped_project}"
            f"/_apis/git/repositories/{locator.escaped_repository}/{resource}"
        )
        query = urlencode({**params, "api-version": API_VERSION})
        url = f"{raw_url}?{query}"
        try:
            httpx.URL(url)
        except httpx.InvalidURL as exc:
            raise EndpointBuildError(
                f"Failed to build {purpose} url from {raw_url}: {exc}"
            ) from exc
        return url


def _version_descriptor(reference_name: str) -> dict[str, str]:
    if not reference_name:
        return {}
    return {
        "versionDescriptor.versionType": get_version_type(reference_name).value,
        "versionDescriptor.version": format_reference_name(reference_name),
    }
