from __future__ import annotations

import io
import json
import zipfile
from dataclasses import dataclass, field

import httpx
import pytest

from repo_resolver.infrastructure.archive import ZipArchiveExtractor
from repo_resolver.infrastructure.azure_adapter import AzureDevOpsAdapter
from repo_resolver.infrastructure.repo_cache import RepoCache

REPO_URL = "https://org@dev.azure.com/org/proj/_git/repo"

ARCHIVE_FILES = {
    "README.md": b"# demo\n",
    "deploy/stack.yml": b"version: '3'\n",
}


def make_zip(files: dict[str, bytes]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    return buf.getvalue()


@dataclass
class FakeAzure:
    """In-memory stand-in for the Azure DevOps Git REST API."""

    refs: list[str] = field(
        default_factory=lambda: ["HEAD", "refs/heads/main", "refs/tags/v1"]
    )
    items: list[dict[str, str]] = field(
        default_factory=lambda: [
            {"objectId": "tree-sha", "commitId": "commit-sha", "path": "/", "gitObjectType": "tree"}
        ]
    )
    tree: list[str] = field(
        default_factory=lambda: [
            "README.md",
            "deploy",
            "deploy/stack.yml",
            "deploy/compose.yaml",
            "deploy/values.YML",
        ]
    )
    archive: bytes = field(default_factory=lambda: make_zip(ARCHIVE_FILES))
    # endpoint kind ("refs", "items", "tree", "download") → forced status code
    statuses: dict[str, int] = field(default_factory=dict)
    bodies: dict[str, bytes] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def kind(self, request: httpx.Request) -> str:
        path = request.url.path
        if path.endswith("/refs"):
            return "refs"
        if "/trees/" in path:
            return "tree"
        if request.url.params.get("download") == "true":
            return "download"
        return "items"

    def calls(self, kind: str) -> int:
        return sum(1 for r in self.requests if self.kind(r) == kind)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        kind = self.kind(request)

        if kind in self.statuses:
            return httpx.Response(self.statuses[kind], text="nope")
        if kind in self.bodies:
            return httpx.Response(200, content=self.bodies[kind])

        if kind == "refs":
            payload = {
                "value": [{"name": n, "objectId": f"{i:040x}"} for i, n in enumerate(self.refs)],
                "count": len(self.refs),
            }
        elif kind == "items":
            payload = {"count": len(self.items), "value": self.items}
        elif kind == "tree":
            payload = {
                "objectId": "tree-sha",
                "treeEntries": [{"relativePath": p, "mode": "100644"} for p in self.tree],
            }
        else:
            return httpx.Response(200, content=self.archive)
        return httpx.Response(200, content=json.dumps(payload).encode())


@pytest.fixture
def fake_azure() -> FakeAzure:
    return FakeAzure()


@pytest.fixture
def http_client(fake_azure: FakeAzure) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_azure.handler))


@pytest.fixture
def adapter(http_client: httpx.AsyncClient) -> AzureDevOpsAdapter:
    return AzureDevOpsAdapter(
        http_client, cache=RepoCache(enabled=True), extractor=ZipArchiveExtractor()
    )
