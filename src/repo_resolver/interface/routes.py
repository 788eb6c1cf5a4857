"""API routes — thin controllers that delegate to the content service."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Query, Response

from repo_resolver.domain.entities import CloneOptions, FetchOptions
from repo_resolver.domain.exceptions import InvalidDestinationError
from repo_resolver.infrastructure.config import Settings
from repo_resolver.interface.dependencies import get_app_settings, get_service
from repo_resolver.interface.schemas import (
    DownloadRequest,
    DownloadResponse,
    LatestCommitResponse,
    RefsResponse,
    TreeResponse,
)
from repo_resolver.services.repo_content import RepoContentService

router = APIRouter()

_ERRORS = {
    401: {"description": "Authentication failed"},
    404: {"description": "Repository or reference not found"},
    422: {"description": "Unsupported repository URL or invalid destination"},
    502: {"description": "Remote returned an unexpected response"},
    504: {"description": "Remote call timed out"},
}


@router.get("/refs", response_model=RefsResponse, responses=_ERRORS)
async def list_refs(
    repository_url: str,
    username: str = "",
    password: str = "",
    service: RepoContentService = Depends(get_service),
) -> RefsResponse:
    """List the remote's branches and tags."""
    refs = await service.list_remote(
        CloneOptions(repository_url=repository_url, username=username, password=password)
    )
    return RefsResponse(references=refs)


@router.get("/tree", response_model=TreeResponse, responses=_ERRORS)
async def list_tree(
    repository_url: str,
    reference_name: str,
    extensions: list[str] = Query(default=[]),
    username: str = "",
    password: str = "",
    service: RepoContentService = Depends(get_service),
) -> TreeResponse:
    """List file paths at a reference, optionally narrowed to some extensions."""
    paths = await service.list_tree(
        FetchOptions(
            repository_url=repository_url,
            reference_name=reference_name,
            username=username,
            password=password,
            extensions=tuple(extensions),
        )
    )
    return TreeResponse(paths=paths)


@router.get("/latest-commit", response_model=LatestCommitResponse, responses=_ERRORS)
async def latest_commit(
    repository_url: str,
    reference_name: str = "",
    username: str = "",
    password: str = "",
    service: RepoContentService = Depends(get_service),
) -> LatestCommitResponse:
    commit_id = await service.latest_commit_id(
        FetchOptions(
            repository_url=repository_url,
            reference_name=reference_name,
            username=username,
            password=password,
        )
    )
    return LatestCommitResponse(commit_id=commit_id)


@router.post("/download", response_model=DownloadResponse, responses=_ERRORS)
async def download(
    body: DownloadRequest,
    service: RepoContentService = Depends(get_service),
    settings: Settings = Depends(get_app_settings),
) -> DownloadResponse:
    """Materialise a snapshot of the repository under the download root."""
    root = Path(settings.download_root).resolve()
    destination = (root / body.destination).resolve()
    if destination != root and root not in destination.parents:
        raise InvalidDestinationError(
            f"Destination '{body.destination}' must stay inside the download root"
        )

    await service.download(
        destination,
        CloneOptions(
            repository_url=body.repository_url,
            reference_name=body.reference_name,
            username=body.username,
            password=body.password,
        ),
    )
    return DownloadResponse(destination=str(destination))


@router.delete("/cache", status_code=204, responses=_ERRORS)
async def remove_cache(
    repository_url: str,
    reference_name: str = "",
    service: RepoContentService = Depends(get_service),
) -> Response:
    """Forget cached refs and tree, e.g. after a push to the repository."""
    service.remove_cache(
        CloneOptions(repository_url=repository_url, reference_name=reference_name)
    )
    return Response(status_code=204)
