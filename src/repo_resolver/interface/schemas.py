"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class DownloadRequest(BaseModel):
    """Request body for ``POST /download``."""

    repository_url: str
    reference_name: str = ""
    username: str = ""
    password: str = ""
    destination: str

    @field_validator("repository_url", "destination")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "must not be empty."
            raise ValueError(msg)
        return stripped


class DownloadResponse(BaseModel):
    destination: str


class RefsResponse(BaseModel):
    references: list[str]


class TreeResponse(BaseModel):
    paths: list[str]


class LatestCommitResponse(BaseModel):
    commit_id: str


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
