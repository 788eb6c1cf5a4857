"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
Callers can tell "fix your URL", "fix your credentials", "that reference
does not exist" and "remote problem" apart by class alone.
"""

from __future__ import annotations


class RepoResolverError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class UrlParseError(RepoResolverError):
    """The repository URL has an unsupported scheme, host or path shape."""


class UnsupportedRepositoryError(UrlParseError):
    """No configured provider can serve the repository URL."""


class InvalidDestinationError(RepoResolverError):
    """A download destination falls outside the allowed download root."""


class EndpointBuildError(RepoResolverError):
    """A REST endpoint URL could not be constructed."""


# ── Remote API errors ───────────────────────────────────────────────────────


class AuthenticationError(RepoResolverError):
    """The remote rejected the credentials (401 / 203)."""


class RepositoryNotFoundError(RepoResolverError):
    """The repository does not exist or the URL is incorrect (404)."""


class ReferenceNotFoundError(RepositoryNotFoundError):
    """The requested branch, tag or commit is absent from the remote refs."""


class RemoteCallError(RepoResolverError):
    """Transport failure or an unexpected non-success HTTP status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RequestTimeoutError(RemoteCallError):
    """The call did not finish before its deadline."""


class MalformedResponseError(RepoResolverError):
    """The remote returned a body that could not be decoded."""


class IncompleteDataError(RepoResolverError):
    """The remote answered but without the data needed (e.g. no commit id)."""


# ── Local storage errors ────────────────────────────────────────────────────


class LocalStorageError(RepoResolverError):
    """Temporary file, stream copy or archive extraction failed."""
