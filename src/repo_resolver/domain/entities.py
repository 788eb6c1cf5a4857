"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CloneOptions:
    """Identifies a repository (and optionally a reference) for one call.

    ``username``/``password`` are call-scoped credentials; when either is set
    they take precedence over credentials embedded in the repository URL.
    """

    repository_url: str
    reference_name: str = ""
    username: str = ""
    password: str = ""

    def __repr__(self) -> str:
        return (
            f"CloneOptions(repository_url={self.repository_url!r}, "
            f"reference_name={self.reference_name!r})"
        )


@dataclass(frozen=True, slots=True)
class FetchOptions:
    """Like :class:`CloneOptions`, plus an extension filter for tree listings."""

    repository_url: str
    reference_name: str = ""
    username: str = ""
    password: str = ""
    extensions: tuple[str, ...] = field(default_factory=tuple)

    def as_clone_options(self) -> CloneOptions:
        return CloneOptions(
            repository_url=self.repository_url,
            reference_name=self.reference_name,
            username=self.username,
            password=self.password,
        )

    def __repr__(self) -> str:
        return (
            f"FetchOptions(repository_url={self.repository_url!r}, "
            f"reference_name={self.reference_name!r}, "
            f"extensions={self.extensions!r})"
        )


@dataclass(frozen=True, slots=True)
class RootItem:
    """Top-level tree object of a repository at a given reference."""

    object_id: str
    commit_id: str
    path: str = "/"
