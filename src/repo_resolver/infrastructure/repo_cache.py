"""In-memory cache of remote refs and file trees, one instance per provider."""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class RepoCache:
    """Two maps behind a single lock.

    * refs:  repository URL → reference names
    * trees: (repository URL, reference name) → unfiltered file paths

    The lock only guards dict access and is never held across I/O.  A
    disabled cache always misses and ignores writes, so callers need no
    special casing.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._lock = threading.Lock()
        self._refs: dict[str, list[str]] = {}
        self._trees: dict[tuple[str, str], list[str]] = {}

    def get_refs(self, repository_url: str) -> list[str] | None:
        if not self.enabled:
            return None
        with self._lock:
            refs = self._refs.get(repository_url)
        return list(refs) if refs is not None else None

    def set_refs(self, repository_url: str, refs: list[str]) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._refs[repository_url] = list(refs)

    def get_tree(self, repository_url: str, reference_name: str) -> list[str] | None:
        if not self.enabled:
            return None
        with self._lock:
            paths = self._trees.get((repository_url, reference_name))
        return list(paths) if paths is not None else None

    def set_tree(
        self, repository_url: str, reference_name: str, paths: list[str]
    ) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._trees[(repository_url, reference_name)] = list(paths)

    def invalidate(self, repository_url: str, reference_name: str = "") -> None:
        """Drop the refs of *repository_url* and its tree at *reference_name* together."""
        with self._lock:
            self._refs.pop(repository_url, None)
            self._trees.pop((repository_url, reference_name), None)
        logger.debug("Cache invalidated for %s @ %r", repository_url, reference_name)

    def clear(self) -> None:
        with self._lock:
            self._refs.clear()
            self._trees.clear()
