"""Extension filtering for tree listings."""

from __future__ import annotations

from collections.abc import Iterable, Sequence


def match_extensions(path: str, extensions: Sequence[str]) -> bool:
    """Return True when *path* ends with one of *extensions* (empty matches all).

    Matching is a case-sensitive suffix test: ``.yml`` does not match ``.YML``.
    """
    if not extensions:
        return True
    return path.endswith(tuple(extensions))


def filter_paths(paths: Iterable[str], extensions: Sequence[str]) -> list[str]:
    """Keep the paths accepted by :func:`match_extensions`, preserving order."""
    return [p for p in paths if match_extensions(p, extensions)]
