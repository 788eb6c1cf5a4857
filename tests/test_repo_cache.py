from __future__ import annotations

import threading

from repo_resolver.infrastructure.repo_cache import RepoCache

REPO = "https://dev.azure.com/org/proj/_git/repo"


def test_get_refs_given_disabled_cache_when_set_then_always_misses() -> None:
    # Given
    cache = RepoCache(enabled=False)

    # When
    cache.set_refs(REPO, ["refs/heads/main"])
    cache.set_tree(REPO, "refs/heads/main", ["a.yml"])

    # Then
    assert cache.get_refs(REPO) is None
    assert cache.get_tree(REPO, "refs/heads/main") is None


def test_get_tree_given_entry_when_read_then_keyed_by_repo_and_reference() -> None:
    cache = RepoCache()
    cache.set_tree(REPO, "refs/heads/main", ["a.yml"])

    assert cache.get_tree(REPO, "refs/heads/main") == ["a.yml"]
    assert cache.get_tree(REPO, "refs/heads/dev") is None
    assert cache.get_tree(REPO + "2", "refs/heads/main") is None


def test_get_refs_given_caller_mutates_result_when_read_again_then_cache_unchanged() -> None:
    # Given
    cache = RepoCache()
    refs = ["refs/heads/main"]
    cache.set_refs(REPO, refs)

    # When
    refs.append("refs/heads/other")
    cache.get_refs(REPO).append("refs/heads/third")  # type: ignore[union-attr]

    # Then
    assert cache.get_refs(REPO) == ["refs/heads/main"]


def test_invalidate_given_refs_and_trees_when_called_then_both_dropped_for_pair_only() -> None:
    # Given
    cache = RepoCache()
    cache.set_refs(REPO, ["refs/heads/main", "refs/heads/dev"])
    cache.set_tree(REPO, "refs/heads/main", ["a.yml"])
    cache.set_tree(REPO, "refs/heads/dev", ["b.yml"])

    # When
    cache.invalidate(REPO, "refs/heads/main")

    # Then
    assert cache.get_refs(REPO) is None
    assert cache.get_tree(REPO, "refs/heads/main") is None
    assert cache.get_tree(REPO, "refs/heads/dev") == ["b.yml"]


def test_set_tree_given_concurrent_writers_when_done_then_last_write_is_consistent() -> None:
    cache = RepoCache()

    def writer(i: int) -> None:
        for _ in range(200):
            cache.set_tree(REPO, "refs/heads/main", [f"{i}.yml"])
            cache.get_tree(REPO, "refs/heads/main")

    threads = [threading.Thread(target=writer, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    result = cache.get_tree(REPO, "refs/heads/main")
    assert result is not None and len(result) == 1


def test_clear_given_entries_when_called_then_everything_dropped() -> None:
    cache = RepoCache()
    cache.set_refs(REPO, ["refs/heads/main"])
    cache.set_tree(REPO, "refs/heads/main", ["a.yml"])

    cache.clear()

    assert cache.get_refs(REPO) is None
    assert cache.get_tree(REPO, "refs/heads/main") is None
