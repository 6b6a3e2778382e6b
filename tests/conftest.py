"""Shared pytest fixtures for the cache sweeper tests."""

from __future__ import annotations

import pytest

from cleanup_gha_caches.config import SweepConfig
from cleanup_gha_caches.errors import DeletionError
from cleanup_gha_caches.models import CacheEntry


class FakeCacheStore:
    """In-memory cache store that records every delete call."""

    def __init__(self, entries, fail_ids=()):
        self.entries = list(entries)
        self.fail_ids = set(fail_ids)
        self.deleted_ids: list[int] = []
        self.list_calls = 0

    def iter_caches(self):
        self.list_calls += 1
        yield from self.entries

    def delete_cache(self, cache_id: int) -> None:
        self.deleted_ids.append(cache_id)
        if cache_id in self.fail_ids:
            raise DeletionError(cache_id, "HTTP 404 Not Found")


@pytest.fixture(name="make_entry")
def fixture_make_entry():
    """Factory for CacheEntry values with sensible defaults."""

    def _make(cache_id: int, size_bytes: int, key: str | None = None) -> CacheEntry:
        return CacheEntry(
            id=cache_id,
            key=key or f"build-linux-x86_64-{cache_id}",
            size_bytes=size_bytes,
            created_at="2026-10-01T03:00:00Z",
            ref="refs/heads/main",
        )

    return _make


@pytest.fixture(name="fake_store_cls")
def fixture_fake_store_cls():
    """Expose FakeCacheStore to tests without importing conftest directly."""
    return FakeCacheStore


@pytest.fixture(name="sweep_config")
def fixture_sweep_config():
    """Live-mode configuration with the default 1 MiB threshold."""
    return SweepConfig(repository="noraneko/noraneko", token="ghs_test_token")


@pytest.fixture(name="api_item")
def fixture_api_item():
    """Factory for raw ``actions_caches`` items as returned by GitHub."""

    def _item(cache_id: int, size: int, key: str = "noraneko-build") -> dict:
        return {
            "id": cache_id,
            "ref": "refs/heads/main",
            "key": key,
            "version": "c1d3f1b6e0f9a2",
            "last_accessed_at": "2026-10-02T04:00:00Z",
            "created_at": "2026-10-01T03:00:00Z",
            "size_in_bytes": size,
        }

    return _item
