"""
Error taxonomy for cleanup_gha_caches.

Listing and configuration errors are fatal; deletion errors are recorded per
cache and never abort a sweep.
"""

from __future__ import annotations


class CacheSweepError(RuntimeError):
    """Base class for cache sweep failures."""


class ConfigurationError(CacheSweepError):
    """Raised when sweep configuration is invalid or incomplete."""


class ListingError(CacheSweepError):
    """Raised when the remote cache listing cannot be fetched or decoded."""


class DeletionError(CacheSweepError):
    """Raised when a single cache cannot be deleted."""

    def __init__(self, cache_id: int, message: str):
        super().__init__(f"Failed to delete cache {cache_id}: {message}")
        self.cache_id = cache_id
