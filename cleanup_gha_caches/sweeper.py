"""
Core sweep logic for cleanup_gha_caches.

Lists caches, keeps the ones strictly larger than the threshold and deletes
them one at a time (or only reports them in dry-run mode).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Protocol

from .config import SweepConfig
from .errors import DeletionError
from .models import CacheEntry


class CacheStore(Protocol):
    """Remote cache operations the sweeper depends on."""

    def iter_caches(self) -> Iterator[CacheEntry]: ...

    def delete_cache(self, cache_id: int) -> None: ...


@dataclass
class SweepReport:
    """Outcome of a single sweep."""

    threshold_bytes: int
    dry_run: bool
    selected: list[CacheEntry] = field(default_factory=list)
    deleted: list[CacheEntry] = field(default_factory=list)
    failures: list[tuple[CacheEntry, str]] = field(default_factory=list)

    @property
    def found_count(self) -> int:
        return len(self.selected)

    @property
    def total_bytes(self) -> int:
        return sum(entry.size_bytes for entry in self.selected)

    @property
    def success_count(self) -> int:
        return len(self.deleted)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def deleted_bytes(self) -> int:
        return sum(entry.size_bytes for entry in self.deleted)


def filter_oversized(entries: Iterable[CacheEntry], threshold: int) -> Iterator[CacheEntry]:
    """Yield entries whose size is strictly greater than threshold, in input order."""
    for entry in entries:
        if entry.size_bytes > threshold:
            yield entry


class CacheSweeper:
    """Runs list -> filter -> delete against a cache store."""

    def __init__(self, store: CacheStore):
        self.store = store

    def list_all_caches(self) -> Iterator[CacheEntry]:
        """Return the lazy, single-pass listing of every cache in the repository."""
        return self.store.iter_caches()

    def delete(self, entry: CacheEntry) -> bool:
        """Delete one cache. Failures are logged and reported as False, never raised."""
        return self._delete(entry) is None

    def _delete(self, entry: CacheEntry) -> str | None:
        """Issue the delete call and return the failure message, or None on success."""
        try:
            self.store.delete_cache(entry.id)
        except DeletionError as exc:
            logging.error("%s (key=%s)", exc, entry.key)
            return str(exc)
        logging.info("Deleted cache %s (key=%s, %d bytes)", entry.id, entry.key, entry.size_bytes)
        return None

    def run(self, config: SweepConfig) -> SweepReport:
        """Execute one sweep.

        The selection is fully listed before the first delete so pagination is
        not disturbed by deletions. ListingError propagates to the caller.
        """
        report = SweepReport(threshold_bytes=config.size_threshold_bytes, dry_run=config.dry_run)
        report.selected = list(filter_oversized(self.list_all_caches(), config.size_threshold_bytes))
        logging.info(
            "Selected %d cache(s) larger than %d bytes in %s",
            report.found_count,
            config.size_threshold_bytes,
            config.repository,
        )

        if config.dry_run:
            for entry in report.selected:
                logging.info("Dry run: would delete cache %s (key=%s)", entry.id, entry.key)
            return report

        for entry in report.selected:
            error = self._delete(entry)
            if error is None:
                report.deleted.append(entry)
            else:
                report.failures.append((entry, error))
        return report
