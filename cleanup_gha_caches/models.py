"""
Cache entry model for cleanup_gha_caches.

Maps the GitHub Actions cache payload onto an immutable value type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .errors import ListingError

REQUIRED_FIELDS = ("id", "key", "size_in_bytes", "created_at")


@dataclass(frozen=True)
class CacheEntry:
    """A single GitHub Actions cache as reported by the listing endpoint."""

    id: int
    key: str
    size_bytes: int
    created_at: str
    ref: str | None = None
    version: str | None = None
    last_accessed_at: str | None = None

    def __post_init__(self) -> None:
        if self.size_bytes < 0:
            raise ValueError(f"Cache {self.id} has negative size {self.size_bytes}")

    @classmethod
    def from_api(cls, item: Mapping[str, Any]) -> "CacheEntry":
        """Build an entry from one ``actions_caches`` item.

        Raises:
            ListingError: If the item is not an object, is missing fields or carries an invalid size.
        """
        if not isinstance(item, Mapping):
            raise ListingError(f"Cache listing item is not an object: {item!r}")
        missing = [name for name in REQUIRED_FIELDS if item.get(name) is None]
        if missing:
            raise ListingError(f"Cache listing item missing field(s): {', '.join(missing)}")
        size = item["size_in_bytes"]
        # bool is an int subclass; reject it explicitly
        if isinstance(size, bool) or not isinstance(size, int):
            raise ListingError(f"Cache {item['id']} has non-integer size {size!r}")
        try:
            return cls(
                id=int(item["id"]),
                key=str(item["key"]),
                size_bytes=size,
                created_at=str(item["created_at"]),
                ref=item.get("ref"),
                version=item.get("version"),
                last_accessed_at=item.get("last_accessed_at"),
            )
        except (TypeError, ValueError) as exc:
            raise ListingError(f"Malformed cache listing item {item.get('id')!r}: {exc}") from exc

    def to_row(self) -> dict[str, Any]:
        """Return a flat dict used by the JSON and CSV reports."""
        return {
            "id": self.id,
            "key": self.key,
            "ref": self.ref,
            "size_bytes": self.size_bytes,
            "created_at": self.created_at,
            "last_accessed_at": self.last_accessed_at,
        }
