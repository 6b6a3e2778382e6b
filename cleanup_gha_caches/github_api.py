"""
GitHub Actions cache REST API client.

Lists caches page by page and deletes them by id. Transport and HTTP failures
are translated into ListingError or DeletionError.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

import httpx

from .config import SweepConfig
from .errors import DeletionError, ListingError
from .models import CacheEntry

API_VERSION = "2022-11-28"


def build_headers(token: str) -> dict[str, str]:
    """Return the headers GitHub expects on every cache API call."""
    return {
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {token}",
        "X-GitHub-Api-Version": API_VERSION,
    }


class GitHubCacheClient:
    """Thin wrapper over the ``/repos/{repo}/actions/caches`` endpoints."""

    def __init__(self, config: SweepConfig, http_client: Optional[httpx.Client] = None):
        self.repository = config.repository
        self.per_page = config.per_page
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(
            base_url=config.api_url,
            headers=build_headers(config.token),
            timeout=config.timeout,
        )

    def __enter__(self) -> "GitHubCacheClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection pool if this client created it."""
        if self._owns_client:
            self._http.close()

    @property
    def caches_path(self) -> str:
        return f"/repos/{self.repository}/actions/caches"

    def fetch_page(self, page: int) -> list[CacheEntry]:
        """Fetch one page of caches.

        Raises:
            ListingError: On transport errors, non-2xx responses or malformed payloads.
        """
        params = {"per_page": self.per_page, "page": page}
        try:
            response = self._http.get(self.caches_path, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise ListingError(
                f"Listing caches for {self.repository} failed on page {page}: "
                f"HTTP {exc.response.status_code} {_error_message(exc.response)}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ListingError(f"Listing caches for {self.repository} failed on page {page}: {exc}") from exc
        except ValueError as exc:
            raise ListingError(f"Cache listing page {page} is not valid JSON: {exc}") from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("actions_caches"), list):
            raise ListingError(f"Cache listing page {page} has no 'actions_caches' list")
        logging.debug(
            "Fetched page %d: %d cache(s), total_count=%s",
            page,
            len(payload["actions_caches"]),
            payload.get("total_count"),
        )
        return [CacheEntry.from_api(item) for item in payload["actions_caches"]]

    def iter_caches(self) -> Iterator[CacheEntry]:
        """Yield every cache, fetching pages lazily until the listing is exhausted."""
        page = 1
        while True:
            entries = self.fetch_page(page)
            yield from entries
            if len(entries) < self.per_page:
                return
            page += 1

    def delete_cache(self, cache_id: int) -> None:
        """Delete one cache by id.

        Raises:
            DeletionError: On transport errors or any non-2xx response, including 404.
        """
        try:
            response = self._http.delete(f"{self.caches_path}/{cache_id}")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise DeletionError(
                cache_id,
                f"HTTP {exc.response.status_code} {_error_message(exc.response)}",
            ) from exc
        except httpx.HTTPError as exc:
            raise DeletionError(cache_id, str(exc)) from exc


def _error_message(response: httpx.Response) -> str:
    """Extract GitHub's ``message`` field from an error response when present."""
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase
