"""
Configuration for cleanup_gha_caches.

Builds the immutable SweepConfig handed to the sweeper and resolves the
repository identity and API token from the environment or a .env file.
"""

from __future__ import annotations

import logging
import math
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

BYTES_PER_MIB = 1024**2
DEFAULT_THRESHOLD_MB = 1
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_PER_PAGE = 100
MAX_PER_PAGE = 100
DEFAULT_TIMEOUT_SECONDS = 30.0

TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")
ENV_FILE_VAR = "CACHE_SWEEP_ENV_FILE"

_REPOSITORY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


@dataclass(frozen=True)
class SweepConfig:
    """Everything a sweep needs, resolved once before any network call."""

    repository: str
    token: str
    size_threshold_bytes: int = DEFAULT_THRESHOLD_MB * BYTES_PER_MIB
    dry_run: bool = False
    api_url: str = DEFAULT_API_URL
    per_page: int = DEFAULT_PER_PAGE
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if self.size_threshold_bytes < 0:
            raise ConfigurationError(f"Size threshold must not be negative: {self.size_threshold_bytes}")
        if not 1 <= self.per_page <= MAX_PER_PAGE:
            raise ConfigurationError(f"per_page must be between 1 and {MAX_PER_PAGE}: {self.per_page}")
        validate_repository(self.repository)
        if not self.token:
            raise ConfigurationError("An API token is required")

    @property
    def threshold_mb(self) -> float:
        """Threshold expressed in MiB, for reporting."""
        return self.size_threshold_bytes / BYTES_PER_MIB


def threshold_mb_to_bytes(value: object) -> int:
    """Convert a size threshold in MiB (number or numeric string) to bytes.

    Raises:
        ConfigurationError: If the value is non-numeric, non-finite or negative.
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"Size threshold must be numeric, got {value!r}")
    try:
        megabytes = float(str(value).strip())
    except ValueError as exc:
        raise ConfigurationError(f"Size threshold must be numeric, got {value!r}") from exc
    if not math.isfinite(megabytes):
        raise ConfigurationError(f"Size threshold must be finite, got {value!r}")
    if megabytes < 0:
        raise ConfigurationError(f"Size threshold must not be negative, got {value!r}")
    return int(megabytes * BYTES_PER_MIB)


def validate_repository(repository: str) -> str:
    """Check that repository looks like OWNER/NAME and return it."""
    if not repository or not _REPOSITORY_PATTERN.match(repository):
        raise ConfigurationError(f"Repository must be given as OWNER/NAME, got {repository!r}")
    return repository


def _resolve_env_path(env_path: Optional[str] = None) -> str:
    """
    Determine which .env file should be consulted for the API token.

    Priority order:
      1. Explicit parameter
      2. CACHE_SWEEP_ENV_FILE environment variable
      3. ~/.env
    """
    if env_path:
        return str(env_path)
    env_file = os.environ.get(ENV_FILE_VAR)
    if env_file:
        return env_file
    return str(Path.home() / ".env")


def load_token_from_env(env_path: Optional[str] = None) -> str:
    """
    Load the GitHub token from the environment, falling back to a .env file.

    Variables already present in the process environment win over the file.

    Raises:
        ConfigurationError: If no token variable is set.
    """
    resolved_path = _resolve_env_path(env_path)
    load_dotenv(resolved_path)

    for name in TOKEN_ENV_VARS:
        token = os.getenv(name)
        if token:
            logging.debug("Using API token from %s", name)
            return token

    raise ConfigurationError(
        f"GitHub token not found. Set {' or '.join(TOKEN_ENV_VARS)} or add it to {resolved_path}"
    )


def resolve_repository(explicit: Optional[str] = None) -> str:
    """Return the target repository from the explicit value or GITHUB_REPOSITORY."""
    repository = explicit or os.environ.get("GITHUB_REPOSITORY", "")
    if not repository:
        raise ConfigurationError("No repository given. Pass --repo OWNER/NAME or set GITHUB_REPOSITORY")
    return validate_repository(repository)


def resolve_api_url() -> str:
    """Return the REST API root, honouring GITHUB_API_URL for GitHub Enterprise Server."""
    return os.environ.get("GITHUB_API_URL", DEFAULT_API_URL).rstrip("/")


def build_config(
    *,
    size_threshold_mb: object = DEFAULT_THRESHOLD_MB,
    dry_run: bool = False,
    repository: Optional[str] = None,
    env_file: Optional[str] = None,
) -> SweepConfig:
    """Resolve every sweep setting into a SweepConfig.

    Threshold and repository are validated before the token is looked up, so a
    bad threshold is reported even when no credentials are available.
    """
    threshold_bytes = threshold_mb_to_bytes(size_threshold_mb)
    repo = resolve_repository(repository)
    token = load_token_from_env(env_file)
    return SweepConfig(
        repository=repo,
        token=token,
        size_threshold_bytes=threshold_bytes,
        dry_run=dry_run,
        api_url=resolve_api_url(),
    )
