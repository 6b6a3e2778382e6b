"""
GitHub Actions cache cleanup package.

List a repository's Actions caches and delete the ones larger than a size
threshold, or only report them in dry-run mode.
"""

from . import args_parser, cli, config, errors, github_api, models, reports, sweeper
from .config import SweepConfig, build_config
from .errors import CacheSweepError, ConfigurationError, DeletionError, ListingError
from .github_api import GitHubCacheClient
from .models import CacheEntry
from .sweeper import CacheSweeper, SweepReport, filter_oversized

__all__ = [
    "CacheEntry",
    "CacheSweepError",
    "CacheSweeper",
    "ConfigurationError",
    "DeletionError",
    "GitHubCacheClient",
    "ListingError",
    "SweepConfig",
    "SweepReport",
    "args_parser",
    "build_config",
    "cli",
    "config",
    "errors",
    "filter_oversized",
    "github_api",
    "models",
    "reports",
    "sweeper",
]
