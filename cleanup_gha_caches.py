#!/usr/bin/env python3
"""
Delete GitHub Actions caches larger than a size threshold.

Intended for a scheduled workflow: lists every cache of the repository, keeps
the ones strictly larger than --size-threshold-mb and deletes them unless
--dry-run is given.

This is a thin wrapper around the cleanup_gha_caches package.
"""
from __future__ import annotations

from cleanup_gha_caches.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
