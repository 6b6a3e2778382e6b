"""
Command-line interface and main entry point for cleanup_gha_caches.

Handles workflow orchestration and exit codes.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .args_parser import parse_args
from .config import SweepConfig, build_config
from .errors import ConfigurationError, ListingError
from .github_api import GitHubCacheClient
from .reports import print_sweep_report, write_reports, write_step_summary
from .sweeper import CacheSweeper, SweepReport


def _load_config(args: argparse.Namespace) -> SweepConfig | None:
    """Build the sweep configuration, logging and returning None when it is invalid."""
    try:
        return build_config(
            size_threshold_mb=args.size_threshold_mb,
            dry_run=args.dry_run,
            repository=args.repo,
            env_file=args.env_file,
        )
    except ConfigurationError as exc:
        logging.error("Invalid configuration: %s", exc)
        return None


def run_sweep(config: SweepConfig) -> SweepReport:
    """Run one sweep against the GitHub API. ListingError propagates."""
    with GitHubCacheClient(config) as client:
        return CacheSweeper(client).run(config)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for cleanup_gha_caches CLI."""
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    config = _load_config(args)
    if config is None:
        return 1

    if config.dry_run:
        print("Dry run: no caches will be deleted.\n")

    try:
        report = run_sweep(config)
    except ListingError:
        logging.exception("Failed to list caches for %s", config.repository)
        return 1

    print_sweep_report(report, config.repository)
    # caches are already deleted at this point; report I/O must not change the exit code
    try:
        write_reports(report, json_path=args.report_json, csv_path=args.report_csv)
    except OSError as exc:
        logging.error("Failed to write report: %s", exc)
    try:
        write_step_summary(report, config.repository)
    except OSError as exc:
        logging.error("Failed to write step summary: %s", exc)

    if report.failure_count:
        logging.warning("%d cache deletion(s) failed; see log for details.", report.failure_count)
    return 0
