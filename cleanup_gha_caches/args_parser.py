"""
Argument parsing for cleanup_gha_caches CLI.

Handles command-line argument definition and parsing. Threshold validation
is left to config.build_config so that it surfaces as a ConfigurationError.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from .config import DEFAULT_THRESHOLD_MB

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "no", "n", "off", ""}


def parse_bool(value: str) -> bool:
    """Parse workflow-style boolean strings ("true", "false", "1", ...)."""
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"Invalid boolean value: {value!r}")


def add_sweep_arguments(parser: argparse.ArgumentParser) -> None:
    """Add threshold and mode arguments."""
    parser.add_argument(
        "--size-threshold-mb",
        default=str(DEFAULT_THRESHOLD_MB),
        metavar="MB",
        help=f"Delete caches strictly larger than MB mebibytes (default: {DEFAULT_THRESHOLD_MB}).",
    )
    parser.add_argument(
        "--dry-run",
        nargs="?",
        const=True,
        default=False,
        type=parse_bool,
        metavar="BOOL",
        help="Report matching caches without deleting them. Accepts an optional true/false value.",
    )


def add_target_arguments(parser: argparse.ArgumentParser) -> None:
    """Add repository and credential arguments."""
    parser.add_argument(
        "--repo",
        metavar="OWNER/NAME",
        help="Repository whose caches are swept (default: $GITHUB_REPOSITORY).",
    )
    parser.add_argument(
        "--env-file",
        help="Path to a .env file holding GITHUB_TOKEN (default: $CACHE_SWEEP_ENV_FILE or ~/.env).",
    )


def add_output_arguments(parser: argparse.ArgumentParser) -> None:
    """Add output and reporting arguments."""
    parser.add_argument("--report-json", type=Path, help="Optional path to write the selected caches as JSON.")
    parser.add_argument("--report-csv", type=Path, help="Optional path to write the selected caches as CSV.")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")


def build_parser() -> argparse.ArgumentParser:
    """Create the cleanup_gha_caches argument parser."""
    parser = argparse.ArgumentParser(
        description="Delete GitHub Actions caches larger than a size threshold.",
    )
    add_sweep_arguments(parser)
    add_target_arguments(parser)
    add_output_arguments(parser)
    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse command-line arguments for cleanup_gha_caches."""
    return build_parser().parse_args(argv)
