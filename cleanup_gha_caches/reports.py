"""
Report generation and output functions for cleanup_gha_caches.

Handles the console summary, JSON/CSV report files and the GitHub Actions
step summary.
"""

from __future__ import annotations

import csv
import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from cleanup_gha_caches.sweeper import SweepReport

BYTES_PER_KIB = 1024
BYTES_PER_MIB = BYTES_PER_KIB**2
REPORT_FIELDS = ["id", "key", "ref", "size_bytes", "size_human", "created_at", "last_accessed_at"]


def format_bytes(num_bytes: Optional[int], decimal_places: int = 2) -> str:
    """Convert byte count to human-readable binary units (B, KiB, MiB, ...)."""
    if num_bytes is None:
        return "n/a"
    units = ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]
    value = float(num_bytes)
    for unit in units:
        if value < BYTES_PER_KIB or unit == units[-1]:
            return f"{value:.{decimal_places}f} {unit}"
        value /= BYTES_PER_KIB
    return f"{value:.{decimal_places}f} PiB"


def format_threshold(threshold_bytes: int) -> str:
    """Render a byte threshold in MB the way it was most likely configured (1, 0.5, 250)."""
    return f"{threshold_bytes / BYTES_PER_MIB:g}"


def summary_lines(report: SweepReport) -> list[str]:
    """Return the human-readable summary of a sweep."""
    lines = [
        f"{report.found_count} caches found larger than {format_threshold(report.threshold_bytes)} MB, "
        f"totaling {report.total_bytes} bytes ({format_bytes(report.total_bytes)})"
    ]
    if report.dry_run:
        lines.append("Dry run: no caches were deleted.")
        return lines
    lines.append(f"Successfully deleted: {report.success_count} caches ({format_bytes(report.deleted_bytes)})")
    if report.failure_count:
        lines.append(f"Failed to delete: {report.failure_count} caches")
    return lines


def print_sweep_report(report: SweepReport, repository: str) -> None:
    """Print the selected caches followed by the summary."""
    mode = "dry run" if report.dry_run else "delete"
    print(f"Cache sweep for {repository} ({mode}):")
    for entry in report.selected:
        print(
            f"- #{entry.id} {entry.key} "
            f"(ref {entry.ref or 'n/a'}, created {entry.created_at}, size {format_bytes(entry.size_bytes)})"
        )
    for entry, error in report.failures:
        print(f"! #{entry.id} {entry.key}: {error}")
    print()
    for line in summary_lines(report):
        print(line)


def _report_rows(report: SweepReport) -> list[dict[str, object]]:
    rows = []
    for entry in report.selected:
        row = entry.to_row()
        row["size_human"] = format_bytes(entry.size_bytes)
        rows.append(row)
    return rows


def write_reports(
    report: SweepReport,
    *,
    json_path: Path | None,
    csv_path: Path | None,
) -> None:
    """Write the selected caches to JSON and/or CSV report files."""
    rows = _report_rows(report)
    if json_path:
        json_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "threshold_bytes": report.threshold_bytes,
            "dry_run": report.dry_run,
            "total_bytes": report.total_bytes,
            "deleted": [entry.id for entry in report.deleted],
            "failed": [{"id": entry.id, "error": error} for entry, error in report.failures],
            "caches": rows,
        }
        json_path.write_text(json.dumps(payload, indent=2))
    if csv_path:
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        with csv_path.open("w", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=REPORT_FIELDS)
            writer.writeheader()
            writer.writerows(rows)


def write_step_summary(report: SweepReport, repository: str, summary_path: Path | None = None) -> bool:
    """Append a Markdown summary to the GitHub Actions job summary file.

    Returns False when no summary file is configured.
    """
    if summary_path is None:
        env_value = os.environ.get("GITHUB_STEP_SUMMARY")
        if not env_value:
            return False
        summary_path = Path(env_value)

    failed_ids = {entry.id for entry, _ in report.failures}
    lines = [f"## Cache sweep: {repository}", ""]
    lines.extend(f"- {line}" for line in summary_lines(report))
    if report.selected:
        lines.extend(["", "| ID | Key | Size | Status |", "| --- | --- | --- | --- |"])
        for entry in report.selected:
            if report.dry_run:
                status = "kept (dry run)"
            elif entry.id in failed_ids:
                status = "failed"
            else:
                status = "deleted"
            lines.append(f"| {entry.id} | `{entry.key}` | {format_bytes(entry.size_bytes)} | {status} |")
    with summary_path.open("a", encoding="utf-8") as handle:
        handle.write("\n".join(lines) + "\n")
    return True
