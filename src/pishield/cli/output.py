"""Rich output formatting helpers for the pishield CLI.

Provides consistent, severity-colored terminal output for scan reports.

Severity Color Mapping:
    CRITICAL = bold red, HIGH = yellow, MEDIUM = cyan, LOW = green
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from pishield.core.analyzer import FileScanResult, ScanReport, Severity

_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "yellow",
    Severity.MEDIUM: "cyan",
    Severity.LOW: "green",
}

console = Console()


def severity_style(severity: Severity) -> str:
    """Return the Rich style string for a given severity level."""
    return _SEVERITY_STYLES.get(severity, "white")


def print_scan_report(report: ScanReport) -> None:
    """Print per-file findings followed by a severity summary.

    Args:
        report: The (already threshold-filtered) scan report.
    """
    flagged = [r for r in report.results if not r.is_clean]
    # Most severe files first; sorted() keeps scan order among equals.
    flagged.sort(key=lambda r: r.max_severity or 0, reverse=True)

    for result in flagged:
        _print_file_findings(result)

    if not flagged:
        console.print("[green]No findings. All extension files passed.[/green]")

    for skipped in report.skipped:
        console.print(f"[dim]Skipped {skipped.path}: {skipped.error}[/dim]")

    _print_summary(report)


def _print_file_findings(result: FileScanResult) -> None:
    """Print the finding table for one file."""
    table = Table(
        title=f"Warning in {result.path.name}",
        caption=str(result.path),
        show_header=True,
        header_style="bold",
    )
    table.add_column("Severity", justify="center")
    table.add_column("Line", justify="right")
    table.add_column("Category", style="dim")
    table.add_column("Description")

    for f in result.findings:
        table.add_row(
            Text(f.severity.name, style=severity_style(f.severity)),
            str(f.line_number) if f.line_number is not None else "-",
            f.category.value,
            f.description,
        )
    console.print(table)


def _print_summary(report: ScanReport) -> None:
    """Print totals and the per-severity breakdown."""
    buckets = report.by_severity()
    summary = Table(title="Scan Summary", show_header=True, header_style="bold")
    summary.add_column("Severity", justify="center")
    summary.add_column("Findings", justify="right")
    for level, items in buckets.items():
        summary.add_row(Text(level.name, style=severity_style(level)), str(len(items)))
    console.print(summary)

    parts = [
        f"[bold]{report.files_scanned}[/bold] files scanned",
        f"{report.files_with_findings} with findings",
        f"{report.total_findings} total findings",
    ]
    if report.skipped:
        parts.append(f"[dim]{len(report.skipped)} skipped[/dim]")
    console.print(" | ".join(parts))
