"""``pishield scan`` — Discover and analyze extension source files.

With no ``--path`` options, searches the default roots (user and project
extension directories, the skills directory and the global npm root).
Each ``--path`` replaces the defaults with an explicit directory.

Exit Codes:
    0 — No findings at or above the severity threshold.
    1 — One or more files have findings at or above the threshold.
    2 — No extension files found, or the rule file is invalid.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from pishield.core.analyzer import (
    PatternAnalyzer,
    ScanReport,
    Severity,
    default_catalog,
    load_rules_file,
)
from pishield.discovery import ExtensionDiscovery, SearchRoot
from pishield.exceptions import RuleCatalogError

# Severity threshold mapping (string -> IntEnum)
_SEVERITY_MAP: dict[str, Severity] = {
    "low": Severity.LOW,
    "medium": Severity.MEDIUM,
    "high": Severity.HIGH,
    "critical": Severity.CRITICAL,
}


def _report_to_json(report: ScanReport) -> dict:
    """Convert a scan report to a JSON-serializable dict."""
    files = []
    flagged = sorted(
        (r for r in report.results if not r.is_clean),
        key=lambda r: r.max_severity,
        reverse=True,
    )
    for r in flagged:
        files.append({
            "path": str(r.path),
            "max_severity": r.max_severity.name if r.max_severity else None,
            "findings": [
                {
                    "severity": f.severity.name,
                    "category": f.category.value,
                    "description": f.description,
                    "line": f.line_number,
                    "rule_id": f.rule_id,
                    "evidence": f.evidence,
                }
                for f in r.findings
            ],
        })
    return {
        "files_scanned": report.files_scanned,
        "files_with_findings": report.files_with_findings,
        "total_findings": report.total_findings,
        "by_severity": {
            level.name: len(items) for level, items in report.by_severity().items()
        },
        "skipped": [str(r.path) for r in report.skipped],
        "files": files,
    }


@click.command("scan")
@click.option(
    "--path", "paths",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    multiple=True,
    help="Directory to scan instead of the default roots (repeatable).",
)
@click.option(
    "--rules", "rules_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with additional detection rules.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@click.option(
    "--severity-threshold",
    type=click.Choice(["low", "medium", "high", "critical"]),
    default="low",
    help="Minimum severity to report (default: low).",
)
def scan_command(
    paths: tuple[Path, ...],
    rules_file: Path | None,
    output_format: str,
    severity_threshold: str,
) -> None:
    """Scan installed extensions for dangerous code and prompt injection.

    Exit code 0 if no findings, 1 if any findings exist.
    """
    catalog = default_catalog()
    if rules_file is not None:
        try:
            catalog = catalog.extended(load_rules_file(rules_file))
        except RuleCatalogError as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(2)

    roots = [SearchRoot(name=str(p), path=p) for p in paths] if paths else None
    files = ExtensionDiscovery(roots).discover()

    if not files:
        if output_format == "json":
            click.echo(json.dumps({"files": [], "summary": "No extension files found"}))
        else:
            click.echo("No extension files found.")
        sys.exit(2)

    if output_format == "text":
        click.echo("Starting security scan...")
        click.echo(f"Found {len(files)} extension files to scan.")

    report = PatternAnalyzer(catalog).scan_all(files)
    report = report.filtered(_SEVERITY_MAP[severity_threshold])

    if output_format == "json":
        click.echo(json.dumps(_report_to_json(report), indent=2))
    else:
        from pishield.cli.output import print_scan_report
        print_scan_report(report)

    sys.exit(1 if report.total_findings else 0)
