"""Line-scoped pattern analysis engine for extension source files.

This module implements the ``PatternAnalyzer`` class. Matching is
line-oriented, not syntax-aware: every static rule is tested against every
line on its own, so a finding's line number always points at the exact line
that matched. A call split across several lines is therefore not detected.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from pishield.core.analyzer.models import (
    FileScanResult,
    Finding,
    ScanReport,
    sort_findings,
)
from pishield.core.analyzer.patterns import RuleCatalog, default_catalog

logger = logging.getLogger(__name__)

# Evidence longer than this is truncated in findings.
_MAX_EVIDENCE = 200


def split_lines(text: str) -> list[str]:
    """Split ``text`` into source lines on line feeds only.

    ``\\r\\n`` and lone ``\\r`` count as line breaks. Other characters that
    ``str.splitlines()`` treats as breaks (form feed, U+2028 and the like)
    stay inside the line, matching how editors number JavaScript source.
    """
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class PatternAnalyzer:
    """Scores file content against the static rule sets of a catalog.

    The analyzer holds no per-scan state -- each ``analyze()`` call is
    independent, so one instance may be shared across threads.

    Usage::

        analyzer = PatternAnalyzer()
        result = analyzer.analyze(Path("extension.ts"))
        for finding in result.findings:
            print(f"[{finding.severity.name}] line {finding.line_number}: "
                  f"{finding.description}")
    """

    def __init__(self, catalog: RuleCatalog | None = None) -> None:
        self.catalog = catalog if catalog is not None else default_catalog()
        self._rules = tuple(self.catalog.static_rules())

    def analyze_text(self, text: str, path: Path | None = None) -> FileScanResult:
        """Apply every static rule to every line of ``text``.

        Each match yields exactly one finding. There is no early exit: a line
        may accumulate several findings, and a rule may match on many lines.

        Args:
            text: Decoded file content.
            path: Path to record on the result.

        Returns:
            A ``FileScanResult`` with findings sorted severity-descending.
        """
        findings: list[Finding] = []
        for line_number, line in enumerate(split_lines(text), start=1):
            for rule in self._rules:
                if rule.matches(line):
                    findings.append(Finding(
                        severity=rule.severity,
                        category=rule.category,
                        description=rule.description,
                        line_number=line_number,
                        rule_id=rule.rule_id,
                        evidence=line.strip()[:_MAX_EVIDENCE],
                    ))
        return FileScanResult(
            path=path if path is not None else Path("<text>"),
            findings=sort_findings(findings),
        )

    def analyze(self, path: Path) -> FileScanResult:
        """Read ``path`` as text and analyze it.

        Raises:
            OSError: If the file cannot be read.
        """
        text = path.read_text(encoding="utf-8", errors="replace")
        return self.analyze_text(text, path)

    def scan_all(self, paths: Iterable[Path]) -> ScanReport:
        """Analyze every file in ``paths``.

        Files that fail to read (permission denied, deleted mid-scan) are
        skipped and recorded in ``ScanReport.skipped``; the batch continues.
        """
        report = ScanReport()
        for path in paths:
            try:
                report.results.append(self.analyze(path))
            except OSError as exc:
                logger.warning("Skipping unreadable file %s: %s", path, exc)
                report.skipped.append(FileScanResult(path=path, error=str(exc)))
        logger.debug(
            "Scanned %d files, %d with findings, %d skipped",
            report.files_scanned, report.files_with_findings, len(report.skipped),
        )
        return report
