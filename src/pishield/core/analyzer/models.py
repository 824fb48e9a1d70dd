"""Data models for the pattern analyzer: Severity, Category, PatternRule, Finding.

These are the core data types produced and consumed by both engines. They
are intentionally decoupled from the rule catalogs and the analysis logic so
that downstream modules (CLI formatters, the interception engine) can import
them without pulling in the catalogs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path


# ---------------------------------------------------------------------------
# Severity: Ordered risk levels
# ---------------------------------------------------------------------------


class Severity(IntEnum):
    """Four-level severity scale for findings.

    The integer encoding enables direct comparison: LOW < MEDIUM < HIGH < CRITICAL.
    """

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


class Category(str, Enum):
    """Rule classification, orthogonal to severity."""

    CODE_EXECUTION = "CODE_EXECUTION"
    PROMPT_INJECTION = "PROMPT_INJECTION"
    DANGEROUS_COMMAND = "DANGEROUS_COMMAND"
    SENSITIVE_FILE = "SENSITIVE_FILE"


# ---------------------------------------------------------------------------
# PatternRule: One severity-tagged detection rule
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PatternRule:
    """A single text-matching rule.

    Attributes:
        rule_id: Stable identifier (e.g. "CE-001") used in reports.
        pattern: Compiled regex, tested with ``search`` against one line
            (static analysis) or one command/path (runtime interception).
        description: Human-readable explanation shown to the user.
        severity: Risk level assigned to every match.
        category: Rule classification.
    """

    rule_id: str
    pattern: re.Pattern[str]
    description: str
    severity: Severity
    category: Category

    def matches(self, text: str) -> bool:
        """Return True if the rule's pattern occurs anywhere in ``text``."""
        return self.pattern.search(text) is not None


# ---------------------------------------------------------------------------
# Finding: One rule match against one line
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Finding:
    """A single rule match produced by the analyzer.

    Findings are immutable (frozen). A line may produce several findings,
    one per matching rule.

    Attributes:
        severity: Severity of the matched rule.
        category: Category of the matched rule.
        description: Description of the matched rule.
        line_number: 1-based index of the matched line, or None when the
            match was not line-scoped.
        rule_id: Identifier of the matched rule.
        evidence: The stripped text of the matched line.
    """

    severity: Severity
    category: Category
    description: str
    line_number: int | None = None
    rule_id: str = ""
    evidence: str = ""


def sort_findings(findings: list[Finding]) -> list[Finding]:
    """Sort findings severity-descending.

    ``sorted`` is stable, so findings of equal severity keep their insertion
    order (rule-set order, then rule order, then line order).
    """
    return sorted(findings, key=lambda f: f.severity, reverse=True)


# ---------------------------------------------------------------------------
# Per-file and aggregate results
# ---------------------------------------------------------------------------


@dataclass
class FileScanResult:
    """The result of analyzing a single file.

    Attributes:
        path: The analyzed file.
        findings: Findings sorted severity-descending.
        error: Read error message when the file was skipped, else None.
    """

    path: Path
    findings: list[Finding] = field(default_factory=list)
    error: str | None = None

    @property
    def is_clean(self) -> bool:
        return not self.findings

    @property
    def max_severity(self) -> Severity | None:
        """Return the highest severity among all findings, or None if clean."""
        if not self.findings:
            return None
        return max(f.severity for f in self.findings)


@dataclass
class ScanReport:
    """Aggregate output of a full scan.

    Recomputed on every scan and never persisted.

    Attributes:
        results: Per-file results for every file that was read, in scan order.
        skipped: Files that could not be read.
    """

    results: list[FileScanResult] = field(default_factory=list)
    skipped: list[FileScanResult] = field(default_factory=list)

    @property
    def files_scanned(self) -> int:
        return len(self.results)

    @property
    def files_with_findings(self) -> int:
        return sum(1 for r in self.results if not r.is_clean)

    @property
    def total_findings(self) -> int:
        return sum(len(r.findings) for r in self.results)

    @property
    def max_severity(self) -> Severity | None:
        levels = [r.max_severity for r in self.results if r.max_severity is not None]
        return max(levels) if levels else None

    def by_severity(self) -> dict[Severity, list[tuple[Path, Finding]]]:
        """Partition all findings into severity buckets.

        Returns:
            Mapping ordered CRITICAL first, LOW last. Every level is present,
            possibly with an empty list.
        """
        buckets: dict[Severity, list[tuple[Path, Finding]]] = {
            level: [] for level in sorted(Severity, reverse=True)
        }
        for result in self.results:
            for finding in result.findings:
                buckets[finding.severity].append((result.path, finding))
        return buckets

    def filtered(self, threshold: Severity) -> ScanReport:
        """Return a copy keeping only findings at or above ``threshold``."""
        kept = [
            FileScanResult(
                path=r.path,
                findings=[f for f in r.findings if f.severity >= threshold],
            )
            for r in self.results
        ]
        return ScanReport(results=kept, skipped=list(self.skipped))
