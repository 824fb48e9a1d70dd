"""Static pattern analysis for agent extension source files.

Given a file (or raw text), the ``PatternAnalyzer`` tests every line against
the code-execution and prompt-injection rule sets of a ``RuleCatalog`` and
returns a ``FileScanResult`` whose findings are ranked by severity.

Submodules
----------
- ``models``: Data types (Severity, Category, PatternRule, Finding, results).
- ``patterns``: Compiled rule catalogs, ``RuleCatalog`` and YAML loading.
- ``engine``: The PatternAnalyzer class.

All public names are re-exported here::

    from pishield.core.analyzer import PatternAnalyzer, Finding, Severity
"""

from pishield.core.analyzer.models import (
    Category,
    FileScanResult,
    Finding,
    PatternRule,
    ScanReport,
    Severity,
)
from pishield.core.analyzer.patterns import RuleCatalog, default_catalog, load_rules_file
from pishield.core.analyzer.engine import PatternAnalyzer

__all__ = [
    "Category",
    "FileScanResult",
    "Finding",
    "PatternAnalyzer",
    "PatternRule",
    "RuleCatalog",
    "ScanReport",
    "Severity",
    "default_catalog",
    "load_rules_file",
]
