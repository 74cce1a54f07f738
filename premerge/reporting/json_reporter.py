"""
PreMerge JSON Reporter

Generates machine-readable JSON output format:
{
    "version": "1.0",
    "summary": {
        "total_findings": N,
        "by_severity": {"critical": n, "high": n, ...}
    },
    "findings": [...]
}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from premerge import __version__
from premerge.core.aggregator import FindingSummary
from premerge.core.finding import SEVERITY_ORDER, Finding


class JSONReporter:
    """Generates JSON-formatted scan reports."""

    def __init__(self, target: str) -> None:
        self.target = target

    def report(
        self,
        findings: list[Finding],
        output_file: Optional[str] = None,
        skipped_files: Optional[list[str]] = None,
    ) -> str:
        """
        Generate JSON report.

        Args:
            findings: Aggregated findings.
            output_file: Optional file path to write the report to.
            skipped_files: Files that could not be read.

        Returns:
            The JSON string.
        """
        summary = FindingSummary.from_findings(findings)

        report_data = {
            "version": "1.0",
            "tool": {
                "name": "PreMerge Privacy Check",
                "version": __version__,
            },
            "target": self.target,
            "summary": {
                "total_findings": summary.total,
                "by_severity": {sev.value: summary.count(sev) for sev in SEVERITY_ORDER},
            },
            "findings": [f.to_dict() for f in findings],
            "skipped_files": list(skipped_files or []),
        }

        json_str = json.dumps(report_data, indent=2, ensure_ascii=False)

        if output_file:
            Path(output_file).write_text(json_str, encoding="utf-8")

        return json_str
