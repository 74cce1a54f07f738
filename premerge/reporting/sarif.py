"""
PreMerge SARIF Reporter

Generates SARIF 2.1.0 (Static Analysis Results Interchange Format) output
for integration with:
- GitHub Code Scanning / Security tab
- Azure DevOps
- Visual Studio / VSCode
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Optional

from premerge import __version__
from premerge.core.finding import Finding, Severity


# SARIF severity level mapping
SARIF_LEVEL_MAP = {
    Severity.CRITICAL: "error",
    Severity.HIGH: "error",
    Severity.MEDIUM: "warning",
    Severity.LOW: "note",
}

SEVERITY_SCORES = {
    Severity.CRITICAL: "9.5",
    Severity.HIGH: "7.5",
    Severity.MEDIUM: "5.0",
    Severity.LOW: "2.5",
}


def rule_id(detector_name: str) -> str:
    """Stable SARIF rule id derived from a detector name."""
    return "premerge/" + re.sub(r"[^a-z0-9]+", "-", detector_name.lower()).strip("-")


class SARIFReporter:
    """Generates SARIF 2.1.0-formatted scan reports."""

    def __init__(self, target: str) -> None:
        self.target = target

    def report(
        self,
        findings: list[Finding],
        output_file: Optional[str] = None,
    ) -> str:
        """
        Generate SARIF report.

        Args:
            findings: Aggregated findings.
            output_file: Optional file path to write the report to.

        Returns:
            The SARIF JSON string.
        """
        rules_map: dict[str, dict] = {}
        results: list[dict] = []

        for finding in findings:
            rid = rule_id(finding.detector_name)
            if rid not in rules_map:
                rules_map[rid] = {
                    "id": rid,
                    "name": finding.detector_name,
                    "shortDescription": {"text": finding.detector_name},
                    "defaultConfiguration": {
                        "level": SARIF_LEVEL_MAP[finding.severity]
                    },
                    "help": {
                        "text": finding.remediation,
                        "markdown": f"**Remediation:** {finding.remediation}",
                    },
                    "properties": {
                        "security-severity": SEVERITY_SCORES[finding.severity],
                        "tags": ["security", "privacy"],
                    },
                }

            region: dict = {"startLine": max(1, finding.line), "startColumn": 1}
            results.append(
                {
                    "ruleId": rid,
                    "ruleIndex": list(rules_map).index(rid),
                    "level": SARIF_LEVEL_MAP[finding.severity],
                    "message": {"text": f"{finding.detector_name} detected."},
                    "locations": [
                        {
                            "physicalLocation": {
                                "artifactLocation": {
                                    "uri": finding.file.replace("\\", "/"),
                                    "uriBaseId": "%SRCROOT%",
                                },
                                "region": region,
                            }
                        }
                    ],
                }
            )

        sarif = {
            "$schema": "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/main/sarif-2.1/schema/sarif-schema-2.1.0.json",
            "version": "2.1.0",
            "runs": [
                {
                    "tool": {
                        "driver": {
                            "name": "PreMerge Privacy Check",
                            "version": __version__,
                            "rules": list(rules_map.values()),
                        }
                    },
                    "results": results,
                    "columnKind": "utf16CodeUnits",
                }
            ],
        }

        sarif_str = json.dumps(sarif, indent=2, ensure_ascii=False)

        if output_file:
            Path(output_file).write_text(sarif_str, encoding="utf-8")

        return sarif_str
