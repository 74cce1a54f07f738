"""
PreMerge Finding Aggregation

Merges raw findings from every scanned file into the final report order:
deduplicate on (matched text, file), then a stable sort by severity.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from premerge.core.finding import SEVERITY_ORDER, Finding, Severity


@dataclass(frozen=True)
class FindingSummary:
    """Counts derived from an aggregated finding list."""

    total: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0

    @classmethod
    def from_findings(cls, findings: Iterable[Finding]) -> "FindingSummary":
        counter = Counter(f.severity for f in findings)
        return cls(
            total=sum(counter.values()),
            critical=counter.get(Severity.CRITICAL, 0),
            high=counter.get(Severity.HIGH, 0),
            medium=counter.get(Severity.MEDIUM, 0),
            low=counter.get(Severity.LOW, 0),
        )

    def count(self, severity: Severity) -> int:
        return getattr(self, severity.value)

    def as_outputs(self) -> dict[str, str]:
        """Run outputs, as strings the way CI step outputs are set."""
        return {
            "findings-count": str(self.total),
            "critical-count": str(self.critical),
            "high-count": str(self.high),
        }


def deduplicate(findings: Iterable[Finding]) -> list[Finding]:
    """
    Keep the first finding for each (matched text, file) pair.

    Later duplicates are dropped whatever their detector or severity, so two
    detectors matching the same text in the same file yield one finding.
    """
    seen: set[tuple[str, str]] = set()
    unique: list[Finding] = []
    for finding in findings:
        key = (finding.matched_text, finding.file)
        if key in seen:
            continue
        seen.add(key)
        unique.append(finding)
    return unique


def sort_by_severity(findings: Iterable[Finding]) -> list[Finding]:
    """Most severe first; ties keep their input order."""
    return sorted(findings, key=lambda f: f.severity.rank)


def aggregate(findings: Iterable[Finding]) -> list[Finding]:
    return sort_by_severity(deduplicate(findings))


def group_by_severity(findings: Iterable[Finding]) -> dict[Severity, list[Finding]]:
    """Group findings per severity, most severe first, omitting empty groups."""
    grouped: dict[Severity, list[Finding]] = {sev: [] for sev in SEVERITY_ORDER}
    for finding in findings:
        grouped[finding.severity].append(finding)
    return {sev: items for sev, items in grouped.items() if items}
