"""
PreMerge Finding Model

A Finding represents one concrete match of a detector against a file's
content. Findings are created once by the content scanner and never mutated;
later stages only filter and reorder them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Severity(Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort position, most severe first."""
        return _RANK[self]

    @property
    def emoji(self) -> str:
        return _EMOJI[self]

    @property
    def annotation_level(self) -> str:
        """GitHub Actions annotation command used for this severity."""
        return "error" if self is Severity.CRITICAL else "warning"


_RANK = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
}

_EMOJI = {
    Severity.CRITICAL: "🚨",
    Severity.HIGH: "⚠️",
    Severity.MEDIUM: "⚡",
    Severity.LOW: "ℹ️",
}

# Most severe first
SEVERITY_ORDER: tuple[Severity, ...] = tuple(sorted(Severity, key=lambda s: s.rank))


@dataclass(frozen=True)
class Finding:
    detector_name: str
    severity: Severity
    file: str
    matched_text: str
    line: int
    remediation: str

    def to_dict(self) -> dict[str, Any]:
        """Convert finding to a dictionary for JSON serialization."""
        return {
            "type": self.detector_name,
            "severity": self.severity.value,
            "file": self.file,
            "line": self.line,
            "match": self.matched_text,
            "remediation": self.remediation,
        }
