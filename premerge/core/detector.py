"""
PreMerge Detector

A detector pairs a named text-matching pattern with a severity and
remediation advice. Patterns are compiled with RE2, whose matching time is
linear in the input size, so a hostile file cannot stall a scan through
catastrophic backtracking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

import re2

from premerge.core.finding import Severity


class DetectorError(ValueError):
    """Raised when a detector or detector set cannot be constructed."""


@dataclass(frozen=True)
class Detector:
    name: str
    pattern: str
    severity: Severity
    remediation: str
    matcher: Any = field(compare=False, repr=False)
    # Capture group whose text is reported instead of the whole match
    value_group: int = 0

    @classmethod
    def define(
        cls,
        name: str,
        pattern: str,
        severity: Severity,
        remediation: str,
        value_group: int = 0,
    ) -> "Detector":
        """Compile ``pattern`` and build a detector, failing loudly on bad input."""
        try:
            matcher = re2.compile(pattern)
        except re2.error as exc:
            raise DetectorError(f"Invalid pattern for detector {name!r}: {exc}") from exc

        if value_group > matcher.groups:
            raise DetectorError(
                f"Detector {name!r} reports group {value_group} but its pattern "
                f"only has {matcher.groups} group(s)"
            )

        return cls(
            name=name,
            pattern=pattern,
            severity=severity,
            remediation=remediation,
            matcher=matcher,
            value_group=value_group,
        )

    def find(self, text: str) -> Iterator[str]:
        """
        Yield the reported value of every non-overlapping match in ``text``.

        Lone surrogates cannot be handed to RE2; they are matched as ``?``.
        """
        try:
            matches = list(self.matcher.finditer(text))
        except UnicodeEncodeError:
            text = text.encode("utf-8", errors="replace").decode("utf-8")
            matches = list(self.matcher.finditer(text))

        for match in matches:
            value = match.group(self.value_group)
            if value:
                yield value


def check_unique_names(detectors: tuple[Detector, ...], label: str) -> tuple[Detector, ...]:
    """Ensure no two detectors in a set share a name."""
    seen: set[str] = set()
    for detector in detectors:
        if detector.name in seen:
            raise DetectorError(f"Duplicate detector name {detector.name!r} in {label} set")
        seen.add(detector.name)
    return detectors
