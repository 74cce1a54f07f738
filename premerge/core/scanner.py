"""
PreMerge Content Scanner

A scanner applies an ordered set of detectors to one file's text and returns
findings. Exclusion rules are passed in explicitly once per run.

Scanners:
- SecretsScanner (API keys, tokens)
- PIIScanner (emails, phone numbers, SSNs, cards, IPs, names)
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from premerge.core.detector import Detector
from premerge.core.finding import Finding


def find_line_number(content: str, text: str) -> int:
    """
    Return the 1-based number of the first line containing ``text``.

    Lines are searched top to bottom for a literal occurrence, so a value
    repeated earlier in the file resolves to that earlier line. Returns 0
    when no single line contains it (e.g. a match spanning a newline).
    """
    return _line_number(content.split("\n"), text)


def _line_number(lines: Sequence[str], text: str) -> int:
    for index, line in enumerate(lines, start=1):
        if text in line:
            return index
    return 0


def is_excluded(file_path: str, matched_text: str, exclusions: Iterable[str]) -> bool:
    """Check whether a match is suppressed by any exclusion substring."""
    return any(
        exclude in file_path or exclude in matched_text
        for exclude in exclusions
        if exclude
    )


def scan_content(
    content: str,
    file_path: str,
    detectors: Sequence[Detector],
    exclusions: Sequence[str] = (),
) -> List[Finding]:
    """
    Run every detector over ``content`` and collect findings.

    Args:
        content: Full text of the file.
        file_path: Path reported on each finding and matched against exclusions.
        detectors: Detectors to evaluate, in order.
        exclusions: Substrings that suppress a finding when found in the
            file path or the matched text.

    Returns:
        Findings in detector order, then match order within the file.
    """
    findings: List[Finding] = []
    lines: Optional[list[str]] = None

    for detector in detectors:
        for value in detector.find(content):
            if is_excluded(file_path, value, exclusions):
                continue

            if lines is None:
                lines = content.split("\n")

            findings.append(
                Finding(
                    detector_name=detector.name,
                    severity=detector.severity,
                    file=file_path,
                    matched_text=value,
                    line=_line_number(lines, value),
                    remediation=detector.remediation,
                )
            )

    return findings


class BaseScanner:
    """
    Binds a detector set to the exclusion rules of one run.
    Subclasses set ``name`` and their default ``detectors``.
    """

    name: str = "base"
    detectors: Sequence[Detector] = ()

    def __init__(
        self,
        exclude: Optional[Sequence[str]] = None,
        detectors: Optional[Sequence[Detector]] = None,
    ):
        self.exclude = [ex for ex in (exclude or []) if ex]
        if detectors is not None:
            self.detectors = tuple(detectors)

    def scan(self, content: str, file_path: str) -> List[Finding]:
        """
        Scan one file's content and return findings.
        """
        return scan_content(content, file_path, self.detectors, self.exclude)
