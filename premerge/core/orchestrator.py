"""
PreMerge Scan Orchestrator

Drives one scan run: every input file goes through the secret detectors and
then the PII detectors, and all raw findings are aggregated once at the end.

A file source that cannot deliver one file's content raises FetchError; that
file is skipped with a warning and the run continues.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Protocol, Sequence

from premerge.core.aggregator import FindingSummary, aggregate
from premerge.core.detector import Detector
from premerge.core.finding import Finding
from premerge.core.scanner import BaseScanner
from premerge.scanners.pii import PIIScanner
from premerge.scanners.secrets import SecretsScanner

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """A single file's content could not be fetched or decoded."""


@dataclass(frozen=True)
class ChangedFile:
    filename: str
    status: str = "modified"
    additions: int = 0
    deletions: int = 0


@dataclass(frozen=True)
class ScanInput:
    filename: str
    content: str
    additions: int = 0
    deletions: int = 0


class FileSource(Protocol):
    def list_files(self) -> Iterable[ChangedFile]:
        ...

    def fetch(self, changed: ChangedFile) -> ScanInput:
        ...


class ScanState(Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    AGGREGATING = "aggregating"
    DONE = "done"


@dataclass
class ScanReport:
    """Result of one scan run."""

    findings: list[Finding] = field(default_factory=list)
    summary: FindingSummary = field(default_factory=FindingSummary)
    scanned_files: list[str] = field(default_factory=list)
    skipped_files: list[str] = field(default_factory=list)

    def should_fail(self, fail_on_findings: bool) -> bool:
        return fail_on_findings and bool(self.findings)


class ScanOrchestrator:
    """
    Runs the secret and PII detector sets over a batch of files.
    """

    def __init__(
        self,
        secret_detectors: Optional[Sequence[Detector]] = None,
        pii_detectors: Optional[Sequence[Detector]] = None,
        exclusions: Optional[Sequence[str]] = None,
    ) -> None:
        self.exclusions = tuple(ex for ex in (exclusions or ()) if ex)
        # Secrets run before PII on every file
        self.scanners: tuple[BaseScanner, ...] = (
            SecretsScanner(self.exclusions, detectors=secret_detectors),
            PIIScanner(self.exclusions, detectors=pii_detectors),
        )
        self.state = ScanState.IDLE

    def scan_file(self, item: ScanInput) -> list[Finding]:
        """Secret findings followed by PII findings for one file."""
        findings: list[Finding] = []
        for scanner in self.scanners:
            findings.extend(scanner.scan(item.content, item.filename))
        return findings

    def run(self, inputs: Iterable[ScanInput]) -> ScanReport:
        """
        Scan already-fetched files and aggregate the findings.

        Args:
            inputs: Files to scan. May be empty.

        Returns:
            ScanReport with deduplicated, severity-sorted findings.
        """
        report = ScanReport()
        raw: list[Finding] = []

        self.state = ScanState.SCANNING
        for item in inputs:
            raw.extend(self._scan_one(item))
            report.scanned_files.append(item.filename)

        return self._finish(report, raw)

    def run_source(self, source: FileSource) -> ScanReport:
        """
        List, fetch and scan every file a source offers.
        Files whose content cannot be fetched are skipped.
        """
        report = ScanReport()
        raw: list[Finding] = []

        self.state = ScanState.SCANNING
        for changed in source.list_files():
            try:
                item = source.fetch(changed)
            except FetchError as exc:
                logger.warning("Could not fetch content for %s: %s", changed.filename, exc)
                report.skipped_files.append(changed.filename)
                continue

            raw.extend(self._scan_one(item))
            report.scanned_files.append(item.filename)

        return self._finish(report, raw)

    def _scan_one(self, item: ScanInput) -> list[Finding]:
        logger.info("Scanning %s...", item.filename)
        findings = self.scan_file(item)
        logger.debug("%s: %d raw finding(s)", item.filename, len(findings))
        return findings

    def _finish(self, report: ScanReport, raw: list[Finding]) -> ScanReport:
        self.state = ScanState.AGGREGATING
        report.findings = aggregate(raw)
        report.summary = FindingSummary.from_findings(report.findings)
        self.state = ScanState.DONE

        if not report.scanned_files and not report.skipped_files:
            logger.info("No files to scan")
        return report
