"""
PreMerge Console Reporter

Generates human-readable colored console output.
"""

from __future__ import annotations

import sys
from typing import Optional

import click

from premerge import __version__
from premerge.core.aggregator import FindingSummary
from premerge.core.finding import SEVERITY_ORDER, Finding


def _safe_echo(text: str = "", **kwargs) -> None:
    """Echo text, handling Unicode issues on Windows consoles."""
    try:
        click.echo(text, **kwargs)
    except UnicodeEncodeError:
        safe = text.encode(sys.stdout.encoding or "utf-8", errors="replace").decode(
            sys.stdout.encoding or "utf-8", errors="replace"
        )
        click.echo(safe, **kwargs)


# Severity colors
SEVERITY_COLORS = {
    "critical": "bright_red",
    "high": "red",
    "medium": "yellow",
    "low": "cyan",
}


class ConsoleReporter:
    """Prints a formatted scan report to the console."""

    def __init__(self, target: str) -> None:
        self.target = target

    def report(
        self,
        findings: list[Finding],
        scanned_files: int = 0,
        skipped_files: Optional[list[str]] = None,
        should_fail: bool = False,
    ) -> None:
        """
        Print the full scan report.

        Args:
            findings: Aggregated findings, already severity-sorted.
            scanned_files: Number of files scanned.
            skipped_files: Files that could not be read.
            should_fail: Whether the run fails on these findings.
        """
        self._print_header()
        self._print_file_counts(scanned_files, skipped_files or [])
        self._print_severity_summary(findings)

        if findings:
            self._print_detailed_findings(findings)

        self._print_footer(findings, should_fail)

    def _print_header(self) -> None:
        _safe_echo("")
        _safe_echo(click.style("=" * 55, fg="bright_blue"))
        _safe_echo(click.style("  PreMerge Privacy Check Report", fg="bright_white", bold=True))
        _safe_echo(click.style(f"  Version: {__version__}", fg="white"))
        _safe_echo(click.style(f"  Target: {self.target}", fg="white"))
        _safe_echo(click.style("=" * 55, fg="bright_blue"))

    def _print_file_counts(self, scanned: int, skipped: list[str]) -> None:
        _safe_echo("")
        _safe_echo(
            click.style("  Files scanned: ", fg="bright_white", bold=True)
            + click.style(str(scanned), fg="white")
        )
        for name in skipped:
            _safe_echo(click.style(f"    [!] skipped {name}", fg="yellow"))

    def _print_severity_summary(self, findings: list[Finding]) -> None:
        _safe_echo("")
        _safe_echo(click.style("  Findings Summary:", fg="bright_white", bold=True))
        summary = FindingSummary.from_findings(findings)
        for sev in SEVERITY_ORDER:
            color = SEVERITY_COLORS.get(sev.value, "white")
            _safe_echo(
                click.style(f"     {sev.value.upper():10s}: ", fg=color)
                + click.style(str(summary.count(sev)), fg="white")
            )

    def _print_detailed_findings(self, findings: list[Finding]) -> None:
        _safe_echo("")
        _safe_echo(click.style("  Detailed Findings:", fg="bright_white", bold=True))
        _safe_echo(click.style("-" * 55, fg="bright_black"))

        for idx, finding in enumerate(findings, start=1):
            sev = finding.severity.value
            color = SEVERITY_COLORS.get(sev, "white")

            _safe_echo("")
            _safe_echo(
                click.style(f"  {idx}. ", fg="white")
                + click.style(f" {sev.upper()} ", fg=color, bold=True)
                + click.style(f" {finding.detector_name}", fg="bright_white")
            )
            _safe_echo(
                click.style(f"      Location: {finding.file}:{finding.line}", fg="bright_black")
            )
            _safe_echo(click.style(f"      Detected: {finding.matched_text}", fg="white"))
            _safe_echo(click.style(f"      Remediation: {finding.remediation}", fg="green"))

    def _print_footer(self, findings: list[Finding], should_fail: bool) -> None:
        _safe_echo("")
        _safe_echo(click.style("=" * 55, fg="bright_blue"))

        if should_fail:
            _safe_echo(
                click.style(
                    "  [X] FAILED - Potential secrets or PII must be reviewed",
                    fg="bright_red",
                    bold=True,
                )
            )
        elif not findings:
            _safe_echo(
                click.style("  [OK] PASSED - No secrets or PII detected", fg="green", bold=True)
            )
        else:
            _safe_echo(
                click.style(
                    "  [!] WARNINGS - Review findings above",
                    fg="yellow",
                    bold=True,
                )
            )

        _safe_echo(click.style("=" * 55, fg="bright_blue"))
        _safe_echo("")
