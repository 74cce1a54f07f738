"""
PreMerge CLI

Command-line interface for running secret and PII scans.

Commands:
    premerge scan [PATHS]...   - Scan local files and directories
    premerge pr                - Scan the current pull request (GitHub Actions)
    premerge detectors         - List the built-in detectors
    premerge init              - Create a default config file
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click

from premerge import __version__
from premerge.core.aggregator import FindingSummary
from premerge.core.config import (
    CONFIG_FILENAME,
    OUTPUT_FORMATS,
    SCAN_MODES,
    ConfigError,
    PremergeConfig,
    generate_default_config,
    parse_exclusions,
)
from premerge.core.orchestrator import ScanOrchestrator, ScanReport
from premerge.integrations.github import (
    emit_annotations,
    load_pull_request_context,
    read_action_inputs,
    set_outputs,
    write_step_summary,
)
from premerge.integrations.github_api import (
    GITHUB_API_URL,
    GitHubAPIError,
    GitHubClient,
    PullRequestFileSource,
)
from premerge.integrations.local import LocalFileSource
from premerge.reporting.console import ConsoleReporter, _safe_echo
from premerge.reporting.json_reporter import JSONReporter
from premerge.reporting.markdown import MarkdownReporter
from premerge.reporting.sarif import SARIFReporter
from premerge.scanners import registry

logger = logging.getLogger("premerge")


@click.group()
@click.version_option(version=__version__, prog_name="PreMerge")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """
    PreMerge - Secret & PII Pull Request Scanner

    Flag API keys, tokens and personal data before they are merged.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


# ═══════════════════════════════════════════════════════
#  premerge scan
# ═══════════════════════════════════════════════════════
@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
@click.option("--format", "-f", "output_format", type=click.Choice(OUTPUT_FORMATS),
              default=None, help="Output format (default: console).")
@click.option("--output", "-o", "output_file", type=click.Path(), default=None,
              help="Write report to a file.")
@click.option("--exclude", "-e", multiple=True,
              help="Substring that suppresses matching findings (repeatable, comma-separated).")
@click.option("--fail-on-findings/--no-fail-on-findings", default=None,
              help="Exit non-zero when findings remain (default: from config, else on).")
@click.option("--config", "config_path", type=click.Path(), default=None,
              help="Path to .premerge.yaml configuration file.")
def scan(
    paths: tuple,
    output_format: Optional[str],
    output_file: Optional[str],
    exclude: tuple,
    fail_on_findings: Optional[bool],
    config_path: Optional[str],
) -> None:
    """Scan local files or directories for secrets and PII.

    Examples:

        premerge scan

        premerge scan src/ config.js --exclude test-config.js

        premerge scan --format sarif --output results.sarif
    """
    base = Path.cwd()
    targets = [Path(p) for p in paths] or [base]

    # ── Load configuration ──
    cfg_path = Path(config_path) if config_path else base / CONFIG_FILENAME
    config = PremergeConfig.load(cfg_path)

    # CLI flags override config
    fmt = output_format or config.output.format
    out_file = output_file or config.output.file
    exclusions = parse_exclusions(",".join(exclude)) + config.exclude_patterns
    fail = config.fail_on_findings if fail_on_findings is None else fail_on_findings

    source = LocalFileSource(targets, exclude_dirs=config.exclude_dirs, base_path=base)
    report = ScanOrchestrator(exclusions=exclusions).run_source(source)
    should_fail = report.should_fail(fail)

    _render(fmt, report, target=", ".join(str(t) for t in targets),
            output_file=out_file, should_fail=should_fail)

    if should_fail:
        sys.exit(1)


# ═══════════════════════════════════════════════════════
#  premerge pr
# ═══════════════════════════════════════════════════════
@cli.command("pr")
@click.option("--config", "config_path", type=click.Path(), default=None,
              help="Path to .premerge.yaml configuration file.")
@click.option("--no-comment", is_flag=True, help="Do not comment on the pull request.")
def pull_request(config_path: Optional[str], no_comment: bool) -> None:
    """Scan the files changed by the current pull request.

    Reads the action inputs (github-token, scan-mode, fail-on-findings,
    exclude-patterns) from the environment GitHub Actions provides.
    """
    cfg_path = Path(config_path) if config_path else Path.cwd() / CONFIG_FILENAME
    config = PremergeConfig.load(cfg_path)

    try:
        inputs = read_action_inputs()
    except ConfigError as exc:
        raise click.ClickException(f"Action failed with error: {exc}")

    exclusions = inputs.exclude_patterns + config.exclude_patterns
    scan_mode = inputs.scan_mode or config.scan_mode
    fail = inputs.fail_on_findings and config.fail_on_findings
    comment = config.output.comment_on_pr and not no_comment

    pr = load_pull_request_context()
    if scan_mode not in SCAN_MODES or pr is None:
        logger.warning("PR diff mode not available, skipping scan")
        set_outputs(FindingSummary())
        return

    logger.info("Scanning PR #%d for secrets and PII...", pr.number)
    client = GitHubClient(
        inputs.github_token,
        api_url=os.environ.get("GITHUB_API_URL", GITHUB_API_URL),
    )

    try:
        report = ScanOrchestrator(exclusions=exclusions).run_source(
            PullRequestFileSource(client, pr)
        )

        if report.findings:
            logger.warning("Found %d potential secrets/PII", report.summary.total)
            emit_annotations(report.findings)
            if comment:
                client.create_issue_comment(pr, MarkdownReporter().report(report.findings))
        else:
            logger.info("No secrets or PII detected in this PR")
    except GitHubAPIError as exc:
        raise click.ClickException(f"Action failed with error: {exc}")

    should_fail = report.should_fail(fail)
    target = f"{pr.owner}/{pr.repo}#{pr.number}"
    ConsoleReporter(target=target).report(
        report.findings, len(report.scanned_files), report.skipped_files, should_fail
    )
    write_step_summary(report.findings, target, should_fail)
    set_outputs(report.summary)

    if should_fail:
        raise click.ClickException(
            f"Found {report.summary.total} potential secrets or PII. "
            "Please review and fix before merging."
        )


# ═══════════════════════════════════════════════════════
#  premerge detectors
# ═══════════════════════════════════════════════════════
@cli.command()
@click.option("--kind", type=click.Choice(["all", "secrets", "pii"]), default="all",
              help="Which detector set to list.")
def detectors(kind: str) -> None:
    """List the built-in detectors and their severities."""
    if kind == "secrets":
        selected = registry.secret_detectors()
    elif kind == "pii":
        selected = registry.pii_detectors()
    else:
        selected = registry.all_detectors()

    for detector in selected:
        _safe_echo(f"  {detector.severity.value.upper():10s} {detector.name}")


# ═══════════════════════════════════════════════════════
#  premerge init
# ═══════════════════════════════════════════════════════
@cli.command()
@click.option("--path", "-p", "target_path", type=click.Path(), default=".",
              help="Directory to create the config file in.")
def init(target_path: str) -> None:
    """Create a default .premerge.yaml."""
    target = Path(target_path).resolve()
    target.mkdir(parents=True, exist_ok=True)

    config_file = target / CONFIG_FILENAME

    if config_file.exists():
        _safe_echo(click.style(f"  [!] {config_file} already exists, skipping.", fg="yellow"))
        return

    config_file.write_text(generate_default_config(), encoding="utf-8")
    _safe_echo(click.style(f"  [+] Created {config_file}", fg="green"))
    _safe_echo("")
    _safe_echo("  Edit this file to tune exclusions and failure behaviour.")
    _safe_echo("  Run 'premerge scan' to start scanning.")


# ── Helpers ──

def _render(
    fmt: str,
    report: ScanReport,
    target: str,
    output_file: Optional[str],
    should_fail: bool,
) -> None:
    """Print or write the report in the requested format."""
    if fmt == "json":
        json_str = JSONReporter(target=target).report(
            report.findings, output_file=output_file, skipped_files=report.skipped_files
        )
        if not output_file:
            _safe_echo(json_str)
    elif fmt == "sarif":
        sarif_str = SARIFReporter(target=target).report(report.findings, output_file=output_file)
        if not output_file:
            _safe_echo(sarif_str)
    elif fmt == "markdown":
        body = MarkdownReporter().report(report.findings, output_file=output_file)
        if not output_file:
            _safe_echo(body or "No secrets or PII detected.")
    else:
        ConsoleReporter(target=target).report(
            report.findings, len(report.scanned_files), report.skipped_files, should_fail
        )
        if output_file:
            # Also write JSON when console + output file
            JSONReporter(target=target).report(
                report.findings, output_file=output_file, skipped_files=report.skipped_files
            )


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
