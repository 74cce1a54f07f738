"""
PreMerge GitHub Actions Integration

Provides helpers for running PreMerge as a GitHub Action:
- Action inputs and pull request event context
- Workflow annotations (warnings/errors)
- Step outputs and step summary
- Environment detection
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from premerge.core.aggregator import FindingSummary
from premerge.core.config import ConfigError, parse_exclusions
from premerge.core.finding import SEVERITY_ORDER, Finding

logger = logging.getLogger(__name__)


@dataclass
class ActionInputs:
    """Inputs declared by the action, read once per run."""

    github_token: str
    # Empty when the input is unset; the config file then decides
    scan_mode: str = ""
    fail_on_findings: bool = True
    exclude_patterns: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PullRequestContext:
    owner: str
    repo: str
    number: int


def is_github_actions(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Check if currently running inside GitHub Actions."""
    env = os.environ if environ is None else environ
    return env.get("GITHUB_ACTIONS") == "true"


def get_input(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Read an action input the way the runner exposes it (INPUT_<NAME>)."""
    env = os.environ if environ is None else environ
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return env.get(key, "").strip()


def read_action_inputs(
    environ: Optional[Mapping[str, str]] = None,
    require_token: bool = True,
) -> ActionInputs:
    """
    Read the action inputs.

    ``fail-on-findings`` is enabled unless it is exactly ``false``.

    Raises:
        ConfigError: if the GitHub token is required but missing.
    """
    token = get_input("github-token", environ)
    if require_token and not token:
        raise ConfigError("Input required and not supplied: github-token")

    return ActionInputs(
        github_token=token,
        scan_mode=get_input("scan-mode", environ),
        fail_on_findings=get_input("fail-on-findings", environ) != "false",
        exclude_patterns=parse_exclusions(get_input("exclude-patterns", environ)),
    )


def load_pull_request_context(
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[PullRequestContext]:
    """
    Build the pull request context from the workflow event payload.
    Returns None outside a pull_request event.
    """
    env = os.environ if environ is None else environ

    repository = env.get("GITHUB_REPOSITORY", "")
    event_path = env.get("GITHUB_EVENT_PATH")
    if "/" not in repository or not event_path:
        return None

    try:
        with open(event_path, encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read event payload %s: %s", event_path, exc)
        return None

    pull_request = payload.get("pull_request") if isinstance(payload, dict) else None
    if not pull_request or "number" not in pull_request:
        return None

    owner, repo = repository.split("/", 1)
    return PullRequestContext(owner=owner, repo=repo, number=int(pull_request["number"]))


def emit_annotations(findings: list[Finding]) -> None:
    """
    Emit GitHub Actions workflow annotations for each finding.
    Critical findings show as errors, everything else as warnings.
    """
    if not is_github_actions():
        return

    for finding in findings:
        level = finding.severity.annotation_level
        params = [f"file={_escape_property(finding.file)}"]
        if finding.line:
            params.append(f"line={finding.line}")
        params.append(f"title={_escape_property(finding.detector_name)}")

        msg = f"{finding.detector_name} in {finding.file}: {finding.matched_text}"
        print(f"::{level} {','.join(params)}::{_escape_data(msg)}")


def set_outputs(summary: FindingSummary, environ: Optional[Mapping[str, str]] = None) -> None:
    """Append findings-count, critical-count and high-count to GITHUB_OUTPUT."""
    env = os.environ if environ is None else environ
    output_file = env.get("GITHUB_OUTPUT")
    if not output_file:
        return

    lines = [f"{name}={value}" for name, value in summary.as_outputs().items()]
    try:
        with open(output_file, "a", encoding="utf-8") as fh:
            fh.write("\n".join(lines) + "\n")
    except OSError as exc:
        logger.warning("Could not write step outputs: %s", exc)


def write_step_summary(
    findings: list[Finding],
    target: str,
    should_fail: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> None:
    """
    Write a summary to the GitHub Actions step summary.
    This appears on the workflow run page.
    """
    env = os.environ if environ is None else environ
    if env.get("GITHUB_ACTIONS") != "true":
        return

    summary_file = env.get("GITHUB_STEP_SUMMARY")
    if not summary_file:
        return

    summary = FindingSummary.from_findings(findings)
    lines = [
        "## 🔍 PreMerge Privacy Check Results\n",
        f"**Target:** `{target}`\n",
        "| Severity | Count |",
        "|----------|-------|",
    ]
    for sev in SEVERITY_ORDER:
        lines.append(f"| {sev.emoji} {sev.value.upper()} | {summary.count(sev)} |")

    lines.append("")

    if should_fail:
        lines.append("### ❌ Status: FAILED")
        lines.append("Potential secrets or PII must be reviewed before merging.")
    elif findings:
        lines.append("### ⚠️ Status: WARNINGS")
        lines.append("Review the findings above.")
    else:
        lines.append("### ✅ Status: PASSED")
        lines.append("No secrets or PII detected.")

    lines.append("")

    try:
        with open(summary_file, "a", encoding="utf-8") as fh:
            fh.write("\n".join(lines) + "\n")
    except OSError as exc:
        logger.warning("Could not write step summary: %s", exc)


def _escape_data(value: str) -> str:
    """Escape an annotation message per the workflow command format."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    """Escape an annotation property value (``file=``, ``title=``)."""
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")
