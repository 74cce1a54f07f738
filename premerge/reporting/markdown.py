"""
PreMerge Markdown Reporter

Renders the pull request comment: findings grouped by severity, most severe
first, each with detector, location, matched text and remediation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from premerge.core.aggregator import group_by_severity
from premerge.core.finding import Finding

COMMENT_TITLE = "## 🔍 PreMerge Privacy Check Results"

TIPS = [
    "Use environment variables for secrets",
    "Add sensitive files to `.gitignore`",
    "Use placeholder/test data for development",
    "Consider using secret management tools like Vault or AWS Secrets Manager",
]


class MarkdownReporter:
    """Generates the Markdown body posted as a PR comment."""

    def report(
        self,
        findings: list[Finding],
        output_file: Optional[str] = None,
    ) -> str:
        """
        Generate the Markdown report.

        Args:
            findings: Aggregated findings, already severity-sorted.
            output_file: Optional file path to write the report to.

        Returns:
            The Markdown string. Empty when there are no findings.
        """
        if not findings:
            return ""

        lines = [
            COMMENT_TITLE,
            "",
            "I found potential secrets or PII in this PR that should be reviewed:",
            "",
        ]

        for severity, items in group_by_severity(findings).items():
            lines.append(f"### {severity.emoji} {severity.value.upper()} ({len(items)})")
            lines.append("")
            for finding in items:
                lines.append(
                    f"**{finding.detector_name}** in `{finding.file}` (line {finding.line}):"
                )
                lines.append(f"- **Detected:** `{finding.matched_text}`")
                lines.append(f"- **Remediation:** {finding.remediation}")
                lines.append("")

        lines.append("---")
        lines.append("💡 **Tips:**")
        lines.extend(f"- {tip}" for tip in TIPS)

        body = "\n".join(lines) + "\n"

        if output_file:
            Path(output_file).write_text(body, encoding="utf-8")

        return body
