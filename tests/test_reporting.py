"""
Tests for Reporting Module
"""

import json
from pathlib import Path

from premerge.reporting.console import ConsoleReporter
from premerge.reporting.json_reporter import JSONReporter
from premerge.reporting.markdown import COMMENT_TITLE, TIPS, MarkdownReporter
from premerge.reporting.sarif import SARIFReporter, rule_id


class TestMarkdownReporter:
    """Tests for the pull request comment body."""

    def test_empty_report(self):
        """Test no comment body is produced without findings."""
        assert MarkdownReporter().report([]) == ""

    def test_sections_in_severity_order(self, sample_findings):
        """Test one section per severity, most severe first."""
        body = MarkdownReporter().report(sample_findings)

        assert body.startswith(COMMENT_TITLE)
        headings = [line for line in body.splitlines() if line.startswith("### ")]
        assert headings == [
            "### 🚨 CRITICAL (1)",
            "### ⚠️ HIGH (1)",
            "### ⚡ MEDIUM (1)",
            "### ℹ️ LOW (1)",
        ]

    def test_empty_sections_omitted(self, sample_findings):
        """Test severities without findings get no section."""
        body = MarkdownReporter().report(sample_findings[2:])
        assert "CRITICAL" not in body
        assert "### ⚡ MEDIUM (1)" in body

    def test_finding_entry(self, sample_finding):
        """Test each entry shows detector, location, value and remediation."""
        body = MarkdownReporter().report([sample_finding])
        assert "**GitHub Personal Access Token** in `config.js` (line 3):" in body
        assert f"- **Detected:** `{sample_finding.matched_text}`" in body
        assert "- **Remediation:** Revoke this token." in body

    def test_tips_footer(self, sample_finding):
        """Test the tips block closes the comment."""
        body = MarkdownReporter().report([sample_finding])
        assert "---" in body
        for tip in TIPS:
            assert f"- {tip}" in body

    def test_write_to_file(self, temp_dir: Path, sample_finding):
        """Test writing the report to a file."""
        output = temp_dir / "comment.md"
        body = MarkdownReporter().report([sample_finding], output_file=str(output))
        assert output.read_text(encoding="utf-8") == body


class TestJSONReporter:
    """Tests for JSONReporter."""

    def test_empty_report(self):
        """Test report structure with no findings."""
        data = json.loads(JSONReporter(target="repo").report([]))
        assert data["version"] == "1.0"
        assert data["tool"]["name"] == "PreMerge Privacy Check"
        assert data["target"] == "repo"
        assert data["summary"]["total_findings"] == 0
        assert data["findings"] == []

    def test_report_with_findings(self, sample_findings):
        """Test severity counts and finding fields."""
        data = json.loads(
            JSONReporter(target="repo").report(sample_findings, skipped_files=["logo.png"])
        )
        assert data["summary"]["by_severity"] == {
            "critical": 1,
            "high": 1,
            "medium": 1,
            "low": 1,
        }
        assert data["findings"][0] == {
            "type": "US SSN",
            "severity": "critical",
            "file": "a.py",
            "line": 1,
            "match": "123-45-6789",
            "remediation": "Remove it.",
        }
        assert data["skipped_files"] == ["logo.png"]

    def test_write_to_file(self, temp_dir: Path, sample_findings):
        """Test writing JSON to a file."""
        output = temp_dir / "report.json"
        JSONReporter(target="repo").report(sample_findings, output_file=str(output))
        assert json.loads(output.read_text(encoding="utf-8"))["summary"]["total_findings"] == 4


class TestSARIFReporter:
    """Tests for SARIFReporter."""

    def test_rule_id(self):
        """Test rule ids are slugs of detector names."""
        assert rule_id("AWS Access Key ID") == "premerge/aws-access-key-id"
        assert rule_id("IPv4 Address") == "premerge/ipv4-address"

    def test_sarif_structure(self, sample_findings):
        """Test SARIF 2.1.0 structure."""
        sarif = json.loads(SARIFReporter(target="repo").report(sample_findings))
        assert sarif["version"] == "2.1.0"
        assert len(sarif["runs"]) == 1

        run = sarif["runs"][0]
        assert run["tool"]["driver"]["name"] == "PreMerge Privacy Check"
        assert len(run["tool"]["driver"]["rules"]) == 4
        assert [r["level"] for r in run["results"]] == ["error", "error", "warning", "note"]

    def test_location(self, sample_finding):
        """Test result locations point at the file and line."""
        sarif = json.loads(SARIFReporter(target="repo").report([sample_finding]))
        location = sarif["runs"][0]["results"][0]["locations"][0]["physicalLocation"]
        assert location["artifactLocation"]["uri"] == "config.js"
        assert location["region"]["startLine"] == 3

    def test_unknown_line_clamped(self, make_finding):
        """Test findings without a line still produce a valid region."""
        sarif = json.loads(SARIFReporter(target="repo").report([make_finding(line=0)]))
        region = sarif["runs"][0]["results"][0]["locations"][0]["physicalLocation"]["region"]
        assert region["startLine"] == 1

    def test_shared_rule(self, make_finding):
        """Test findings from one detector share a rule."""
        findings = [make_finding(matched_text="a"), make_finding(matched_text="b")]
        run = json.loads(SARIFReporter(target="repo").report(findings))["runs"][0]
        assert len(run["tool"]["driver"]["rules"]) == 1
        assert {r["ruleIndex"] for r in run["results"]} == {0}


class TestConsoleReporter:
    """Tests for ConsoleReporter."""

    def test_clean_report(self, capsys):
        """Test a clean run prints a passed footer."""
        ConsoleReporter(target="repo").report([], scanned_files=3)
        out = capsys.readouterr().out
        assert "PreMerge Privacy Check Report" in out
        assert "Files scanned: 3" in out
        assert "PASSED" in out

    def test_report_with_findings(self, capsys, sample_findings):
        """Test findings are listed with their details."""
        ConsoleReporter(target="repo").report(
            sample_findings, scanned_files=4, skipped_files=["logo.png"], should_fail=True
        )
        out = capsys.readouterr().out
        assert "Detailed Findings" in out
        assert "CRITICAL" in out
        assert "Location: a.py:1" in out
        assert "skipped logo.png" in out
        assert "FAILED" in out

    def test_warnings_when_not_failing(self, capsys, sample_findings):
        """Test findings without failure print a warning footer."""
        ConsoleReporter(target="repo").report(sample_findings, should_fail=False)
        assert "WARNINGS" in capsys.readouterr().out
