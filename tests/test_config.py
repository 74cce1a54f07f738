"""
Tests for Configuration Loading
"""

from pathlib import Path

import pytest
import yaml

from premerge.core.config import (
    DEFAULT_EXCLUDE_DIRS,
    PremergeConfig,
    generate_default_config,
    parse_bool,
    parse_exclusions,
)


class TestParseExclusions:
    """Tests for exclusion parsing."""

    def test_comma_separated(self):
        """Test comma-separated input is split and stripped."""
        assert parse_exclusions("test-config.js, example.com ,fixtures/") == [
            "test-config.js",
            "example.com",
            "fixtures/",
        ]

    def test_blank_entries_dropped(self):
        """Test empty entries never become exclusions."""
        assert parse_exclusions("") == []
        assert parse_exclusions(" , ,a,") == ["a"]

    def test_list_input(self):
        """Test a YAML list is accepted."""
        assert parse_exclusions(["a", " b ", ""]) == ["a", "b"]

    def test_none(self):
        """Test missing input."""
        assert parse_exclusions(None) == []


class TestParseBool:
    """Tests for boolean parsing."""

    @pytest.mark.parametrize("raw, expected", [
        (True, True),
        (False, False),
        ("true", True),
        ("FALSE", False),
        ("no", False),
        ("1", True),
    ])
    def test_values(self, raw, expected):
        """Test recognised boolean spellings."""
        assert parse_bool(raw, default=not expected) is expected

    def test_default(self):
        """Test unknown or missing values fall back to the default."""
        assert parse_bool(None, True) is True
        assert parse_bool("", False) is False
        assert parse_bool("maybe", True) is True


class TestPremergeConfig:
    """Tests for PremergeConfig."""

    def test_defaults(self, config: PremergeConfig):
        """Test default configuration values."""
        assert config.exclude_patterns == []
        assert config.fail_on_findings is True
        assert config.scan_mode == "pr-diff"
        assert config.output.format == "console"
        assert config.output.comment_on_pr is True
        assert config.exclude_dirs == DEFAULT_EXCLUDE_DIRS

    def test_missing_file(self, temp_dir: Path):
        """Test a missing file yields defaults."""
        config = PremergeConfig.load(temp_dir / "nope.yaml")
        assert config == PremergeConfig()

    def test_load_yaml(self, temp_dir: Path):
        """Test loading values from YAML."""
        path = temp_dir / ".premerge.yaml"
        path.write_text(
            "exclude_patterns: 'a.js, b.js'\n"
            "fail_on_findings: false\n"
            "output:\n"
            "  format: json\n"
            "  comment_on_pr: false\n"
            "exclude_dirs: [vendor]\n",
            encoding="utf-8",
        )
        config = PremergeConfig.load(path)
        assert config.exclude_patterns == ["a.js", "b.js"]
        assert config.fail_on_findings is False
        assert config.output.format == "json"
        assert config.output.comment_on_pr is False
        assert config.exclude_dirs == ["vendor"]

    def test_invalid_yaml_falls_back(self, temp_dir: Path):
        """Test malformed YAML is ignored."""
        path = temp_dir / ".premerge.yaml"
        path.write_text("exclude_patterns: [unclosed\n", encoding="utf-8")
        assert PremergeConfig.load(path) == PremergeConfig()

    def test_non_mapping_falls_back(self, temp_dir: Path):
        """Test a YAML document that is not a mapping is ignored."""
        path = temp_dir / ".premerge.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        assert PremergeConfig.load(path) == PremergeConfig()

    def test_default_config_round_trips(self, temp_dir: Path):
        """Test the generated default config is valid and loadable."""
        path = temp_dir / ".premerge.yaml"
        path.write_text(generate_default_config(), encoding="utf-8")
        assert isinstance(yaml.safe_load(path.read_text(encoding="utf-8")), dict)

        config = PremergeConfig.load(path)
        assert config.exclude_patterns == ["test-config.js", "example.com"]
        assert config.fail_on_findings is True
