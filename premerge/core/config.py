"""
PreMerge Configuration Management

Loads and manages configuration from .premerge.yaml files. Values read here
are fixed for the duration of a run; CLI flags and action inputs override them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import yaml

logger = logging.getLogger(__name__)


CONFIG_FILENAME = ".premerge.yaml"

SCAN_MODES = ("pr-diff",)

OUTPUT_FORMATS = ("console", "json", "sarif", "markdown")

DEFAULT_EXCLUDE_DIRS = [
    "node_modules",
    ".git",
    "__pycache__",
    "venv",
    ".venv",
    ".tox",
    ".mypy_cache",
    ".pytest_cache",
    "dist",
    "build",
    ".eggs",
]


class ConfigError(Exception):
    """Required configuration is missing or invalid."""


def parse_exclusions(raw: Union[str, Iterable[str], None]) -> list[str]:
    """
    Parse exclusion substrings from a comma-separated string or a list.
    Entries are stripped; blank entries are dropped.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = raw.split(",")
    return [str(item).strip() for item in raw if str(item).strip()]


def parse_bool(raw: Any, default: bool) -> bool:
    """Parse a YAML or string boolean, falling back to ``default``."""
    if raw is None or raw == "":
        return default
    if isinstance(raw, bool):
        return raw
    value = str(raw).strip().lower()
    if value in ("true", "yes", "on", "1"):
        return True
    if value in ("false", "no", "off", "0"):
        return False
    return default


@dataclass
class OutputConfig:
    format: str = "console"
    file: Optional[str] = None
    comment_on_pr: bool = True


@dataclass
class PremergeConfig:
    """Root configuration object for PreMerge."""

    exclude_patterns: list[str] = field(default_factory=list)
    fail_on_findings: bool = True
    scan_mode: str = "pr-diff"
    output: OutputConfig = field(default_factory=OutputConfig)
    exclude_dirs: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS))

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "PremergeConfig":
        """Load configuration from a YAML file, falling back to defaults."""
        if config_path is None:
            # Search in current directory
            config_path = Path.cwd() / CONFIG_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
            return cls()

        if not isinstance(raw, dict):
            logger.warning("Ignoring config %s: expected a mapping", config_path)
            return cls()

        return cls._from_dict(raw)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "PremergeConfig":
        """Build config from a parsed YAML dictionary."""
        output_data = data.get("output") or {}
        output = OutputConfig(
            format=output_data.get("format", "console"),
            file=output_data.get("file"),
            comment_on_pr=parse_bool(output_data.get("comment_on_pr"), True),
        )

        return cls(
            exclude_patterns=parse_exclusions(data.get("exclude_patterns")),
            fail_on_findings=parse_bool(data.get("fail_on_findings"), True),
            scan_mode=data.get("scan_mode", "pr-diff"),
            output=output,
            exclude_dirs=data.get("exclude_dirs", list(DEFAULT_EXCLUDE_DIRS)),
        )


def generate_default_config() -> str:
    """Generate a default .premerge.yaml configuration file content."""
    return """\
# PreMerge Privacy Check Configuration

# Substrings that suppress a finding when they appear in the
# file path or in the matched text
exclude_patterns:
  - "test-config.js"
  - "example.com"

# Fail the check when any finding remains after exclusions
fail_on_findings: true

# Only pull request diffs are scanned in CI
scan_mode: pr-diff

# Output settings
output:
  format: console  # console, json, sarif, markdown
  # file: premerge-report.json
  comment_on_pr: true

# Directories skipped by `premerge scan`
exclude_dirs:
  - node_modules
  - .git
  - __pycache__
  - venv
"""
