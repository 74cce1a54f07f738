"""
PreMerge Secrets Scanner

Detects hardcoded API keys and tokens. The detector order below is the
order findings are produced in for a single file.
"""

from __future__ import annotations

from premerge.core.detector import Detector, check_unique_names
from premerge.core.finding import Severity
from premerge.core.scanner import BaseScanner


SECRET_DETECTORS: tuple[Detector, ...] = check_unique_names((
    # ── Cloud Providers ──
    Detector.define(
        "AWS Access Key ID",
        r"\bAKIA[0-9A-Z]{16}\b",
        Severity.HIGH,
        "Rotate this AWS access key immediately. Generate a new key pair and "
        "update all applications.",
    ),
    Detector.define(
        "AWS Secret Access Key",
        r"\b(?:AKIA[0-9A-Z]{16})?[a-zA-Z0-9+/]{40}\b",
        Severity.CRITICAL,
        "This appears to be an AWS secret access key. Rotate immediately and "
        "revoke all permissions.",
    ),

    # ── Version Control ──
    Detector.define(
        "GitHub Personal Access Token",
        r"\bghp_[a-zA-Z0-9]{36,}\b",
        Severity.CRITICAL,
        "GitHub token detected! Revoke this token immediately from GitHub "
        "settings and generate a new one.",
    ),
    Detector.define(
        "GitHub OAuth Token",
        r"\bgho_[a-zA-Z0-9]{36,}\b",
        Severity.CRITICAL,
        "GitHub OAuth token detected! Revoke this token and regenerate "
        "application secrets.",
    ),

    # ── Communication ──
    Detector.define(
        "Slack Token",
        r"\bxox[baprs]-[0-9a-zA-Z]{10,48}\b",
        Severity.HIGH,
        "Slack token detected. Rotate this token in Slack admin panel.",
    ),

    # ── Payment ──
    Detector.define(
        "Stripe API Key",
        r"\bsk_(?:live|test)_[a-zA-Z0-9]{24}\b",
        Severity.CRITICAL,
        "Stripe API key detected! Rotate this key immediately in Stripe dashboard.",
    ),
    Detector.define(
        "PayPal API Key",
        r"\bA[a-zA-Z0-9]{20,}\b",
        Severity.HIGH,
        "PayPal API key detected. Rotate this key in PayPal developer console.",
    ),

    # ── SaaS / Third-Party ──
    Detector.define(
        "Google API Key",
        r"\bAIza[0-9A-Za-z_-]{35}\b",
        Severity.HIGH,
        "Google API key detected. Rotate this key in Google Cloud Console.",
    ),

    # ── Authentication / Tokens ──
    Detector.define(
        "JWT Token",
        r"\beyJ[A-Za-z0-9_-]+\.eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_.+/-]+\b",
        Severity.MEDIUM,
        "JWT token detected. Ensure this is not a long-lived token and "
        "consider rotating.",
    ),
    Detector.define(
        "Generic API Key",
        r"(?i)\bapi[_-]?key[a-zA-Z0-9_-]*[=:]\s*['\"]?([a-zA-Z0-9_-]{20,})['\"]?\b",
        Severity.MEDIUM,
        "Potential API key detected. Verify if this is sensitive and rotate "
        "if necessary.",
        value_group=1,
    ),
), "secret")


class SecretsScanner(BaseScanner):
    """
    Secrets scanner.
    Detects cloud credentials, VCS tokens, payment keys, JWTs and
    generic API key assignments.
    """

    name = "secrets"
    detectors = SECRET_DETECTORS
