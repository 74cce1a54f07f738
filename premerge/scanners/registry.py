"""
PreMerge Pattern Registry

Read-only access to the two ordered detector sets. Both sets are built when
their modules are imported, so an invalid pattern aborts startup instead of
silently producing zero findings.
"""

from __future__ import annotations

from typing import Optional

from premerge.core.detector import Detector
from premerge.scanners.pii import PII_DETECTORS
from premerge.scanners.secrets import SECRET_DETECTORS


def secret_detectors() -> tuple[Detector, ...]:
    return SECRET_DETECTORS


def pii_detectors() -> tuple[Detector, ...]:
    return PII_DETECTORS


def all_detectors() -> tuple[Detector, ...]:
    """Secret detectors followed by PII detectors."""
    return SECRET_DETECTORS + PII_DETECTORS


def get_detector(name: str) -> Optional[Detector]:
    """Look up a detector by name across both sets."""
    for detector in all_detectors():
        if detector.name == name:
            return detector
    return None
