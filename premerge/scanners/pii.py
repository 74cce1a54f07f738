"""
PreMerge PII Scanner

Detects personally identifiable information. Several of these detectors
are intentionally broad (IPv4 without range checks, any two capitalized
words as a name) and will flag test data and prose.
"""

from __future__ import annotations

from premerge.core.detector import Detector, check_unique_names
from premerge.core.finding import Severity
from premerge.core.scanner import BaseScanner


PII_DETECTORS: tuple[Detector, ...] = check_unique_names((
    Detector.define(
        "Email Address",
        r"\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b",
        Severity.MEDIUM,
        "Email address detected. Consider using placeholder emails or "
        "anonymizing this data.",
    ),
    Detector.define(
        "US Phone Number",
        r"\b(?:\+?1[-.\s]?)?\(?([0-9]{3})\)?[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})\b",
        Severity.MEDIUM,
        "Phone number detected. Consider anonymizing or using test data.",
    ),
    Detector.define(
        "US SSN",
        r"\b[0-9]{3}-[0-9]{2}-[0-9]{4}\b",
        Severity.CRITICAL,
        "Social Security Number detected! This must be removed immediately "
        "and never committed.",
    ),
    # Visa, MasterCard, Discover, Amex, Diners Club, JCB
    Detector.define(
        "Credit Card Number",
        r"\b(?:4[0-9]{12}(?:[0-9]{3})?|5[1-5][0-9]{14}|6(?:011|5[0-9]{2})[0-9]{12}"
        r"|3[47][0-9]{13}|3(?:0[0-5]|[68][0-9])[0-9]{11}|(?:2131|1800|35[0-9]{3})[0-9]{11})\b",
        Severity.CRITICAL,
        "Credit card number detected! This must be removed immediately. "
        "Never commit payment information.",
    ),
    Detector.define(
        "IPv4 Address",
        r"\b[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\b",
        Severity.LOW,
        "IP address detected. Consider if this should be anonymized for privacy.",
    ),
    Detector.define(
        "Potential Full Name",
        r"\b[A-Z][a-z]+ [A-Z][a-z]+\b",
        Severity.LOW,
        "Potential personal name detected. Consider anonymizing personal "
        "information.",
    ),
), "PII")


class PIIScanner(BaseScanner):
    """
    PII scanner.
    Detects contact details, government IDs, payment card numbers,
    IP addresses and personal names.
    """

    name = "pii"
    detectors = PII_DETECTORS
