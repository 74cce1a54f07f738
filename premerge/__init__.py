"""
PreMerge Privacy Check - Secret & PII scanner for pull requests

Flags likely secrets and personally identifiable information before merge:
- Cloud, VCS and payment API keys and tokens
- Email addresses, phone numbers and SSNs
- Credit card numbers, IP addresses and personal names

Copyright (c) 2026 PreMerge Privacy Check Contributors
Licensed under the Apache License 2.0
"""

__version__ = "1.0.0"
__author__ = "prady"


__all__ = [
    "__version__",
]
