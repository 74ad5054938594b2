"""
Release Name Policy

Architectural Intent:
- Naming policy shared by every operation that addresses a release by name
- Names are alphanumeric at both ends, with '-', '_' and '.' allowed inside
"""

import re

VALID_NAME = re.compile(r"^(([A-Za-z0-9][-A-Za-z0-9_.]*)?[A-Za-z0-9])+$")


def is_valid_release_name(name: str) -> bool:
    return bool(name) and VALID_NAME.match(name) is not None
