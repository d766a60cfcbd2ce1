"""
Input checks shared by the registry and lifecycle manager
"""

import re
from typing import Optional

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def is_valid_email(value: str) -> bool:
    """Basic ``local@domain.tld`` shape check"""
    return bool(EMAIL_PATTERN.match(value))


def normalize_optional(value: Optional[str]) -> Optional[str]:
    """Blank optional text is stored as NULL"""
    if value is None:
        return None
    value = value.strip()
    return value or None
