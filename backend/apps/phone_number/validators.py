"""
Phone number validators usable as ``PHONE_NUMBER_VALIDATOR``.
"""

import re

E164_PATTERN = re.compile(r"\+[1-9]\d{6,14}")


def is_e164(phone_number: str) -> bool:
    """Accept numbers in E.164 format (e.g., +14155551234)."""
    return E164_PATTERN.fullmatch(phone_number) is not None
