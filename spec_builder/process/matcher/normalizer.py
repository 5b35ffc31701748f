# Path: spec_builder/process/matcher/normalizer.py
"""
Name Normalizer

Reduces a string to the key used for every comparison in the matcher,
so punctuation, spacing and case never affect matching.
"""

import re
from typing import Optional


_NON_ALPHANUMERIC = re.compile(r'[^A-Za-z0-9]')


def normalize(value: Optional[str]) -> str:
    """
    Strip everything except ASCII letters and digits, then upper-case.

    Args:
        value: Raw string (None allowed)

    Returns:
        Comparison key; empty string for None or empty input

    Example:
        normalize("Appearance / Description")  # "APPEARANCEDESCRIPTION"
    """
    if not value:
        return ''
    return _NON_ALPHANUMERIC.sub('', value).upper()


__all__ = ['normalize']
