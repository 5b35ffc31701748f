# Path: spec_builder/constants.py
"""
System-Wide Constants for spec_builder

Central repository for constant values used across the system.
Tunable thresholds live in config_loader.py; the values here are the
fixed vocabulary of the specification records.

Constants are organized by category:
- Result Types
- Storage Keys
- Placeholder Values
- Audit Actions
- Display
"""

from enum import Enum
from typing import Final


# ==============================================================================
# RESULT TYPES
# ==============================================================================

class ResultType(str, Enum):
    """
    Result type of a catalogue test.

    Stored as the single-letter codes used by the LIMS catalogue.
    """
    NUMERIC = 'N'
    TEXT = 'T'

    @classmethod
    def parse(cls, value) -> 'ResultType':
        """Parse a stored code, defaulting to NUMERIC for unknown values."""
        if isinstance(value, cls):
            return value
        text = str(value or '').strip().upper()
        if text in ('T', 'TEXT'):
            return cls.TEXT
        return cls.NUMERIC


# ==============================================================================
# STORAGE KEYS
# ==============================================================================

STORAGE_KEY_CATALOGUE: Final[str] = 'LIMS_CATALOGUE'
STORAGE_KEY_PRODUCTS: Final[str] = 'LIMS_PRODUCTS'
STORAGE_KEY_MANUAL_MATCH: Final[str] = 'LIMS_MANUAL_MATCH'
STORAGE_KEY_AUDIT: Final[str] = 'LIMS_AUDIT'


# ==============================================================================
# PLACEHOLDER VALUES
# ==============================================================================

# Analysis label written on rows that have no catalogue entry yet
UNRESOLVED_ANALYSIS: Final[str] = 'UNRESOLVED'

# Test code written on rows that have no catalogue entry yet
UNRESOLVED_TEST_CODE: Final[str] = '???'

# Rule used when a catalogue entry carries no spec rule
DEFAULT_SPEC_RULE: Final[str] = 'MIN_MAX'


# ==============================================================================
# AUDIT ACTIONS
# ==============================================================================

class AuditAction(str, Enum):
    """Actions written to the audit log."""
    MANUAL_MATCH = 'MANUAL_MATCH'
    CATALOGUE_UPDATE = 'CATALOGUE_UPDATE'
    SAVE_PRODUCT = 'SAVE_PRODUCT'
    IMPORT = 'IMPORT'
    EXPORT = 'EXPORT'


# ==============================================================================
# DISPLAY
# ==============================================================================

MENU_WIDTH: Final[int] = 60
MENU_SEPARATOR: Final[str] = '-' * MENU_WIDTH
MENU_HEADER: Final[str] = '=' * MENU_WIDTH

STATUS_OK: Final[str] = '[OK]'
STATUS_FAIL: Final[str] = '[FAIL]'
STATUS_WARN: Final[str] = '[WARN]'
STATUS_INFO: Final[str] = '[INFO]'


__all__ = [
    'ResultType',
    'STORAGE_KEY_CATALOGUE',
    'STORAGE_KEY_PRODUCTS',
    'STORAGE_KEY_MANUAL_MATCH',
    'STORAGE_KEY_AUDIT',
    'UNRESOLVED_ANALYSIS',
    'UNRESOLVED_TEST_CODE',
    'DEFAULT_SPEC_RULE',
    'AuditAction',
    'MENU_WIDTH',
    'MENU_SEPARATOR',
    'MENU_HEADER',
    'STATUS_OK',
    'STATUS_FAIL',
    'STATUS_WARN',
    'STATUS_INFO',
]
