# Path: spec_builder/core/ui/__init__.py
"""
spec_builder UI Package

Operator console for the resolution workflow.

Provides:
- Candidate selection for pending items
- Catalogue search
"""

from .user_input import (
    ResolutionConsole,
    display_menu,
    get_user_selection,
)

__all__ = [
    'ResolutionConsole',
    'display_menu',
    'get_user_selection',
]
