# Path: spec_builder/process/matcher/models/__init__.py
"""
Matcher Models

Data structures for catalogue entries, extraction input and ranked
match candidates.
"""

from .catalogue_entry import CatalogueEntry
from .catalogue_definition import CatalogueRecord
from .extracted_test import ExtractedTest, ExtractedData, parse_limit
from .match_candidate import MatchReasonKind, MatchReason, MatchCandidate

__all__ = [
    'CatalogueEntry',
    'CatalogueRecord',
    'ExtractedTest',
    'ExtractedData',
    'parse_limit',
    'MatchReasonKind',
    'MatchReason',
    'MatchCandidate',
]
