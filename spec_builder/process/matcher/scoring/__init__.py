# Path: spec_builder/process/matcher/scoring/__init__.py
"""
Scoring Module

Components for comparing normalized keys:
- distance: Levenshtein edit distance
- similarity: Edit distance scaled to [0, 1]
- LevenshteinScorer: Injectable scorer used by the match ranker
"""

from .similarity import distance, similarity, LevenshteinScorer

__all__ = [
    'distance',
    'similarity',
    'LevenshteinScorer',
]
