# Path: spec_builder/process/matcher/__init__.py
"""
Matching Engine - Catalogue Matching

Maps free-text test names pulled from supplier documents onto entries of
the internal test catalogue.

Core Components:
    - normalize: Reduces names to comparison keys
    - LevenshteinScorer: Edit-distance similarity
    - MatchRanker: Override lookup, exact/substring/fuzzy scoring, top-N
    - Models: Catalogue entries, extracted tests, match candidates

Key Principle:
    A manual override recorded for a raw name always wins. Without one,
    ranking depends only on the name and the catalogue snapshot.

Example:
    from spec_builder.process.matcher import MatchRanker

    ranker = MatchRanker(override_store=overrides)
    candidates = ranker.rank("pH Value", catalogue)
    if ranker.is_confident(candidates):
        entry = candidates[0].entry
"""

from .normalizer import normalize
from .scoring import distance, similarity, LevenshteinScorer
from .engine import MatchRanker, MatchSettings
from .models import (
    CatalogueEntry,
    ExtractedTest,
    ExtractedData,
    parse_limit,
    MatchReasonKind,
    MatchReason,
    MatchCandidate,
)

__all__ = [
    'normalize',
    'distance',
    'similarity',
    'LevenshteinScorer',
    'MatchRanker',
    'MatchSettings',
    'CatalogueEntry',
    'ExtractedTest',
    'ExtractedData',
    'parse_limit',
    'MatchReasonKind',
    'MatchReason',
    'MatchCandidate',
]
