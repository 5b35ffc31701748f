# Path: spec_builder/process/matcher/engine/__init__.py
"""
Matching Engine

- MatchRanker: ranks catalogue entries for one raw extracted name
- MatchSettings: thresholds read from configuration
- CatalogueLoader: reads catalogue files (JSON or YAML)
"""

from .catalogue_loader import CatalogueLoader
from .ranker import MatchRanker, MatchSettings

__all__ = [
    'CatalogueLoader',
    'MatchRanker',
    'MatchSettings',
]
