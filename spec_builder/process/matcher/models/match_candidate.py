# Path: spec_builder/process/matcher/models/match_candidate.py
"""
Match Candidate Models

Models representing the ranked output of the match ranker.
Candidates are transient: they are recomputed on demand and never stored.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .catalogue_entry import CatalogueEntry


class MatchReasonKind(str, Enum):
    """Which rule produced a candidate."""
    MANUAL_OVERRIDE = 'manual_override'
    EXACT = 'exact'
    SUBSTRING = 'substring'
    FUZZY = 'fuzzy'


@dataclass(frozen=True)
class MatchReason:
    """
    Tagged reason for a candidate score.

    Only FUZZY carries a payload: the similarity as a rounded percentage.

    Example:
        MatchReason.fuzzy(0.7368).label  # "Fuzzy(74%)"
    """
    kind: MatchReasonKind
    percent: Optional[int] = None

    @classmethod
    def manual_override(cls) -> 'MatchReason':
        return cls(MatchReasonKind.MANUAL_OVERRIDE)

    @classmethod
    def exact(cls) -> 'MatchReason':
        return cls(MatchReasonKind.EXACT)

    @classmethod
    def substring(cls) -> 'MatchReason':
        return cls(MatchReasonKind.SUBSTRING)

    @classmethod
    def fuzzy(cls, similarity: float) -> 'MatchReason':
        """Build a fuzzy reason, rounding half up to a whole percent."""
        return cls(MatchReasonKind.FUZZY, int(math.floor(similarity * 100 + 0.5)))

    @property
    def label(self) -> str:
        """Human-readable tag shown to the operator."""
        if self.kind == MatchReasonKind.MANUAL_OVERRIDE:
            return 'Manual Override'
        if self.kind == MatchReasonKind.EXACT:
            return 'Exact Match'
        if self.kind == MatchReasonKind.SUBSTRING:
            return 'Substring Match'
        return f'Fuzzy({self.percent}%)'

    @property
    def is_manual(self) -> bool:
        return self.kind == MatchReasonKind.MANUAL_OVERRIDE

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class MatchCandidate:
    """
    A catalogue entry proposed for a raw extracted name.

    Attributes:
        entry: The proposed catalogue entry
        score: Score in [0, 1]
        reason: Which rule produced the score
    """
    entry: CatalogueEntry
    score: float
    reason: MatchReason

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            'catalogue_id': self.entry.id,
            'test_code': self.entry.test_code,
            'score': self.score,
            'reason': self.reason.label,
        }


__all__ = [
    'MatchReasonKind',
    'MatchReason',
    'MatchCandidate',
]
