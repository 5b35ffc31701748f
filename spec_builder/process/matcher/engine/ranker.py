# Path: spec_builder/process/matcher/engine/ranker.py
"""
Match Ranker

Maps one raw extracted test name to ranked catalogue candidates.
This is the primary entry point for the matching engine.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from spec_builder.core.logger.ipo_logging import get_process_logger
from spec_builder.config_loader import (
    ConfigLoader,
    DEFAULT_CONFIDENCE_THRESHOLD,
    DEFAULT_FUZZY_FLOOR,
    DEFAULT_SUBSTRING_SCORE,
    DEFAULT_MAX_CANDIDATES,
)

from ..normalizer import normalize
from ..models.catalogue_entry import CatalogueEntry
from ..models.match_candidate import MatchCandidate, MatchReason
from ..scoring.similarity import LevenshteinScorer


class OverrideLookup(Protocol):
    """Anything that can answer an override lookup (see storage.OverrideStore)."""

    def lookup(self, raw_name: str): ...


@dataclass(frozen=True)
class MatchSettings:
    """
    Tunable thresholds for ranking and auto-acceptance.

    Attributes:
        confidence_threshold: Minimum top score accepted without review
        fuzzy_floor: Similarity must be strictly above this to be kept
        substring_score: Score given to substring matches
        max_candidates: Number of candidates returned by rank()
    """
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    fuzzy_floor: float = DEFAULT_FUZZY_FLOOR
    substring_score: float = DEFAULT_SUBSTRING_SCORE
    max_candidates: int = DEFAULT_MAX_CANDIDATES

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> 'MatchSettings':
        """Read settings from the configuration loader."""
        config = config if config else ConfigLoader()
        return cls(
            confidence_threshold=config.get(
                'confidence_threshold', DEFAULT_CONFIDENCE_THRESHOLD
            ),
            fuzzy_floor=config.get('fuzzy_floor', DEFAULT_FUZZY_FLOOR),
            substring_score=config.get('substring_score', DEFAULT_SUBSTRING_SCORE),
            max_candidates=config.get('max_candidates', DEFAULT_MAX_CANDIDATES),
        )


class MatchRanker:
    """
    Ranks catalogue entries against a raw extracted name.

    Rules, first applicable wins the whole call:
    1. Empty normalized name: no candidates
    2. Manual override for the exact raw string: single candidate, score 1.0
    3. Per entry: exact (1.0), substring (0.8), or fuzzy (similarity above
       the floor); zero scores are discarded
    4. Stable sort by score descending, keep the top N

    Example:
        ranker = MatchRanker(override_store=overrides)
        candidates = ranker.rank("Apearance Descrption", catalogue)
        candidates[0].reason.label  # "Fuzzy(90%)"
    """

    def __init__(
        self,
        override_store: Optional[OverrideLookup] = None,
        scorer: Optional[LevenshteinScorer] = None,
        settings: Optional[MatchSettings] = None,
    ):
        """
        Initialize match ranker.

        Args:
            override_store: Store consulted before any scoring (optional)
            scorer: Similarity scorer (defaults to LevenshteinScorer)
            settings: Thresholds (defaults to MatchSettings.from_config())
        """
        self.logger = get_process_logger('matcher.ranker')
        self.override_store = override_store
        self.scorer = scorer if scorer else LevenshteinScorer()
        self.settings = settings if settings else MatchSettings.from_config()

    def rank(
        self,
        raw_name: str,
        catalogue: list[CatalogueEntry]
    ) -> list[MatchCandidate]:
        """
        Rank catalogue entries for one raw name.

        Args:
            raw_name: Extracted test name exactly as extracted
            catalogue: Full catalogue snapshot

        Returns:
            At most max_candidates candidates, highest score first
        """
        query_key = normalize(raw_name)
        if not query_key:
            self.logger.info(f"[MATCH] {raw_name!r}: empty after normalization")
            return []

        override = self._check_override(raw_name, catalogue)
        if override is not None:
            return [override]

        candidates = []
        for entry in catalogue:
            candidate = self._score_entry(query_key, entry)
            if candidate is not None:
                candidates.append(candidate)

        # sorted() is stable: ties keep catalogue order
        ranked = sorted(candidates, key=lambda c: c.score, reverse=True)
        ranked = ranked[:self.settings.max_candidates]

        if ranked:
            top = ranked[0]
            self.logger.debug(
                f"[MATCH] {raw_name!r}: {len(candidates)} scored, top "
                f"{top.entry.test_code or top.entry.id} "
                f"({top.score:.2f}, {top.reason.label})"
            )
        else:
            self.logger.debug(f"[MATCH] {raw_name!r}: no candidates")

        return ranked

    def is_confident(self, candidates: list[MatchCandidate]) -> bool:
        """
        Check whether the top candidate can be accepted without review.

        Args:
            candidates: Output of rank()

        Returns:
            True if the top score reaches the confidence threshold or the
            top candidate is a manual override
        """
        if not candidates:
            return False
        top = candidates[0]
        return (
            top.score >= self.settings.confidence_threshold
            or top.reason.is_manual
        )

    def _check_override(
        self,
        raw_name: str,
        catalogue: list[CatalogueEntry]
    ) -> Optional[MatchCandidate]:
        """
        Look up a manual override keyed by the unnormalized raw name.

        Returns:
            Override candidate, or None when there is no usable override
        """
        if self.override_store is None:
            return None

        record = self.override_store.lookup(raw_name)
        if record is None:
            return None

        for entry in catalogue:
            if entry.id == record.catalogue_id:
                self.logger.debug(
                    f"[OVERRIDE] {raw_name!r} -> {entry.id}"
                )
                return MatchCandidate(
                    entry=entry,
                    score=1.0,
                    reason=MatchReason.manual_override(),
                )

        self.logger.warning(
            f"[OVERRIDE] {raw_name!r} points to missing catalogue entry "
            f"{record.catalogue_id}; ignoring override"
        )
        return None

    def _score_entry(
        self,
        query_key: str,
        entry: CatalogueEntry
    ) -> Optional[MatchCandidate]:
        """
        Score one catalogue entry against a normalized query.

        Returns:
            Candidate, or None when the score is zero
        """
        entry_key = normalize(entry.display_name)
        code_key = normalize(entry.test_code)

        if query_key == entry_key or query_key == code_key:
            return MatchCandidate(entry, 1.0, MatchReason.exact())

        if query_key in entry_key or entry_key in query_key:
            return MatchCandidate(
                entry, self.settings.substring_score, MatchReason.substring()
            )

        sim = self.scorer.similarity(query_key, entry_key)
        if sim > self.settings.fuzzy_floor:
            return MatchCandidate(entry, sim, MatchReason.fuzzy(sim))

        return None


__all__ = ['MatchSettings', 'MatchRanker']
