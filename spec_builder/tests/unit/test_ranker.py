# Path: spec_builder/tests/unit/test_ranker.py
"""
Unit tests for MatchRanker.

Tests ranking rules, override precedence, thresholds and candidate
ordering.
"""

import logging

import pytest

from spec_builder.process.matcher.engine.ranker import MatchRanker, MatchSettings
from spec_builder.process.matcher.models import CatalogueEntry, MatchReasonKind


def _entry(entry_id, analysis, component, code=''):
    return CatalogueEntry(
        id=entry_id, test_code=code, analysis_name=analysis, component_name=component
    )


class TestRankingRules:
    """Tests for exact, substring and fuzzy scoring."""

    def test_exact_match_on_display_name(self, ranker, sample_catalogue):
        """Name equal to analysis + component scores 1.0."""
        candidates = ranker.rank('appearance description', sample_catalogue)

        assert candidates[0].entry.id == 'cat-1'
        assert candidates[0].score == 1.0
        assert candidates[0].reason.kind == MatchReasonKind.EXACT
        assert candidates[0].reason.label == 'Exact Match'

    def test_exact_match_ignores_punctuation(self, ranker, sample_catalogue):
        """Symbols do not prevent an exact match."""
        candidates = ranker.rank('Water Content %', sample_catalogue)

        assert candidates[0].entry.id == 'cat-3'
        assert candidates[0].reason.kind == MatchReasonKind.EXACT

    def test_exact_match_on_test_code(self, ranker, sample_catalogue):
        """Name equal to the test code scores 1.0."""
        candidates = ranker.rank('T-400', sample_catalogue)

        assert candidates[0].entry.id == 'cat-4'
        assert candidates[0].score == 1.0

    def test_substring_match(self, ranker, sample_catalogue):
        """Query contained in an entry scores 0.8."""
        candidates = ranker.rank('pH', sample_catalogue)

        assert len(candidates) == 1
        assert candidates[0].entry.id == 'cat-2'
        assert candidates[0].score == 0.8
        assert candidates[0].reason.label == 'Substring Match'

    def test_entry_contained_in_query(self, ranker, sample_catalogue):
        """Entry key contained in the query also scores 0.8."""
        candidates = ranker.rank('Assay Purity (HPLC)', sample_catalogue)

        assert candidates[0].entry.id == 'cat-4'
        assert candidates[0].reason.kind == MatchReasonKind.SUBSTRING

    def test_fuzzy_match_two_typos(self, ranker, appearance_entry):
        """Two typos against a 21 letter key score about 0.905."""
        candidates = ranker.rank('Apearance Descrption', [appearance_entry])

        assert len(candidates) == 1
        assert candidates[0].reason.kind == MatchReasonKind.FUZZY
        assert candidates[0].score == pytest.approx(1 - 2 / 21)
        assert candidates[0].reason.label == 'Fuzzy(90%)'

    def test_fuzzy_match_below_threshold(self, ranker, appearance_entry):
        """A looser variant is kept but not confident."""
        candidates = ranker.rank('Apearance Descrption Test', [appearance_entry])

        assert len(candidates) == 1
        assert candidates[0].reason.kind == MatchReasonKind.FUZZY
        assert 0.4 < candidates[0].score < 0.9
        assert not ranker.is_confident(candidates)

    def test_fuzzy_floor_is_exclusive(self, override_store):
        """Similarity equal to the floor is dropped."""
        # 'ABCDE' vs 'ABXYZ' -> 3 edits over 5 letters = 0.4
        ranker = MatchRanker(override_store, settings=MatchSettings(fuzzy_floor=0.4))
        entry = _entry('x', 'AB', 'XYZ')

        assert ranker.rank('ABCDE', [entry]) == []

    def test_no_candidates(self, ranker, sample_catalogue):
        """Unrelated name returns no candidates."""
        assert ranker.rank('Zzz Qqq', sample_catalogue) == []

    @pytest.mark.parametrize('raw_name', ['', '   ', '--', '%'])
    def test_empty_normalized_name(self, ranker, sample_catalogue, raw_name):
        """Names with no letters or digits return no candidates."""
        assert ranker.rank(raw_name, sample_catalogue) == []

    def test_empty_catalogue(self, ranker):
        """Nothing to rank against returns no candidates."""
        assert ranker.rank('pH', []) == []


class TestRankingOrder:
    """Tests for sorting and truncation."""

    def test_at_most_three_candidates(self, ranker):
        """Only the top three candidates are returned."""
        catalogue = [_entry(f'lead-{i}', 'Lead', f'Content {i}') for i in range(1, 6)]

        candidates = ranker.rank('Lead', catalogue)

        assert len(candidates) == 3

    def test_ties_keep_catalogue_order(self, ranker):
        """Equal scores keep catalogue order."""
        catalogue = [_entry(f'lead-{i}', 'Lead', f'Content {i}') for i in range(1, 6)]

        candidates = ranker.rank('Lead', catalogue)

        assert [c.entry.id for c in candidates] == ['lead-1', 'lead-2', 'lead-3']

    def test_sorted_descending(self, ranker):
        """Higher scores come first regardless of catalogue order."""
        catalogue = [
            _entry('sub', 'Heavy Metals', 'Lead'),
            _entry('exact', 'Lead', ''),
        ]

        candidates = ranker.rank('Lead', catalogue)

        assert [c.entry.id for c in candidates] == ['exact', 'sub']
        scores = [c.score for c in candidates]
        assert scores == sorted(scores, reverse=True)

    def test_max_candidates_setting(self, override_store):
        """max_candidates caps the result length."""
        ranker = MatchRanker(override_store, settings=MatchSettings(max_candidates=1))
        catalogue = [_entry(f'lead-{i}', 'Lead', f'Content {i}') for i in range(1, 4)]

        assert len(ranker.rank('Lead', catalogue)) == 1

    def test_idempotent(self, ranker, sample_catalogue):
        """Same inputs give the same result."""
        first = ranker.rank('Water', sample_catalogue)
        second = ranker.rank('Water', sample_catalogue)

        assert first == second


class TestOverrides:
    """Tests for manual override precedence."""

    def test_override_wins(self, ranker, override_store, sample_catalogue):
        """An override is the only candidate, with score 1.0."""
        override_store.upsert('pH', 'cat-4')

        candidates = ranker.rank('pH', sample_catalogue)

        assert len(candidates) == 1
        assert candidates[0].entry.id == 'cat-4'
        assert candidates[0].score == 1.0
        assert candidates[0].reason.label == 'Manual Override'

    def test_override_beats_exact(self, ranker, override_store, sample_catalogue):
        """An override outranks an exact match on another entry."""
        override_store.upsert('Water Content', 'cat-4')

        candidates = ranker.rank('Water Content', sample_catalogue)

        assert [c.entry.id for c in candidates] == ['cat-4']

    def test_override_is_case_sensitive(self, ranker, override_store, sample_catalogue):
        """Overrides match the raw string exactly."""
        override_store.upsert('pH', 'cat-4')

        candidates = ranker.rank('PH', sample_catalogue)

        assert candidates[0].entry.id == 'cat-2'
        assert candidates[0].reason.kind == MatchReasonKind.SUBSTRING

    def test_override_superseded(self, ranker, override_store, sample_catalogue):
        """A later upsert for the same name replaces the earlier one."""
        override_store.upsert('pH', 'cat-4')
        override_store.upsert('pH', 'cat-3')

        assert ranker.rank('pH', sample_catalogue)[0].entry.id == 'cat-3'

    def test_dangling_override_ignored(self, ranker, override_store, sample_catalogue, caplog):
        """Override to a missing entry falls back to scoring and warns."""
        override_store.upsert('pH', 'cat-999')

        with caplog.at_level(logging.WARNING, logger='process.matcher.ranker'):
            candidates = ranker.rank('pH', sample_catalogue)

        assert candidates[0].entry.id == 'cat-2'
        assert candidates[0].reason.kind == MatchReasonKind.SUBSTRING
        assert 'cat-999' in caplog.text

    def test_ranker_without_store(self, sample_catalogue):
        """A ranker without an override store still scores."""
        ranker = MatchRanker(settings=MatchSettings())

        assert ranker.rank('pH', sample_catalogue)[0].entry.id == 'cat-2'


class TestConfidence:
    """Tests for is_confident()."""

    def test_no_candidates_not_confident(self, ranker):
        """An empty result is never confident."""
        assert not ranker.is_confident([])

    def test_exact_is_confident(self, ranker, sample_catalogue):
        """Exact matches are accepted."""
        assert ranker.is_confident(ranker.rank('Assay Purity', sample_catalogue))

    def test_substring_not_confident(self, ranker, sample_catalogue):
        """Substring matches need review."""
        assert not ranker.is_confident(ranker.rank('pH', sample_catalogue))

    def test_threshold_is_inclusive(self, ranker, appearance_entry):
        """A top score at or above 0.9 is accepted."""
        candidates = ranker.rank('Apearance Descrption', [appearance_entry])

        assert ranker.is_confident(candidates)

    def test_stricter_threshold(self, override_store, appearance_entry):
        """Raising the threshold sends the same match to review."""
        ranker = MatchRanker(
            override_store, settings=MatchSettings(confidence_threshold=0.95)
        )
        candidates = ranker.rank('Apearance Descrption', [appearance_entry])

        assert not ranker.is_confident(candidates)

    def test_override_always_confident(self, override_store, sample_catalogue):
        """Manual overrides are accepted whatever the threshold."""
        ranker = MatchRanker(
            override_store, settings=MatchSettings(confidence_threshold=1.5)
        )
        override_store.upsert('pH', 'cat-2')

        assert ranker.is_confident(ranker.rank('pH', sample_catalogue))


class TestMatchSettings:
    """Tests for MatchSettings."""

    def test_defaults(self):
        """Defaults match the documented thresholds."""
        settings = MatchSettings()

        assert settings.confidence_threshold == 0.9
        assert settings.fuzzy_floor == 0.4
        assert settings.substring_score == 0.8
        assert settings.max_candidates == 3

    def test_from_config(self, mock_config):
        """Settings are read from the config loader."""
        settings = MatchSettings.from_config(mock_config)

        assert settings == MatchSettings()
