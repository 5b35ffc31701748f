# Path: spec_builder/tests/integration/test_resolution_flow.py
"""
Integration tests for matching and resolution across batches.

Tests that verify:
1. Operator choices are remembered for the literal extracted name
2. Later batches auto-resolve through the stored choice
3. Case variants of the name fall back to fuzzy scoring
4. The same flow works on the database backend
"""

import pytest

from spec_builder.database import reset_engine, initialize_database
from spec_builder.process.matcher import MatchRanker, MatchSettings, MatchReasonKind
from spec_builder.process.matcher.models import ExtractedTest
from spec_builder.process.resolution import (
    ProductSpecification,
    ResolutionWorkflow,
    WorkflowStatus,
)
from spec_builder.storage import (
    AuditLog,
    CatalogueStore,
    DatabaseStorage,
    InMemoryStorage,
    OverrideStore,
    ProductStore,
)


@pytest.fixture(autouse=True)
def reset_db_state():
    """Reset database state before and after each test."""
    reset_engine()
    yield
    reset_engine()


def _build(storage, threshold=0.9):
    overrides = OverrideStore(storage)
    audit = AuditLog(storage, limit=100)
    ranker = MatchRanker(overrides, settings=MatchSettings(confidence_threshold=threshold))
    return overrides, audit, ranker


def _workflow(ranker, overrides, audit, mock_config):
    return ResolutionWorkflow(ranker, overrides, audit_log=audit, config=mock_config)


class TestTypoOverrideScenario:
    """Two-typo name resolved by hand, then remembered."""

    @pytest.mark.parametrize('backend', ['memory', 'database'])
    def test_manual_choice_remembered(self, backend, mock_config, appearance_entry):
        """Confirmed fuzzy match becomes an override for the literal name only."""
        if backend == 'database':
            initialize_database(':memory:')
            storage = DatabaseStorage()
        else:
            storage = InMemoryStorage()

        # 0.905 would auto-accept at 0.9, so review is forced with 0.95
        overrides, audit, ranker = _build(storage, threshold=0.95)
        catalogue = [appearance_entry]

        # Batch 1: fuzzy candidate, queued
        first = _workflow(ranker, overrides, audit, mock_config)
        first.start([ExtractedTest('Apearance Descrption', text='White powder')], catalogue)

        assert first.state.status == WorkflowStatus.RESOLVING
        candidate = first.current_candidates[0]
        assert candidate.reason.kind == MatchReasonKind.FUZZY
        assert candidate.reason.label == 'Fuzzy(90%)'

        first.confirm('cat-1')
        assert first.state.status == WorkflowStatus.DONE
        assert audit.entries()[0].details == 'Mapped "Apearance Descrption" to cat-1'

        # Batch 2: same literal string, resolved by override
        second = _workflow(ranker, overrides, audit, mock_config)
        rows = second.start([ExtractedTest('Apearance Descrption')], catalogue)

        assert second.state.status == WorkflowStatus.DONE
        assert rows[0].catalogue_id == 'cat-1'
        assert ranker.rank('Apearance Descrption', catalogue)[0].reason.is_manual

        # Batch 3: different case, no override, fuzzy again
        third = _workflow(ranker, overrides, audit, mock_config)
        third.start([ExtractedTest('apearance descrption')], catalogue)

        assert third.state.status == WorkflowStatus.RESOLVING
        assert third.current_candidates[0].reason.kind == MatchReasonKind.FUZZY

    def test_default_threshold_auto_accepts_two_typos(self, mock_config, appearance_entry):
        """At the default threshold the two-typo name is accepted as fuzzy."""
        storage = InMemoryStorage()
        overrides, audit, ranker = _build(storage)
        workflow = _workflow(ranker, overrides, audit, mock_config)

        rows = workflow.start([ExtractedTest('Apearance Descrption')], [appearance_entry])

        assert rows[0].catalogue_id == 'cat-1'
        assert overrides.all() == []

    def test_looser_variant_queued_at_default(self, mock_config, appearance_entry):
        """A variant below 0.9 is queued and remembered once confirmed."""
        storage = InMemoryStorage()
        overrides, audit, ranker = _build(storage)
        raw = 'Apearance Descrption Test'

        workflow = _workflow(ranker, overrides, audit, mock_config)
        workflow.start([ExtractedTest(raw)], [appearance_entry])
        assert 0.4 < workflow.current_candidates[0].score < 0.9

        workflow.confirm('cat-1')
        again = _workflow(ranker, overrides, audit, mock_config)
        again.start([ExtractedTest(raw)], [appearance_entry])

        assert again.state.status == WorkflowStatus.DONE


class TestEmptyCatalogue:
    """Resolution with nothing to match against."""

    def test_all_rows_unresolved(self, mock_config, sample_tests):
        """N tests give N unresolved rows and the session can be closed."""
        storage = InMemoryStorage()
        overrides, audit, ranker = _build(storage)
        workflow = _workflow(ranker, overrides, audit, mock_config)

        rows = workflow.start(sample_tests, CatalogueStore(storage).load())
        workflow.cancel()

        assert len(rows) == len(sample_tests)
        assert all(r.is_unresolved and r.catalogue_id is None for r in workflow.rows)
        assert workflow.state.status == WorkflowStatus.SUSPENDED


class TestSaveAndResume:
    """Suspended products can be finished later."""

    def test_resume_from_store(self, mock_config, sample_catalogue, sample_tests):
        """A saved product with open rows is completed in a later session."""
        storage = InMemoryStorage()
        overrides, audit, ranker = _build(storage)
        CatalogueStore(storage).save(sample_catalogue)
        products = ProductStore(storage, audit_log=audit)

        workflow = _workflow(ranker, overrides, audit, mock_config)
        workflow.start(sample_tests, CatalogueStore(storage).load())
        workflow.skip()
        product = products.save(ProductSpecification(code='NACL-01', specs=workflow.rows))

        saved = products.get(product.id)
        later = _workflow(ranker, overrides, audit, mock_config)
        later.resume(saved, CatalogueStore(storage).load())
        later.confirm('cat-2')
        saved.specs = later.rows
        products.save(saved)

        reloaded = products.get(product.id)
        assert reloaded.is_fully_resolved
        assert [r.order for r in reloaded.sorted_specs()] == [10, 20, 30]
        assert [e.action for e in audit.entries()][:2] == ['SAVE_PRODUCT', 'MANUAL_MATCH']
