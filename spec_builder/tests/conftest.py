# Path: spec_builder/tests/conftest.py
"""
Pytest Configuration and Shared Fixtures for spec_builder

Provides common test fixtures used across all test modules.
"""

import json
import os
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from spec_builder.constants import ResultType
from spec_builder.process.matcher.engine.ranker import MatchRanker, MatchSettings
from spec_builder.process.matcher.models.catalogue_entry import CatalogueEntry
from spec_builder.process.matcher.models.extracted_test import ExtractedTest
from spec_builder.process.resolution.workflow import ResolutionWorkflow
from spec_builder.storage.audit_log import AuditLog
from spec_builder.storage.backends import InMemoryStorage
from spec_builder.storage.override_store import OverrideStore


# ==============================================================================
# ENVIRONMENT FIXTURES
# ==============================================================================

@pytest.fixture
def mock_env_vars():
    """Provide mock environment variables for testing."""
    env_vars = {
        'SPEC_BUILDER_ENVIRONMENT': 'test',
        'SPEC_BUILDER_DEBUG': 'true',
        'SPEC_BUILDER_LOG_LEVEL': 'DEBUG',
        'SPEC_BUILDER_LOG_CONSOLE': 'false',

        # Storage
        'SPEC_BUILDER_STORAGE_BACKEND': 'Memory',
        'SPEC_BUILDER_DB_HOST': 'localhost',
        'SPEC_BUILDER_DB_PORT': '5432',
        'SPEC_BUILDER_DB_NAME': 'spec_builder_test',
        'SPEC_BUILDER_DB_USER': 'test_user',
        'SPEC_BUILDER_DB_PASSWORD': 'test_pass',

        # Matching
        'SPEC_BUILDER_CONFIDENCE_THRESHOLD': '0.9',
        'SPEC_BUILDER_FUZZY_FLOOR': '0.4',
        'SPEC_BUILDER_MAX_CANDIDATES': '3',

        # Rows
        'SPEC_BUILDER_ORDER_START': '10',
        'SPEC_BUILDER_ORDER_STEP': '10',
        'SPEC_BUILDER_AUDIT_LOG_LIMIT': '50',
    }

    with patch.dict(os.environ, env_vars, clear=False):
        os.environ.pop('SPEC_BUILDER_DB_URL', None)
        os.environ.pop('SPEC_BUILDER_LOG_DIR', None)
        yield env_vars


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def reset_singletons():
    """Reset any singleton instances between tests."""
    from spec_builder.config_loader import ConfigLoader
    ConfigLoader._instance = None
    ConfigLoader._initialized = False

    yield

    ConfigLoader._instance = None
    ConfigLoader._initialized = False


# ==============================================================================
# SAMPLE DATA FIXTURES
# ==============================================================================

@pytest.fixture
def sample_catalogue_records():
    """Provide catalogue records as stored (camelCase)."""
    return [
        {
            'id': 'cat-1', 'testCode': 'T-100',
            'analysisName': 'Appearance', 'componentName': 'Description',
            'units': '', 'category': 'Physical', 'resultType': 'T',
            'defaultGrade': 'USP', 'places': 0, 'specRule': 'TEXT_MATCH',
        },
        {
            'id': 'cat-2', 'testCode': 'T-200',
            'analysisName': 'pH', 'componentName': 'Value',
            'units': '', 'category': 'Chemical', 'resultType': 'N',
            'defaultGrade': 'USP', 'places': 1, 'specRule': '',
        },
        {
            'id': 'cat-3', 'testCode': 'T-300',
            'analysisName': 'Water', 'componentName': 'Content',
            'units': '%', 'category': 'Chemical', 'resultType': 'N',
            'defaultGrade': 'EP', 'places': 2, 'specRule': 'NMT',
        },
        {
            'id': 'cat-4', 'testCode': 'T-400',
            'analysisName': 'Assay', 'componentName': 'Purity',
            'units': '%', 'category': 'Chemical', 'resultType': 'N',
            'defaultGrade': 'EP', 'places': 1, 'specRule': 'MIN_MAX',
        },
    ]


@pytest.fixture
def sample_catalogue(sample_catalogue_records):
    """Provide the sample catalogue as CatalogueEntry objects."""
    return [CatalogueEntry.from_dict(r) for r in sample_catalogue_records]


@pytest.fixture
def appearance_entry():
    """Catalogue entry used by the appearance scenarios."""
    return CatalogueEntry(
        id='cat-1',
        test_code='T-100',
        analysis_name='Appearance',
        component_name='Description',
        result_type=ResultType.TEXT,
        spec_rule='TEXT_MATCH',
    )


@pytest.fixture
def sample_extraction():
    """Provide an extraction envelope as produced by document extraction."""
    return {
        'productName': 'Sodium Chloride',
        'productCode': 'NACL-01',
        'effectiveDate': '2024-03-01',
        'extractedTests': [
            {'name': 'Appearance Description', 'text': 'White crystalline powder',
             'min': None, 'max': None, 'unit': None},
            {'name': 'pH', 'text': None, 'min': 5, 'max': 7, 'unit': None},
            {'name': 'Water Content %', 'text': None, 'min': None, 'max': 0.5,
             'unit': '%'},
        ],
    }


@pytest.fixture
def sample_tests(sample_extraction):
    """Provide the sample extraction as ExtractedTest objects."""
    return [ExtractedTest.from_dict(t) for t in sample_extraction['extractedTests']]


# ==============================================================================
# FILE CREATION FIXTURES
# ==============================================================================

@pytest.fixture
def catalogue_file(temp_dir, sample_catalogue_records):
    """Create a catalogue JSON file in the test directory."""
    path = temp_dir / 'catalogue.json'
    with open(path, 'w') as f:
        json.dump(sample_catalogue_records, f, indent=2)
    return path


@pytest.fixture
def extraction_file(temp_dir, sample_extraction):
    """Create an extraction JSON file in the test directory."""
    path = temp_dir / 'extraction.json'
    with open(path, 'w') as f:
        json.dump(sample_extraction, f, indent=2)
    return path


# ==============================================================================
# COMPONENT FIXTURES
# ==============================================================================

@pytest.fixture
def mock_config():
    """Create a mock ConfigLoader carrying the default settings."""
    config = MagicMock()
    config.get.side_effect = lambda key, default=None: {
        'environment': 'test',
        'debug': True,
        'storage_backend': 'memory',
        'confidence_threshold': 0.9,
        'fuzzy_floor': 0.4,
        'substring_score': 0.8,
        'max_candidates': 3,
        'order_start': 10,
        'order_step': 10,
        'default_rule': 'MIN_MAX',
        'audit_log_limit': 1000,
        'search_limit': 20,
        'browse_limit': 50,
    }.get(key, default)
    return config


@pytest.fixture
def storage():
    """Provide an empty in-memory storage backend."""
    return InMemoryStorage()


@pytest.fixture
def audit_log(storage):
    """Provide an audit log on the in-memory storage."""
    return AuditLog(storage, limit=1000)


@pytest.fixture
def override_store(storage):
    """Provide an override store on the in-memory storage."""
    return OverrideStore(storage)


@pytest.fixture
def ranker(override_store):
    """Provide a ranker with default thresholds."""
    return MatchRanker(override_store=override_store, settings=MatchSettings())


@pytest.fixture
def workflow(ranker, override_store, audit_log, mock_config):
    """Provide a workflow wired to the in-memory stores."""
    return ResolutionWorkflow(
        ranker, override_store, audit_log=audit_log, config=mock_config
    )


# ==============================================================================
# UTILITY FIXTURES
# ==============================================================================

@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a logging setup test."""
    import logging

    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    yield root_logger

    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
