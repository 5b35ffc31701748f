# Path: spec_builder/process/resolution/__init__.py
"""
Resolution

Turns ranked matches into specification rows, queueing the tests that
need an operator decision.

Components:
    - SpecRowAssembler: Builds resolved and unresolved rows
    - ResolutionWorkflow: Auto-accept, queue, confirm, suspend, resume
    - search_catalogue: Free catalogue search for manual choice
    - SpecificationRow, ProductSpecification: Output records
"""

from .spec_row import SpecificationRow
from .product import ProductSpecification
from .row_assembler import SpecRowAssembler, format_limit
from .catalogue_search import search_catalogue
from .errors import ResolutionError, WorkflowStateError, UnknownCatalogueEntryError
from .workflow import (
    ResolutionWorkflow,
    WorkflowStatus,
    WorkflowState,
    PendingItem,
    Idle,
    Scoring,
    Resolving,
    Suspended,
    Done,
)

__all__ = [
    'SpecificationRow',
    'ProductSpecification',
    'SpecRowAssembler',
    'format_limit',
    'search_catalogue',
    'ResolutionError',
    'WorkflowStateError',
    'UnknownCatalogueEntryError',
    'ResolutionWorkflow',
    'WorkflowStatus',
    'WorkflowState',
    'PendingItem',
    'Idle',
    'Scoring',
    'Resolving',
    'Suspended',
    'Done',
]
