# Path: spec_builder/process/resolution/workflow.py
"""
Resolution Workflow

Queue-driven state machine turning a batch of extracted tests into
specification rows. Confident matches are accepted automatically; the
rest wait for the operator, one item at a time, in extraction order.

States:
    Idle -> Scoring -> Resolving(pending) <-> Suspended(pending) -> Done
                   \\-> Done (nothing pending)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Union

from spec_builder.config_loader import (
    ConfigLoader,
    DEFAULT_ORDER_START,
    DEFAULT_ORDER_STEP,
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_BROWSE_LIMIT,
)
from spec_builder.constants import AuditAction
from spec_builder.core.logger.ipo_logging import get_process_logger
from spec_builder.process.matcher.engine.ranker import MatchRanker
from spec_builder.process.matcher.models.catalogue_entry import CatalogueEntry
from spec_builder.process.matcher.models.extracted_test import ExtractedTest
from spec_builder.process.matcher.models.match_candidate import MatchCandidate

from .catalogue_search import search_catalogue
from .errors import WorkflowStateError, UnknownCatalogueEntryError
from .product import ProductSpecification
from .row_assembler import SpecRowAssembler
from .spec_row import SpecificationRow


class OverrideWriter(Protocol):
    """Write side of the override store (see storage.OverrideStore)."""

    def upsert(self, raw_name: str, catalogue_id: str): ...


class AuditSink(Protocol):
    """Anything that records audit events (see storage.AuditLog)."""

    def record(self, action, details: str): ...


# ==============================================================================
# WORKFLOW STATES
# ==============================================================================

class WorkflowStatus(str, Enum):
    """Tag of the current workflow state."""
    IDLE = 'idle'
    SCORING = 'scoring'
    RESOLVING = 'resolving'
    SUSPENDED = 'suspended'
    DONE = 'done'


@dataclass(frozen=True)
class PendingItem:
    """
    An extracted test waiting for the operator.

    Attributes:
        test: The extracted test
        row_id: Id of the unresolved row standing in for it
        candidates: Ranked candidates computed when it was queued
    """
    test: ExtractedTest
    row_id: str
    candidates: tuple[MatchCandidate, ...] = ()

    @property
    def raw_name(self) -> str:
        return self.test.name


@dataclass(frozen=True)
class Idle:
    status = WorkflowStatus.IDLE


@dataclass(frozen=True)
class Scoring:
    batch_size: int
    status = WorkflowStatus.SCORING


@dataclass(frozen=True)
class Resolving:
    """Operator is resolving the head of the queue."""
    pending: tuple[PendingItem, ...]
    status = WorkflowStatus.RESOLVING

    @property
    def current(self) -> PendingItem:
        return self.pending[0]


@dataclass(frozen=True)
class Suspended:
    """Operator closed resolution; the queue is kept as is."""
    pending: tuple[PendingItem, ...]
    status = WorkflowStatus.SUSPENDED


@dataclass(frozen=True)
class Done:
    status = WorkflowStatus.DONE


WorkflowState = Union[Idle, Scoring, Resolving, Suspended, Done]


# ==============================================================================
# WORKFLOW
# ==============================================================================

class ResolutionWorkflow:
    """
    Resolves a batch of extracted tests against the catalogue.

    Every extracted test yields exactly one row. Rows for tests that need
    the operator are created unresolved straight away and replaced in
    place (same id, same order) when the operator confirms an entry.

    Example:
        workflow = ResolutionWorkflow(ranker, override_store, audit_log=audit)
        rows = workflow.start(extracted_tests, catalogue)

        while workflow.state.status == WorkflowStatus.RESOLVING:
            item = workflow.current
            choice = ask_operator(item.raw_name, item.candidates)
            workflow.confirm(choice.id)
    """

    def __init__(
        self,
        ranker: MatchRanker,
        override_store: OverrideWriter,
        assembler: Optional[SpecRowAssembler] = None,
        audit_log: Optional[AuditSink] = None,
        config: Optional[ConfigLoader] = None,
    ):
        """
        Initialize resolution workflow.

        Args:
            ranker: Match ranker (reads the same override store)
            override_store: Store receiving confirmed manual matches
            assembler: Row assembler (defaults to configured default rule)
            audit_log: Optional audit sink for manual match events
            config: Optional ConfigLoader instance
        """
        self.logger = get_process_logger('resolution.workflow')
        config = config if config else ConfigLoader()

        self.ranker = ranker
        self.override_store = override_store
        self.assembler = assembler if assembler else SpecRowAssembler(
            config.get('default_rule')
        )
        self.audit_log = audit_log

        self.order_start = config.get('order_start', DEFAULT_ORDER_START)
        self.order_step = config.get('order_step', DEFAULT_ORDER_STEP)
        self.search_limit = config.get('search_limit', DEFAULT_SEARCH_LIMIT)
        self.browse_limit = config.get('browse_limit', DEFAULT_BROWSE_LIMIT)

        self._state: WorkflowState = Idle()
        self._rows: list[SpecificationRow] = []
        self._catalogue: list[CatalogueEntry] = []

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def rows(self) -> list[SpecificationRow]:
        """Rows in original batch order."""
        return list(self._rows)

    @property
    def current(self) -> Optional[PendingItem]:
        """The single item open for manual choice, if any."""
        if isinstance(self._state, Resolving):
            return self._state.current
        return None

    @property
    def current_candidates(self) -> list[MatchCandidate]:
        item = self.current
        return list(item.candidates) if item else []

    @property
    def pending(self) -> list[PendingItem]:
        """Queued items, head first (empty unless resolving or suspended)."""
        if isinstance(self._state, (Resolving, Suspended)):
            return list(self._state.pending)
        return []

    @property
    def pending_count(self) -> int:
        return len(self.pending)

    # ------------------------------------------------------------------
    # Batch arrival
    # ------------------------------------------------------------------

    def start(
        self,
        batch: list[ExtractedTest],
        catalogue: list[CatalogueEntry]
    ) -> list[SpecificationRow]:
        """
        Score a batch and build one row per extracted test.

        Args:
            batch: Extracted tests in document order
            catalogue: Full catalogue snapshot

        Returns:
            Rows in batch order (unresolved rows for queued tests)

        Raises:
            WorkflowStateError: If a previous batch still has pending items
        """
        self._require_not_pending('start a batch')

        self._catalogue = list(catalogue)
        self._rows = []
        self._state = Scoring(batch_size=len(batch))

        self.logger.info(
            f"Scoring {len(batch)} extracted tests against "
            f"{len(self._catalogue)} catalogue entries"
        )

        pending = []
        order = self.order_start
        try:
            for test in batch:
                item = self._score_item(test, order)
                if item is not None:
                    pending.append(item)
                order += self.order_step
        except Exception:
            self._rows = []
            self._state = Idle()
            self.logger.error("Batch scoring aborted; workflow reset to idle")
            raise

        self._enter_queue(tuple(pending))

        self.logger.info(
            f"Batch scored: {len(self._rows) - len(pending)}/{len(self._rows)} "
            f"auto-resolved, {len(pending)} pending"
        )
        return self.rows

    def resume(
        self,
        product: ProductSpecification,
        catalogue: list[CatalogueEntry]
    ) -> list[PendingItem]:
        """
        Reopen resolution for a saved product.

        Queues the product's unresolved rows in display order, rebuilding
        each extracted test from the row's original name and stored limits.

        Args:
            product: Saved product specification
            catalogue: Full catalogue snapshot

        Returns:
            The pending queue
        """
        self._require_not_pending('resume a product')

        self._catalogue = list(catalogue)
        self._rows = list(product.specs)

        pending = []
        for row in product.unresolved_rows():
            test = ExtractedTest(
                name=row.original_extracted_name or row.component,
                min=row.min,
                max=row.max,
                text=row.text_spec or None,
                unit=row.units or None,
            )
            candidates = self._rank_safely(test.name)
            pending.append(PendingItem(test, row.id, tuple(candidates)))

        self._enter_queue(tuple(pending))
        self.logger.info(
            f"Resumed product {product.code or product.id}: {len(pending)} pending"
        )
        return list(pending)

    # ------------------------------------------------------------------
    # Operator events
    # ------------------------------------------------------------------

    def confirm(self, catalogue_id: str) -> SpecificationRow:
        """
        Bind the current item to a catalogue entry.

        Stores the manual match, replaces the item's unresolved row with a
        resolved one (same id and order) and advances the queue.
        The audit event is written last; an audit failure is logged and
        does not undo the match.

        Args:
            catalogue_id: Chosen catalogue entry id

        Returns:
            The resolved row

        Raises:
            WorkflowStateError: If no item is open
            UnknownCatalogueEntryError: If the id is not in the catalogue
        """
        if not isinstance(self._state, Resolving):
            raise WorkflowStateError('confirm', self._state.status.value)

        entry = self._find_entry(catalogue_id)
        if entry is None:
            raise UnknownCatalogueEntryError(catalogue_id)

        item = self._state.current
        raw_name = item.raw_name

        self.override_store.upsert(raw_name, entry.id)
        resolved = self._replace_row(item, entry)
        self._enter_queue(self._state.pending[1:])

        self.logger.info(
            f"[CONFIRM] {raw_name!r} -> {entry.test_code or entry.id} "
            f"(order {resolved.order})"
        )

        if self.audit_log is not None:
            try:
                self.audit_log.record(
                    AuditAction.MANUAL_MATCH, f'Mapped "{raw_name}" to {entry.id}'
                )
            except Exception:
                # Match and row are already committed
                self.logger.exception(f"[AUDIT FAIL] manual match for {raw_name!r}")

        return resolved

    def skip(self) -> None:
        """Close manual resolution; pending rows stay unresolved."""
        self._suspend('skip')

    def cancel(self) -> None:
        """Close manual resolution; pending rows stay unresolved."""
        self._suspend('cancel')

    def reopen(self) -> Optional[PendingItem]:
        """
        Re-present the suspended queue, unchanged.

        Returns:
            The item now open for manual choice

        Raises:
            WorkflowStateError: If the workflow is not suspended
        """
        if isinstance(self._state, Resolving):
            return self._state.current
        if not isinstance(self._state, Suspended):
            raise WorkflowStateError('reopen', self._state.status.value)

        self._state = Resolving(self._state.pending)
        self.logger.info(f"Reopened resolution: {len(self._state.pending)} pending")
        return self._state.current

    def search_catalogue(self, term: str) -> list[CatalogueEntry]:
        """Search the workflow's catalogue snapshot for the operator."""
        return search_catalogue(
            self._catalogue, term,
            limit=self.search_limit,
            browse_limit=self.browse_limit,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _rank_safely(self, raw_name: str) -> list[MatchCandidate]:
        """Rank one name; a failure leaves the item for the operator."""
        try:
            return self.ranker.rank(raw_name, self._catalogue)
        except Exception:
            self.logger.exception(f"[MATCH FAIL] {raw_name!r}: ranking failed")
            return []

    def _score_item(self, test: ExtractedTest, order: int) -> Optional[PendingItem]:
        """
        Build the row for one extracted test.

        Returns:
            The pending item if the test needs the operator, else None
        """
        candidates = self._rank_safely(test.name)

        if self.ranker.is_confident(candidates):
            top = candidates[0]
            try:
                row = self.assembler.build_resolved(test, top.entry, order)
            except Exception:
                self.logger.exception(
                    f"[ASSEMBLY FAIL] {test.name!r}: could not bind to {top.entry.id}"
                )
            else:
                self._rows.append(row)
                self.logger.info(
                    f"[AUTO] {test.name!r} -> {top.entry.test_code or top.entry.id} "
                    f"({top.reason.label})"
                )
                return None

        row = self.assembler.build_unresolved(test, order)
        self._rows.append(row)
        self.logger.info(
            f"[QUEUED] {test.name!r}: {len(candidates)} candidates, needs operator"
        )
        return PendingItem(test, row.id, tuple(candidates))

    def _enter_queue(self, pending: tuple[PendingItem, ...]) -> None:
        if pending:
            self._state = Resolving(pending)
        else:
            self._state = Done()

    def _suspend(self, event: str) -> None:
        if isinstance(self._state, Suspended):
            return
        if not isinstance(self._state, Resolving):
            raise WorkflowStateError(event, self._state.status.value)

        self._state = Suspended(self._state.pending)
        self.logger.info(
            f"Resolution suspended ({event}): {len(self._state.pending)} left unresolved"
        )

    def _require_not_pending(self, event: str) -> None:
        if isinstance(self._state, (Resolving, Suspended, Scoring)):
            raise WorkflowStateError(event, self._state.status.value)

    def _find_entry(self, catalogue_id: str) -> Optional[CatalogueEntry]:
        for entry in self._catalogue:
            if entry.id == catalogue_id:
                return entry
        return None

    def _replace_row(self, item: PendingItem, entry: CatalogueEntry) -> SpecificationRow:
        for i, row in enumerate(self._rows):
            if row.id == item.row_id:
                resolved = self.assembler.rebind(row, item.test, entry)
                self._rows[i] = resolved
                return resolved

        # Row was removed by the operator; the binding still counts
        self.logger.warning(
            f"Row {item.row_id} for {item.raw_name!r} no longer present; appending"
        )
        order = max((r.order for r in self._rows), default=0) + self.order_step
        resolved = self.assembler.build_resolved(item.test, entry, order)
        self._rows.append(resolved)
        return resolved


__all__ = [
    'WorkflowStatus',
    'PendingItem',
    'Idle',
    'Scoring',
    'Resolving',
    'Suspended',
    'Done',
    'WorkflowState',
    'ResolutionWorkflow',
]
