# Path: spec_builder/process/resolution/row_assembler.py
"""
Specification Row Assembler

Builds specification rows by merging catalogue defaults (units, rule,
grade) with extracted values (limits, unit override), or placeholder
values for tests that have no catalogue entry yet.
"""

from typing import Any, Optional

from spec_builder.constants import (
    ResultType,
    UNRESOLVED_ANALYSIS,
    UNRESOLVED_TEST_CODE,
    DEFAULT_SPEC_RULE,
)
from spec_builder.process.matcher.models.catalogue_entry import CatalogueEntry
from spec_builder.process.matcher.models.extracted_test import ExtractedTest

from .spec_row import SpecificationRow


def format_limit(value: Any) -> str:
    """
    Render an extracted limit as row text.

    Integral floats drop the trailing ".0" (90.0 -> "90"); absent limits
    become ''. Zero is rendered as "0", not as absent.

    Args:
        value: Number, string or None

    Returns:
        Limit text
    """
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class SpecRowAssembler:
    """
    Assembles SpecificationRow records.

    Example:
        assembler = SpecRowAssembler()
        row = assembler.build_resolved(extracted, entry, order=10)
        row.rule  # entry.spec_rule or "MIN_MAX"
    """

    def __init__(self, default_rule: Optional[str] = None):
        """
        Initialize assembler.

        Args:
            default_rule: Rule used when an entry has no spec rule
        """
        self.default_rule = default_rule or DEFAULT_SPEC_RULE

    def build_resolved(
        self,
        extracted: ExtractedTest,
        entry: CatalogueEntry,
        order: int
    ) -> SpecificationRow:
        """
        Build a row bound to a catalogue entry.

        Args:
            extracted: Extracted test supplying limits and unit
            entry: Matched catalogue entry supplying display fields
            order: Row order

        Returns:
            Resolved SpecificationRow
        """
        return SpecificationRow(
            order=order,
            catalogue_id=entry.id,
            analysis=entry.analysis_name,
            component=entry.component_name,
            test_code=entry.test_code,
            description=entry.analysis_name,
            result_type=entry.result_type.value,
            rule=entry.spec_rule or self.default_rule,
            min=format_limit(extracted.min),
            max=format_limit(extracted.max),
            text_spec=extracted.text or '',
            units=extracted.unit or entry.units,
            category=entry.category,
            grade=entry.default_grade,
            is_unresolved=False,
            original_extracted_name=extracted.name,
        )

    def build_unresolved(
        self,
        extracted: ExtractedTest,
        order: int
    ) -> SpecificationRow:
        """
        Build a placeholder row flagged as unresolved.

        Args:
            extracted: Extracted test
            order: Row order

        Returns:
            Unresolved SpecificationRow
        """
        return SpecificationRow(
            order=order,
            catalogue_id=None,
            analysis=UNRESOLVED_ANALYSIS,
            component=extracted.name,
            test_code=UNRESOLVED_TEST_CODE,
            description=extracted.name,
            result_type=ResultType.NUMERIC.value,
            rule='',
            min=format_limit(extracted.min),
            max=format_limit(extracted.max),
            text_spec=extracted.text or '',
            units=extracted.unit or '',
            is_unresolved=True,
            original_extracted_name=extracted.name,
        )

    def rebind(
        self,
        row: SpecificationRow,
        extracted: ExtractedTest,
        entry: CatalogueEntry
    ) -> SpecificationRow:
        """
        Point an existing row at a catalogue entry.

        Keeps the row's id, order, operator overrides and literature
        reference; everything else is rebuilt as in build_resolved().

        Args:
            row: Existing row (resolved or not)
            extracted: Extracted test the row came from
            entry: Newly chosen catalogue entry

        Returns:
            New resolved row with the same identity
        """
        resolved = self.build_resolved(extracted, entry, row.order)
        resolved.id = row.id
        resolved.override_min = row.override_min
        resolved.override_max = row.override_max
        resolved.override_text = row.override_text
        resolved.lit_ref = row.lit_ref
        return resolved


__all__ = ['format_limit', 'SpecRowAssembler']
