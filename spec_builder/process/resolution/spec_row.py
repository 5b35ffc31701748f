# Path: spec_builder/process/resolution/spec_row.py
"""
Specification Row Model

Output unit of the resolution workflow: one row per extracted test,
resolved to a catalogue entry or flagged as unresolved.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Optional


def _new_row_id() -> str:
    return str(uuid.uuid4())


def _limit_text(value: Any) -> str:
    """Stored limit as text: numbers keep 0 and drop a trailing .0."""
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class SpecificationRow:
    """
    One test line of a product specification.

    Extracted limits (min/max/text_spec) and operator overrides
    (override_min/override_max/override_text) are stored separately and
    never collapsed into each other.

    Attributes:
        order: Display/sort sequence (conventionally spaced by 10)
        catalogue_id: Resolved catalogue entry id; None while unresolved
        analysis: Analysis name, or "UNRESOLVED"
        component: Component name, or the raw extracted name
        test_code: Catalogue test code, or "???"
        description: Row description
        result_type: "N" or "T"
        rule: Spec rule label
        min: Extracted lower limit as text ('' when absent)
        max: Extracted upper limit as text ('' when absent)
        text_spec: Extracted text specification
        override_min: Operator override of min
        override_max: Operator override of max
        override_text: Operator override of text_spec
        units: Units of measure
        category: Catalogue category
        grade: Grade
        lit_ref: Literature reference entered by the operator
        is_unresolved: True while no catalogue entry is bound
        original_extracted_name: Raw name as extracted, kept for re-resolution
        id: Row identity, independent of the catalogue id
    """
    order: int
    catalogue_id: Optional[str] = None
    analysis: str = ''
    component: str = ''
    test_code: str = ''
    description: str = ''
    result_type: str = 'N'
    rule: str = ''
    min: str = ''
    max: str = ''
    text_spec: str = ''
    override_min: str = ''
    override_max: str = ''
    override_text: str = ''
    units: str = ''
    category: str = ''
    grade: str = ''
    lit_ref: str = ''
    is_unresolved: bool = False
    original_extracted_name: Optional[str] = None
    id: str = field(default_factory=_new_row_id)

    def __post_init__(self):
        if self.is_unresolved != (self.catalogue_id is None):
            raise ValueError(
                f"Row {self.id}: is_unresolved={self.is_unresolved} "
                f"but catalogue_id={self.catalogue_id!r}"
            )

    @property
    def effective_min(self) -> str:
        """Operator override if set, else the extracted value."""
        return self.override_min or self.min

    @property
    def effective_max(self) -> str:
        """Operator override if set, else the extracted value."""
        return self.override_max or self.max

    @property
    def effective_text(self) -> str:
        """Operator override if set, else the extracted value."""
        return self.override_text or self.text_spec

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'SpecificationRow':
        """Build from a stored row record (camelCase keys)."""
        catalogue_id = data.get('catalogueId')
        return cls(
            id=str(data.get('id') or _new_row_id()),
            order=int(data.get('order') or 0),
            catalogue_id=None if catalogue_id is None else str(catalogue_id),
            analysis=data.get('analysis') or '',
            component=data.get('component') or '',
            test_code=data.get('testCode') or '',
            description=data.get('description') or '',
            result_type=data.get('resultType') or 'N',
            rule=data.get('rule') or '',
            min=_limit_text(data.get('min')),
            max=_limit_text(data.get('max')),
            text_spec=_limit_text(data.get('textSpec')),
            override_min=_limit_text(data.get('overrideMin')),
            override_max=_limit_text(data.get('overrideMax')),
            override_text=_limit_text(data.get('overrideText')),
            units=data.get('units') or '',
            category=data.get('category') or '',
            grade=data.get('grade') or '',
            lit_ref=data.get('litRef') or '',
            is_unresolved=catalogue_id is None,
            original_extracted_name=data.get('originalExtractedName'),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to stored row record."""
        return {
            'id': self.id,
            'order': self.order,
            'catalogueId': self.catalogue_id,
            'analysis': self.analysis,
            'component': self.component,
            'testCode': self.test_code,
            'description': self.description,
            'resultType': self.result_type,
            'rule': self.rule,
            'min': self.min,
            'max': self.max,
            'textSpec': self.text_spec,
            'overrideMin': self.override_min,
            'overrideMax': self.override_max,
            'overrideText': self.override_text,
            'units': self.units,
            'category': self.category,
            'grade': self.grade,
            'litRef': self.lit_ref,
            'isUnresolved': self.is_unresolved,
            'originalExtractedName': self.original_extracted_name,
        }


__all__ = ['SpecificationRow']
