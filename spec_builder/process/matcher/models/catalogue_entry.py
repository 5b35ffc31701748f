# Path: spec_builder/process/matcher/models/catalogue_entry.py
"""
Catalogue Entry Model

Canonical test definition from the controlled catalogue.
Every resolved specification row points at exactly one of these.
"""

from dataclasses import dataclass
from typing import Any

from spec_builder.constants import ResultType


@dataclass(frozen=True)
class CatalogueEntry:
    """
    A canonical test definition.

    Attributes:
        id: Opaque unique identity (never reused within a session)
        test_code: Short human code (e.g., "T-100"), treated as a stable label
        analysis_name: Analysis name (e.g., "Appearance")
        component_name: Component name (e.g., "Description")
        units: Default units of measure
        category: Catalogue category
        result_type: Numeric or Text
        default_grade: Grade copied onto new specification rows
        places: Decimal places (non-negative)
        spec_rule: Free-form rule label (e.g., "MIN_MAX")
    """
    id: str
    test_code: str = ''
    analysis_name: str = ''
    component_name: str = ''
    units: str = ''
    category: str = ''
    result_type: ResultType = ResultType.NUMERIC
    default_grade: str = ''
    places: int = 0
    spec_rule: str = ''

    def __post_init__(self):
        if self.places < 0:
            raise ValueError(
                f"Catalogue entry {self.id}: places must be non-negative, got {self.places}"
            )

    @property
    def display_name(self) -> str:
        """Analysis and component joined the way they are matched."""
        return f"{self.analysis_name} {self.component_name}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'CatalogueEntry':
        """
        Build an entry from a stored catalogue record.

        Args:
            data: Record with camelCase keys as stored

        Returns:
            CatalogueEntry
        """
        try:
            places = int(data.get('places') or 0)
        except (TypeError, ValueError):
            places = 0

        return cls(
            id=str(data['id']),
            test_code=str(data.get('testCode') or ''),
            analysis_name=str(data.get('analysisName') or ''),
            component_name=str(data.get('componentName') or ''),
            units=str(data.get('units') or ''),
            category=str(data.get('category') or ''),
            result_type=ResultType.parse(data.get('resultType')),
            default_grade=str(data.get('defaultGrade') or ''),
            places=max(places, 0),
            spec_rule=str(data.get('specRule') or ''),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to stored record form."""
        return {
            'id': self.id,
            'testCode': self.test_code,
            'analysisName': self.analysis_name,
            'componentName': self.component_name,
            'units': self.units,
            'category': self.category,
            'resultType': self.result_type.value,
            'defaultGrade': self.default_grade,
            'places': self.places,
            'specRule': self.spec_rule,
        }


__all__ = ['CatalogueEntry']
