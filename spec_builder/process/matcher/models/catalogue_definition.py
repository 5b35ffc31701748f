# Path: spec_builder/process/matcher/models/catalogue_definition.py
"""
Catalogue Definition Model

Pydantic model validating catalogue records read from JSON or YAML files
before they become CatalogueEntry objects. Accepts the stored camelCase
keys and snake_case keys alike.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from spec_builder.constants import ResultType

from .catalogue_entry import CatalogueEntry


class CatalogueRecord(BaseModel):
    """One catalogue record as found in an import file."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    id: str = Field(
        min_length=1,
        description="Unique catalogue identity"
    )
    test_code: str = Field(
        default='', alias='testCode',
        description="Short human code (e.g., T-100)"
    )
    analysis_name: str = Field(
        default='', alias='analysisName',
        description="Analysis name"
    )
    component_name: str = Field(
        default='', alias='componentName',
        description="Component name"
    )
    units: str = Field(
        default='',
        description="Default units of measure"
    )
    category: str = Field(
        default='',
        description="Catalogue category"
    )
    result_type: ResultType = Field(
        default=ResultType.NUMERIC, alias='resultType',
        description="N (numeric) or T (text)"
    )
    default_grade: str = Field(
        default='', alias='defaultGrade',
        description="Grade copied onto new rows"
    )
    places: int = Field(
        default=0, ge=0,
        description="Decimal places"
    )
    spec_rule: str = Field(
        default='', alias='specRule',
        description="Rule label (e.g., MIN_MAX)"
    )

    @field_validator(
        'id', 'test_code', 'analysis_name', 'component_name', 'units',
        'category', 'default_grade', 'spec_rule',
        mode='before'
    )
    @classmethod
    def _as_text(cls, value: Any) -> Any:
        # YAML gives ints for codes like 100; null means blank
        if value is None:
            return ''
        return str(value)

    @field_validator('result_type', mode='before')
    @classmethod
    def _as_result_type(cls, value: Any) -> ResultType:
        return ResultType.parse(value)

    def to_entry(self) -> CatalogueEntry:
        """Convert to the frozen matcher entry."""
        return CatalogueEntry(
            id=self.id,
            test_code=self.test_code,
            analysis_name=self.analysis_name,
            component_name=self.component_name,
            units=self.units,
            category=self.category,
            result_type=self.result_type,
            default_grade=self.default_grade,
            places=self.places,
            spec_rule=self.spec_rule,
        )


__all__ = ['CatalogueRecord']
