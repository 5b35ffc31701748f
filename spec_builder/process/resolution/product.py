# Path: spec_builder/process/resolution/product.py
"""
Product Specification Model

A product with its specification rows, as saved by the product store.
"""

import time
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .spec_row import SpecificationRow


def _today() -> str:
    return date.today().isoformat()


@dataclass
class ProductSpecification:
    """
    Product header plus specification rows.

    Attributes:
        name: Product name
        code: Product code
        effective_date: Effective date (YYYY-MM-DD)
        specs: Rows in batch order (display order is by row.order)
        last_modified: Epoch milliseconds of the last save
        id: Product identity
    """
    name: str = ''
    code: str = ''
    effective_date: str = field(default_factory=_today)
    specs: list[SpecificationRow] = field(default_factory=list)
    last_modified: int = field(default_factory=lambda: int(time.time() * 1000))
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def sorted_specs(self) -> list[SpecificationRow]:
        """Rows by display order; equal orders keep batch order."""
        return sorted(self.specs, key=lambda row: row.order)

    def unresolved_rows(self) -> list[SpecificationRow]:
        """Rows still waiting for a catalogue entry, in display order."""
        return [row for row in self.sorted_specs() if row.is_unresolved]

    @property
    def is_fully_resolved(self) -> bool:
        return not any(row.is_unresolved for row in self.specs)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'ProductSpecification':
        """Build from a stored product record."""
        return cls(
            id=str(data.get('id') or uuid.uuid4()),
            name=data.get('name') or '',
            code=data.get('code') or '',
            effective_date=data.get('effectiveDate') or _today(),
            specs=[SpecificationRow.from_dict(s) for s in data.get('specs') or []],
            last_modified=int(data.get('lastModified') or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to stored product record."""
        return {
            'id': self.id,
            'name': self.name,
            'code': self.code,
            'effectiveDate': self.effective_date,
            'specs': [s.to_dict() for s in self.specs],
            'lastModified': self.last_modified,
        }


__all__ = ['ProductSpecification']
