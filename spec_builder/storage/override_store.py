# Path: spec_builder/storage/override_store.py
"""
Override Store

Persistent mapping from an exact raw extracted name to the catalogue
entry an operator chose for it. Consulted by the match ranker before any
scoring.

Keys are the raw strings exactly as extracted: "Foo" and "foo" are
different keys even though they normalize identically.
"""

from dataclasses import dataclass
from typing import Any, Optional

from spec_builder.constants import STORAGE_KEY_MANUAL_MATCH
from spec_builder.core.logger.ipo_logging import get_output_logger

from .backends import KeyValueStorage
from .json_store import JsonRecordStore


@dataclass(frozen=True)
class OverrideRecord:
    """
    Operator-confirmed binding of one raw name to one catalogue entry.

    Attributes:
        extracted_name: Raw name, case and whitespace as extracted
        catalogue_id: Chosen catalogue entry id
    """
    extracted_name: str
    catalogue_id: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'OverrideRecord':
        return cls(
            extracted_name=str(data['extractedName']),
            catalogue_id=str(data['catalogueId']),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'extractedName': self.extracted_name,
            'catalogueId': self.catalogue_id,
        }


class OverrideStore(JsonRecordStore):
    """
    Manual match store under LIMS_MANUAL_MATCH.

    At most one record per raw name; the last write wins.

    Example:
        overrides = OverrideStore(storage)
        overrides.upsert("Apearance Descrption", "cat-1")
        overrides.lookup("Apearance Descrption").catalogue_id  # "cat-1"
        overrides.lookup("apearance descrption")  # None
    """

    key = STORAGE_KEY_MANUAL_MATCH

    def __init__(self, storage: KeyValueStorage):
        super().__init__(storage)
        self.logger = get_output_logger('override_store')

    def all(self) -> list[OverrideRecord]:
        """All records in write order."""
        return [OverrideRecord.from_dict(d) for d in self._read(default=[])]

    def lookup(self, raw_name: str) -> Optional[OverrideRecord]:
        """
        Find the override for an exact raw name.

        Args:
            raw_name: Raw extracted name (not normalized)

        Returns:
            OverrideRecord or None
        """
        for record in self.all():
            if record.extracted_name == raw_name:
                return record
        return None

    def upsert(self, raw_name: str, catalogue_id: str) -> OverrideRecord:
        """
        Store an override, replacing any previous one for the same raw name.

        Args:
            raw_name: Raw extracted name (not normalized)
            catalogue_id: Chosen catalogue entry id

        Returns:
            The stored record
        """
        record = OverrideRecord(extracted_name=raw_name, catalogue_id=catalogue_id)
        records = [r for r in self.all() if r.extracted_name != raw_name]
        records.append(record)
        self._write([r.to_dict() for r in records])

        self.logger.info(f"[OVERRIDE] {raw_name!r} -> {catalogue_id}")
        return record


__all__ = ['OverrideRecord', 'OverrideStore']
