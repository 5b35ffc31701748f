# Path: spec_builder/storage/catalogue_store.py
"""
Catalogue Store

Snapshot store for the controlled test catalogue (LIMS_CATALOGUE).
Catalogue editing itself happens elsewhere; this store only loads and
saves whole snapshots.
"""

from pathlib import Path
from typing import Optional

from spec_builder.constants import STORAGE_KEY_CATALOGUE, AuditAction
from spec_builder.core.logger.ipo_logging import get_input_logger
from spec_builder.process.matcher.engine.catalogue_loader import CatalogueLoader
from spec_builder.process.matcher.models.catalogue_entry import CatalogueEntry

from .audit_log import AuditLog
from .backends import KeyValueStorage
from .json_store import JsonRecordStore


class CatalogueStore(JsonRecordStore):
    """
    Catalogue snapshot store.

    Example:
        store = CatalogueStore(storage, audit_log=audit)
        store.save(entries)
        catalogue = store.load()
    """

    key = STORAGE_KEY_CATALOGUE

    def __init__(self, storage: KeyValueStorage, audit_log: Optional[AuditLog] = None):
        super().__init__(storage)
        self.audit_log = audit_log
        self.logger = get_input_logger('catalogue_store')

    def load(self) -> list[CatalogueEntry]:
        """Load the full catalogue in stored order."""
        entries = [CatalogueEntry.from_dict(d) for d in self._read(default=[])]
        self.logger.debug(f"Loaded {len(entries)} catalogue entries")
        return entries

    def get(self, catalogue_id: str) -> Optional[CatalogueEntry]:
        """Find one entry by id."""
        for entry in self.load():
            if entry.id == catalogue_id:
                return entry
        return None

    def save(self, entries: list[CatalogueEntry]) -> None:
        """
        Replace the stored catalogue.

        Raises:
            ValueError: If two entries share an id
        """
        seen = set()
        for entry in entries:
            if entry.id in seen:
                raise ValueError(f"Duplicate catalogue id: {entry.id}")
            seen.add(entry.id)

        self._write([e.to_dict() for e in entries])
        self.logger.info(f"Saved {len(entries)} catalogue entries")

        if self.audit_log is not None:
            self.audit_log.record(
                AuditAction.CATALOGUE_UPDATE, f"Saved {len(entries)} entries"
            )

    def import_file(self, path: Path) -> list[CatalogueEntry]:
        """
        Load catalogue records from a JSON or YAML file and save them as the
        snapshot.

        Args:
            path: Catalogue file (.json, .yaml or .yml)

        Returns:
            The imported entries
        """
        entries = CatalogueLoader().load_file(path)
        self.save(entries)
        return entries


__all__ = ['CatalogueStore']
