# Path: spec_builder/storage/__init__.py
"""
spec_builder Storage Package

Key-value storage port and the JSON record stores built on it.

Stores:
    - CatalogueStore: catalogue snapshot (LIMS_CATALOGUE)
    - OverrideStore: operator manual matches (LIMS_MANUAL_MATCH)
    - ProductStore: saved product specifications (LIMS_PRODUCTS)
    - AuditLog: audit trail (LIMS_AUDIT)

Example:
    from spec_builder.storage import create_storage, OverrideStore

    storage = create_storage()
    overrides = OverrideStore(storage)
"""

from typing import Optional

from spec_builder.config_loader import ConfigLoader
from spec_builder.core.logger.ipo_logging import get_output_logger

from .backends import KeyValueStorage, InMemoryStorage, DatabaseStorage
from .errors import StorageError
from .json_store import JsonRecordStore
from .audit_log import AuditEntry, AuditLog
from .override_store import OverrideRecord, OverrideStore
from .catalogue_store import CatalogueStore
from .product_store import ProductStore


def create_storage(config: Optional[ConfigLoader] = None) -> KeyValueStorage:
    """
    Build the storage backend named by SPEC_BUILDER_STORAGE_BACKEND.

    Args:
        config: Optional ConfigLoader instance

    Returns:
        InMemoryStorage for 'memory', DatabaseStorage for 'database'

    Raises:
        ValueError: If the backend name is unknown
    """
    config = config if config else ConfigLoader()
    backend = config.get('storage_backend', 'memory')

    if backend == 'memory':
        return InMemoryStorage()

    if backend == 'database':
        from spec_builder.database import initialize_database
        initialize_database()
        get_output_logger('storage').info("Using database storage backend")
        return DatabaseStorage()

    raise ValueError(
        f"Unknown storage backend: {backend!r}. "
        f"Check SPEC_BUILDER_STORAGE_BACKEND in .env"
    )


__all__ = [
    'create_storage',
    'KeyValueStorage',
    'InMemoryStorage',
    'DatabaseStorage',
    'StorageError',
    'JsonRecordStore',
    'AuditEntry',
    'AuditLog',
    'OverrideRecord',
    'OverrideStore',
    'CatalogueStore',
    'ProductStore',
]
