# Path: spec_builder/storage/backends.py
"""
Key-Value Storage Backends

The storage port used by every record store. Stores only see
get(key) -> bytes | None and set(key, bytes); the medium behind it is
chosen at startup.

Backends:
- InMemoryStorage: dict in process memory (tests, throwaway sessions)
- DatabaseStorage: kv_records table through SQLAlchemy
"""

from abc import ABC, abstractmethod
from typing import Optional

from spec_builder.core.logger.ipo_logging import get_output_logger
from spec_builder.database.models.base import session_scope
from spec_builder.database.operations.storage_ops import StorageOperations


class KeyValueStorage(ABC):
    """
    Abstract storage port.

    Reads and writes are synchronous; failures surface to the caller.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """
        Read a value.

        Args:
            key: Storage key

        Returns:
            Stored bytes, or None when absent
        """

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """
        Write a value, replacing any previous one.

        Args:
            key: Storage key
            value: Bytes to store
        """


class InMemoryStorage(KeyValueStorage):
    """
    Dict-backed storage.

    Example:
        storage = InMemoryStorage()
        storage.set('LIMS_AUDIT', b'[]')
    """

    def __init__(self, initial: Optional[dict[str, bytes]] = None):
        self._data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)


class DatabaseStorage(KeyValueStorage):
    """
    Storage backed by the kv_records table.

    The database engine must be initialized first
    (see spec_builder.database.initialize_database).
    """

    def __init__(self):
        self.logger = get_output_logger('storage.database')

    def get(self, key: str) -> Optional[bytes]:
        with session_scope() as session:
            return StorageOperations.get(session, key)

    def set(self, key: str, value: bytes) -> None:
        with session_scope() as session:
            StorageOperations.put(session, key, value)
        self.logger.debug(f"Stored {key} ({len(value)} bytes)")


__all__ = [
    'KeyValueStorage',
    'InMemoryStorage',
    'DatabaseStorage',
]
