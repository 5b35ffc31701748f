# Path: spec_builder/storage/json_store.py
"""
JSON Record Store

Base class for stores that keep one JSON document under one storage key.
"""

import json
from typing import Any

from .backends import KeyValueStorage
from .errors import StorageError


class JsonRecordStore:
    """
    Maps one storage key to a JSON document.

    Subclasses set `key` and build their own API on top of
    _read() and _write().
    """

    key: str = ''

    def __init__(self, storage: KeyValueStorage):
        """
        Initialize store.

        Args:
            storage: Storage port to read from and write to
        """
        self.storage = storage

    def _read(self, default: Any = None) -> Any:
        """
        Read and decode the document.

        Args:
            default: Returned when nothing is stored yet

        Returns:
            Decoded JSON document

        Raises:
            StorageError: If the stored bytes are not valid JSON
        """
        raw = self.storage.get(self.key)
        if raw is None:
            return default
        try:
            return json.loads(raw.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageError(self.key, f"stored document is not valid JSON: {e}") from e

    def _write(self, document: Any) -> None:
        """Encode and store the document."""
        self.storage.set(self.key, json.dumps(document).encode('utf-8'))


__all__ = ['JsonRecordStore']
