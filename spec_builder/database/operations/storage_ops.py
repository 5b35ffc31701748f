# Path: spec_builder/database/operations/storage_ops.py
"""
Storage Operations

Read and write operations for KeyValueRecord rows.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from spec_builder.database.models.kv_records import KeyValueRecord


logger = logging.getLogger('output.database.storage_ops')


class StorageOperations:
    """
    Operations for KeyValueRecord rows.

    Provides static methods; all methods require a session to be passed in.

    Example:
        with session_scope() as session:
            StorageOperations.put(session, 'LIMS_AUDIT', b'[]')
            value = StorageOperations.get(session, 'LIMS_AUDIT')
    """

    @staticmethod
    def get(session: Session, key: str) -> Optional[bytes]:
        """
        Read the value stored under key.

        Args:
            session: Database session
            key: Storage key

        Returns:
            Stored bytes or None
        """
        record = session.get(KeyValueRecord, key)
        if record is None:
            return None
        return bytes(record.value)

    @staticmethod
    def put(session: Session, key: str, value: bytes) -> KeyValueRecord:
        """
        Insert or replace the value stored under key.

        Args:
            session: Database session
            key: Storage key
            value: Bytes to store

        Returns:
            The stored record
        """
        record = session.get(KeyValueRecord, key)
        if record is None:
            record = KeyValueRecord(key=key, value=value)
            session.add(record)
            logger.debug(f"Created record {key} ({len(value)} bytes)")
        else:
            record.value = value
            logger.debug(f"Updated record {key} ({len(value)} bytes)")
        session.flush()
        return record


__all__ = ['StorageOperations']
