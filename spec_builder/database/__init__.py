# Path: spec_builder/database/__init__.py
"""
spec_builder Database Module

Durable backing for the key-value storage port.

This module provides:
- SQLAlchemy engine and session management
- The kv_records table
- Read and write operations on stored values

Example:
    from spec_builder.database import initialize_database, session_scope
    from spec_builder.database import StorageOperations

    initialize_database('sqlite:////var/lib/spec_builder/spec_builder.db')

    with session_scope() as session:
        StorageOperations.put(session, 'LIMS_CATALOGUE', b'[]')
"""

from typing import Optional

from spec_builder.database.models.base import (
    Base,
    initialize_engine,
    get_engine,
    session_scope,
    create_all_tables,
    reset_engine,
    get_database_type,
)
from spec_builder.database.models.kv_records import KeyValueRecord
from spec_builder.database.operations.storage_ops import StorageOperations


def initialize_database(db_url: Optional[str] = None) -> None:
    """
    Initialize the spec_builder database.

    Args:
        db_url: Optional database URL (':memory:' for testing).
                If None, uses configuration.
    """
    initialize_engine(db_url)
    create_all_tables()


__all__ = [
    'initialize_database',
    'initialize_engine',
    'get_engine',
    'session_scope',
    'create_all_tables',
    'reset_engine',
    'get_database_type',
    'Base',
    'KeyValueRecord',
    'StorageOperations',
]
