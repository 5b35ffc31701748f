# Path: spec_builder/database/models/__init__.py
"""
Database Models for spec_builder.

Provides the SQLAlchemy base, engine management and the key-value
record table behind the storage port.
"""

from spec_builder.database.models.base import (
    Base,
    initialize_engine,
    get_engine,
    session_scope,
    create_all_tables,
    reset_engine,
)
from spec_builder.database.models.kv_records import KeyValueRecord


__all__ = [
    'Base',
    'initialize_engine',
    'get_engine',
    'session_scope',
    'create_all_tables',
    'reset_engine',
    'KeyValueRecord',
]
