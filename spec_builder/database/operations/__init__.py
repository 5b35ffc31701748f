# Path: spec_builder/database/operations/__init__.py
"""
Database Operations for spec_builder.

Provides read and write operations for key-value records.
"""

from spec_builder.database.operations.storage_ops import StorageOperations


__all__ = [
    'StorageOperations',
]
