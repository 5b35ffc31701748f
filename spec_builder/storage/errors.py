# Path: spec_builder/storage/errors.py
"""
Storage Errors

Raised when a stored document cannot be read back.
Backend failures (database errors) propagate unchanged.
"""


class StorageError(Exception):
    """Stored value exists but cannot be decoded."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"{key}: {message}")


__all__ = ['StorageError']
