# Path: spec_builder/database/models/kv_records.py
"""
Key-Value Record Model

Backs the storage port with a single table of opaque byte values.
Catalogue, products, manual matches and the audit log each live under
their own key as a JSON document.
"""

from datetime import datetime

from sqlalchemy import Column, String, DateTime, LargeBinary

from spec_builder.database.models.base import Base


class KeyValueRecord(Base):
    """
    One stored value.

    Example:
        record = KeyValueRecord(key='LIMS_CATALOGUE', value=b'[]')
    """
    __tablename__ = 'kv_records'

    key = Column(
        String(255),
        primary_key=True,
        comment="Storage key (e.g., LIMS_CATALOGUE)"
    )
    value = Column(
        LargeBinary,
        nullable=False,
        comment="Opaque stored bytes"
    )

    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        comment="Record creation timestamp"
    )
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        comment="Record last update timestamp"
    )

    def __repr__(self) -> str:
        size = len(self.value) if self.value is not None else 0
        return f"<KeyValueRecord(key='{self.key}', bytes={size})>"


__all__ = ['KeyValueRecord']
