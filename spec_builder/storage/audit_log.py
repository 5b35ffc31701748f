# Path: spec_builder/storage/audit_log.py
"""
Audit Log

Append-only trail of operator-visible actions (manual matches,
catalogue saves, product saves). Newest entries first, capped in size.
"""

import time
import uuid
from dataclasses import dataclass
from typing import Any, Optional

from spec_builder.config_loader import ConfigLoader, DEFAULT_AUDIT_LOG_LIMIT
from spec_builder.constants import STORAGE_KEY_AUDIT, AuditAction
from spec_builder.core.logger.ipo_logging import get_output_logger

from .backends import KeyValueStorage
from .json_store import JsonRecordStore


@dataclass(frozen=True)
class AuditEntry:
    """
    One audit trail entry.

    Attributes:
        id: Unique entry id
        timestamp: Epoch milliseconds
        action: Action code (e.g., MANUAL_MATCH)
        details: Human-readable detail
    """
    id: str
    timestamp: int
    action: str
    details: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'AuditEntry':
        return cls(
            id=str(data['id']),
            timestamp=int(data.get('timestamp') or 0),
            action=str(data.get('action') or ''),
            details=str(data.get('details') or ''),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'timestamp': self.timestamp,
            'action': self.action,
            'details': self.details,
        }


class AuditLog(JsonRecordStore):
    """
    Audit trail stored under LIMS_AUDIT.

    Example:
        audit = AuditLog(storage)
        audit.record(AuditAction.MANUAL_MATCH, 'Mapped "pH" to cat-7')
        audit.entries()[0].action  # "MANUAL_MATCH"
    """

    key = STORAGE_KEY_AUDIT

    def __init__(self, storage: KeyValueStorage, limit: Optional[int] = None):
        """
        Initialize audit log.

        Args:
            storage: Storage port
            limit: Maximum entries kept (defaults to SPEC_BUILDER_AUDIT_LOG_LIMIT)
        """
        super().__init__(storage)
        if limit is None:
            limit = ConfigLoader().get('audit_log_limit', DEFAULT_AUDIT_LOG_LIMIT)
        self.limit = limit
        self.logger = get_output_logger('audit_log')

    def record(self, action, details: str) -> AuditEntry:
        """
        Prepend an entry, dropping the oldest beyond the limit.

        Args:
            action: AuditAction or plain action string
            details: Human-readable detail

        Returns:
            The new entry
        """
        action_code = action.value if isinstance(action, AuditAction) else str(action)
        entry = AuditEntry(
            id=uuid.uuid4().hex,
            timestamp=int(time.time() * 1000),
            action=action_code,
            details=details,
        )

        logs = self._read(default=[])
        logs.insert(0, entry.to_dict())
        del logs[self.limit:]
        self._write(logs)

        self.logger.info(f"[AUDIT] {action_code}: {details}")
        return entry

    def entries(self) -> list[AuditEntry]:
        """All entries, newest first."""
        return [AuditEntry.from_dict(d) for d in self._read(default=[])]


__all__ = ['AuditEntry', 'AuditLog']
