"""
Structured audit logging for record operations.

Outputs one JSON object per line so log shippers can index the events.
Only outcomes are logged; reads that return nothing new are logged at
debug level.

Logged events:
- record.listed
- record.added
- record.removed
- record.remove_failed

Usage:
    from datalayer.logger import AuditLogger

    audit = AuditLogger(service_name="datalayer")
    audit.log_removed(record_id=2, value="Goku")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Structured audit logger
_audit_logger = logging.getLogger("datalayer.audit")
_audit_logger.setLevel(logging.INFO)

# Default handler outputs JSON to stdout
if not _audit_logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    _audit_logger.addHandler(handler)

# Audit lines go only to the audit handler, never to diagnostic handlers
_audit_logger.propagate = False


class AuditLogger:
    """
    Structured logger for record events.

    Each entry carries the service name, the event type and the record id
    it concerns, plus event-specific fields.
    """

    def __init__(
        self,
        service_name: str = "datalayer",
        extra_labels: Optional[Dict[str, str]] = None,
        enabled: bool = True,
    ):
        self.service_name = service_name
        self.extra_labels = extra_labels or {}
        self.enabled = enabled
        self._logger = _audit_logger

    def _emit(
        self,
        event: str,
        level: str = "info",
        record_id: Optional[int] = None,
        **extra_fields: Any,
    ) -> None:
        if not self.enabled:
            return

        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "event": event,
            "service": self.service_name,
        }
        if record_id is not None:
            entry["record_id"] = record_id
        entry.update(extra_fields)

        if self.extra_labels:
            entry["labels"] = self.extra_labels

        log_line = json.dumps(entry, default=str)

        if level == "error":
            self._logger.error(log_line)
        elif level == "warn":
            self._logger.warning(log_line)
        elif level == "debug":
            self._logger.debug(log_line)
        else:
            self._logger.info(log_line)

    def log_listed(self, count: int) -> None:
        """Log a listing of records."""
        self._emit("record.listed", level="debug", count=count)

    def log_added(self, record_id: int, value: str) -> None:
        """Log a new record."""
        self._emit("record.added", record_id=record_id, value=value)

    def log_removed(self, record_id: int, value: str) -> None:
        """Log a removal."""
        self._emit("record.removed", record_id=record_id, value=value)

    def log_remove_failed(self, record_id: Any, reason: str, error_type: str) -> None:
        """Log a removal that was refused by validation or the backend."""
        self._emit(
            "record.remove_failed",
            level="warn",
            record_id=record_id if type(record_id) is int else None,
            reason=reason,
            error_type=error_type,
        )
