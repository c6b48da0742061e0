"""
Record consumers.

Consumers depend on capability contracts only. They receive their backends
at construction, keep them for their lifetime and forward every operation
to them. Cross-cutting behavior (input validation, audit logging, span
events) is applied here identically whichever backend is wired in.

Failures raised by a backend are either propagated unchanged or, in the
``try_*`` variants, translated into a result object. They are never
dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from datalayer._otel_helpers import add_span_event
from datalayer.errors import (
    CapabilityViolationError,
    InvalidInputError,
    RecordNotFoundError,
    validate_record_id,
    validate_value,
)
from datalayer.logger import AuditLogger
from datalayer.storage.base import Record
from datalayer.storage.contracts import RecordReader, RecordRemover, RecordWriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemovalOutcome:
    """Caller-facing result of ``RecordService.try_delete``."""
    record_id: Any
    removed: bool
    value: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "recordId": self.record_id,
            "removed": self.removed,
            "value": self.value,
            "error": self.error,
            "errorType": self.error_type,
        }


@dataclass(frozen=True)
class RecordSummary:
    """Read-only overview of a backend's records."""
    count: int
    values: List[str] = field(default_factory=list)


class RecordService:
    """
    Business operations over records.

    Requires a reader and a remover; a writer is optional and only needed
    by ``register``. The same backend may be passed for all three.
    """

    def __init__(
        self,
        reader: RecordReader,
        remover: RecordRemover,
        writer: Optional[RecordWriter] = None,
        audit: Optional[AuditLogger] = None,
    ):
        self._reader = reader
        self._remover = remover
        self._writer = writer
        self._audit = audit or AuditLogger()

    @property
    def reader(self) -> RecordReader:
        return self._reader

    @property
    def remover(self) -> RecordRemover:
        return self._remover

    @property
    def writer(self) -> Optional[RecordWriter]:
        return self._writer

    def list_records(self) -> List[str]:
        """Return record values in insertion order."""
        values = self._reader.list()
        self._audit.log_listed(count=len(values))
        add_span_event("datalayer.record.listed", {"record.count": len(values)})
        return values

    def entries(self) -> List[Record]:
        """Return records with their ids."""
        return self._reader.entries()

    def get_record(self, record_id: int) -> str:
        validate_record_id(record_id)
        return self._reader.get(record_id)

    def register(self, value: str) -> int:
        """
        Store a new record and return its id.

        Raises:
            CapabilityViolationError: if no writer was wired in
            InvalidInputError: if value is not a non-empty string
        """
        if self._writer is None:
            raise CapabilityViolationError("unwired writer", ["RecordWriter.add"])
        validate_value(value)
        record_id = self._writer.add(value)
        self._audit.log_added(record_id=record_id, value=value)
        add_span_event("datalayer.record.added", {"record.id": record_id})
        return record_id

    def delete(self, record_id: int) -> str:
        """
        Remove a record and return its value.

        Raises:
            InvalidInputError: if record_id is not a non-negative int
            RecordNotFoundError: if no record has that id
        """
        try:
            validate_record_id(record_id)
            value = self._remover.remove(record_id)
        except (InvalidInputError, RecordNotFoundError) as e:
            self._audit.log_remove_failed(
                record_id=record_id, reason=str(e), error_type=type(e).__name__
            )
            add_span_event(
                "datalayer.record.remove_failed",
                {"record.id": str(record_id), "error.type": type(e).__name__},
            )
            raise

        self._audit.log_removed(record_id=record_id, value=value)
        add_span_event("datalayer.record.removed", {"record.id": record_id})
        return value

    def try_delete(self, record_id: int) -> RemovalOutcome:
        """Remove a record, reporting not-found and invalid ids as a result."""
        try:
            value = self.delete(record_id)
        except (InvalidInputError, RecordNotFoundError) as e:
            logger.debug(f"Removal of {record_id!r} refused: {e}")
            return RemovalOutcome(
                record_id=record_id,
                removed=False,
                error=str(e),
                error_type=type(e).__name__,
            )
        return RemovalOutcome(record_id=record_id, removed=True, value=value)


class RecordReport:
    """Read-only consumer: needs nothing beyond ``RecordReader``."""

    def __init__(self, reader: RecordReader):
        self._reader = reader

    @property
    def reader(self) -> RecordReader:
        return self._reader

    def summary(self) -> RecordSummary:
        values = self._reader.list()
        return RecordSummary(count=len(values), values=values)

    def contains(self, value: str) -> bool:
        return value in self._reader.list()


class DirectRecordService:
    """Forwards to its backends without adding any behavior."""

    def __init__(self, reader: RecordReader, remover: RecordRemover):
        self._reader = reader
        self._remover = remover

    def list(self) -> List[str]:
        return self._reader.list()

    def remove(self, record_id: int) -> str:
        return self._remover.remove(record_id)
