"""
Composition root.

The only module that chooses concrete backends. It builds a backend from
configuration, checks it against the contracts each consumer requires,
then constructs the consumers around it. A backend that cannot satisfy a
consumer is rejected here with ``CapabilityViolationError``, before any
operation runs.

Example:
    from datalayer.wiring import build_application

    app = build_application()
    app.records.delete(2)
    app.report.summary()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from datalayer.config import DataLayerConfig, get_config
from datalayer.logger import AuditLogger
from datalayer.services import RecordReport, RecordService
from datalayer.storage.base import BaseStorage, StorageType, get_storage
from datalayer.storage.contracts import (
    RecordReader,
    RecordRemover,
    RecordWriter,
    ensure_implements,
    satisfies,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Application:
    """The wired object graph: one shared backend and its consumers."""
    storage: Any
    records: RecordService
    report: RecordReport


def build_storage(config: Optional[DataLayerConfig] = None) -> BaseStorage:
    """Construct the configured backend, seeded from config."""
    config = config or get_config()
    return get_storage(StorageType(config.storage_type), initial=config.seed_records)


def build_record_service(
    storage: Any,
    audit: Optional[AuditLogger] = None,
) -> RecordService:
    """
    Wire a ``RecordService`` to a backend.

    The writer is wired only when the backend provides one.

    Raises:
        CapabilityViolationError: if the backend cannot read and remove
    """
    ensure_implements(storage, RecordReader, RecordRemover)
    writer = storage if satisfies(storage, RecordWriter) else None
    return RecordService(reader=storage, remover=storage, writer=writer, audit=audit)


def build_report(storage: Any) -> RecordReport:
    """Wire a ``RecordReport``; any ``RecordReader`` is accepted."""
    ensure_implements(storage, RecordReader)
    return RecordReport(reader=storage)


def build_application(
    config: Optional[DataLayerConfig] = None,
    storage: Optional[Any] = None,
) -> Application:
    """
    Assemble the application graph.

    Args:
        config: Configuration to use (global config if omitted)
        storage: Prebuilt backend to wire instead of the configured one

    Returns:
        Application with both consumers sharing one backend

    Raises:
        CapabilityViolationError: if the backend cannot serve every consumer
    """
    config = config or get_config()
    if storage is None:
        storage = build_storage(config)

    audit = AuditLogger(service_name=config.service_name, enabled=config.audit_enabled)
    records = build_record_service(storage, audit=audit)
    report = build_report(storage)

    logger.info(f"Wired {type(storage).__name__} into RecordService and RecordReport")
    return Application(storage=storage, records=records, report=report)
