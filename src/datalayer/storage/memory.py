"""
In-memory storage backend.

The reference backend: records live in an insertion-ordered mapping of id
to value. Ids come from a counter owned by the instance and are never
reused, so removing a record does not renumber the others.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Dict, Iterable, List, Optional

from datalayer.errors import RecordNotFoundError, validate_record_id, validate_value
from datalayer.storage.base import BaseStorage, Record, StorageType, register_backend

logger = logging.getLogger(__name__)


@register_backend(StorageType.MEMORY)
class MemoryStorage(BaseStorage):
    """
    Dictionary-backed storage implementing reader, writer and remover.

    Every operation holds one exclusive lock for its whole duration, so a
    backend shared by several consumers gives each call a consistent view.
    Read operations return fresh lists, never the internal mapping.
    """

    def __init__(self, initial: Optional[Iterable[str]] = None):
        super().__init__(initial=initial)
        self._lock = RLock()
        self._records: Dict[int, str] = {}
        self._next_id = 0
        for value in self._seed:
            self.add(value)
        logger.debug(f"MemoryStorage initialized with {len(self._records)} records")

    def entries(self) -> List[Record]:
        with self._lock:
            return [Record(id=k, value=v) for k, v in self._records.items()]

    def list(self) -> List[str]:
        with self._lock:
            return list(self._records.values())

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def get(self, record_id: int) -> str:
        validate_record_id(record_id)
        with self._lock:
            if record_id not in self._records:
                raise RecordNotFoundError(record_id)
            return self._records[record_id]

    def add(self, value: str) -> int:
        validate_value(value)
        with self._lock:
            record_id = self._next_id
            self._records[record_id] = value
            self._next_id += 1
        logger.debug(f"Added record {record_id}")
        return record_id

    def remove(self, record_id: int) -> str:
        validate_record_id(record_id)
        with self._lock:
            if record_id not in self._records:
                raise RecordNotFoundError(record_id)
            value = self._records.pop(record_id)
        logger.debug(f"Removed record {record_id}")
        return value
