"""
Slot-based storage backend.

Records live in a list indexed by id. Removing a record empties its slot
instead of shifting the others, which keeps ids stable without a mapping.
Observable behavior matches ``MemoryStorage``; only the representation
differs.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Iterable, List, Optional

from datalayer.errors import RecordNotFoundError, validate_record_id, validate_value
from datalayer.storage.base import BaseStorage, Record, StorageType, register_backend

logger = logging.getLogger(__name__)


@register_backend(StorageType.SLOT)
class SlotStorage(BaseStorage):
    """List-of-slots storage implementing reader, writer and remover."""

    def __init__(self, initial: Optional[Iterable[str]] = None):
        super().__init__(initial=initial)
        self._lock = Lock()
        self._slots: List[Optional[str]] = [validate_value(v) for v in self._seed]
        logger.debug(f"SlotStorage initialized with {len(self._slots)} slots")

    def _occupied(self, record_id: int) -> bool:
        return record_id < len(self._slots) and self._slots[record_id] is not None

    def entries(self) -> List[Record]:
        with self._lock:
            return [
                Record(id=i, value=v)
                for i, v in enumerate(self._slots)
                if v is not None
            ]

    def get(self, record_id: int) -> str:
        validate_record_id(record_id)
        with self._lock:
            if not self._occupied(record_id):
                raise RecordNotFoundError(record_id)
            return self._slots[record_id]

    def add(self, value: str) -> int:
        validate_value(value)
        with self._lock:
            self._slots.append(value)
            return len(self._slots) - 1

    def remove(self, record_id: int) -> str:
        validate_record_id(record_id)
        with self._lock:
            if not self._occupied(record_id):
                raise RecordNotFoundError(record_id)
            value = self._slots[record_id]
            self._slots[record_id] = None
        logger.debug(f"Emptied slot {record_id}")
        return value
