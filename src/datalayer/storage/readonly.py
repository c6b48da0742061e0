"""
Read-only snapshot backend.

Implements ``RecordReader`` and nothing else. It is valid wherever only
reading is required and is rejected by the composition root where removal
or writing is needed.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from datalayer.errors import RecordNotFoundError, validate_record_id, validate_value
from datalayer.storage.base import BaseStorage, Record, StorageType, register_backend


@register_backend(StorageType.READONLY)
class ReadOnlyStorage(BaseStorage):
    """Immutable snapshot of records, seeded once at construction."""

    def __init__(self, initial: Optional[Iterable[str]] = None):
        super().__init__(initial=initial)
        self._records: Tuple[Record, ...] = tuple(
            Record(id=i, value=validate_value(v)) for i, v in enumerate(self._seed)
        )

    @classmethod
    def from_reader(cls, reader) -> "ReadOnlyStorage":
        """Snapshot the current values of any ``RecordReader``."""
        snapshot = cls()
        snapshot._records = tuple(reader.entries())
        return snapshot

    def entries(self) -> List[Record]:
        return list(self._records)

    def get(self, record_id: int) -> str:
        validate_record_id(record_id)
        for record in self._records:
            if record.id == record_id:
                return record.value
        raise RecordNotFoundError(record_id)
