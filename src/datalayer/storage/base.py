"""
Base storage types, backend registry and factory.

Backends register themselves with ``register_backend`` and are constructed
through ``get_storage``. Only the composition root should call the factory;
everything else depends on the contracts in ``datalayer.storage.contracts``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Type

logger = logging.getLogger(__name__)


class StorageType(str, Enum):
    """Available storage backend types."""
    MEMORY = "memory"
    SLOT = "slot"
    READONLY = "readonly"


@dataclass(frozen=True)
class Record:
    """
    A stored record.

    Equality is field-based: two records are equal when both id and value
    match, regardless of which backend produced them.
    """
    id: int
    value: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"id": self.id, "value": self.value}


class BaseStorage(ABC):
    """
    Abstract base class for storage backends.

    Supplies the read operations that can be derived from ``entries()``.
    Write and remove operations are declared by the backends that really
    support them, so a read-only backend never carries stub mutators.

    Backends compare by identity: two backends holding the same records
    are still different backends.
    """

    storage_type: Optional[StorageType] = None

    def __init__(self, initial: Optional[Iterable[str]] = None):
        self._seed = list(initial or [])

    @abstractmethod
    def entries(self) -> List[Record]:
        """Return all held records in insertion order."""

    @abstractmethod
    def get(self, record_id: int) -> str:
        """Return the value of a record."""

    def list(self) -> List[str]:
        """Return the values of all held records in insertion order."""
        return [record.value for record in self.entries()]

    def count(self) -> int:
        """Return the number of held records."""
        return len(self.entries())

    def describe(self) -> Dict[str, Any]:
        """Summarize the backend type and the contracts it satisfies."""
        from datalayer.storage.contracts import implemented_contracts

        return {
            "backend": type(self).__name__,
            "storage_type": self.storage_type.value if self.storage_type else None,
            "contracts": [c.__name__ for c in implemented_contracts(self)],
            "count": self.count(),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(count={self.count()})"


# Storage backend registry
_BACKENDS: Dict[StorageType, Type[BaseStorage]] = {}


def register_backend(storage_type: StorageType):
    """Decorator to register a storage backend."""
    def decorator(cls: Type[BaseStorage]) -> Type[BaseStorage]:
        cls.storage_type = storage_type
        _BACKENDS[storage_type] = cls
        return cls
    return decorator


def available_backends() -> Dict[StorageType, Type[BaseStorage]]:
    """Return the registered backend classes keyed by storage type."""
    # Import backends to register them
    from datalayer.storage import memory, readonly, slot  # noqa: F401

    return {t: _BACKENDS[t] for t in StorageType if t in _BACKENDS}


def get_storage(
    storage_type: StorageType | str = StorageType.MEMORY,
    **kwargs: Any,
) -> BaseStorage:
    """
    Get a storage backend instance.

    Args:
        storage_type: Backend type (enum member or its string value)
        **kwargs: Backend-specific options, e.g. ``initial`` seed values

    Returns:
        Storage backend instance

    Raises:
        ValueError: if the storage type is unknown
    """
    backends = available_backends()
    try:
        storage_type = StorageType(storage_type)
    except ValueError:
        raise ValueError(f"Unknown storage type: {storage_type}") from None

    if storage_type not in backends:
        raise ValueError(f"Unknown storage type: {storage_type}")

    backend_class = backends[storage_type]
    logger.debug("Constructing %s backend", storage_type.value)
    return backend_class(**kwargs)
