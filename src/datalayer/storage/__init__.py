"""
Pluggable record storage for datalayer.

Backends implement one or more of the narrow capability contracts:

- ``RecordReader`` - listing and lookup
- ``RecordWriter`` - appending records
- ``RecordRemover`` - removing records by id

Example:
    from datalayer.storage import get_storage, StorageType

    storage = get_storage(StorageType.MEMORY, initial=["Jane", "John"])
    storage.remove(0)
    storage.list()  # ["John"]
"""

from datalayer.storage.base import (
    BaseStorage,
    Record,
    StorageType,
    available_backends,
    get_storage,
    register_backend,
)
from datalayer.storage.contracts import (
    CONTRACTS,
    ContractDescriptor,
    OperationSignature,
    RecordReader,
    RecordRemover,
    RecordWriter,
    describe_contract,
    ensure_implements,
    implemented_contracts,
)
from datalayer.storage.memory import MemoryStorage
from datalayer.storage.readonly import ReadOnlyStorage
from datalayer.storage.slot import SlotStorage

__all__ = [
    "BaseStorage",
    "Record",
    "StorageType",
    "available_backends",
    "get_storage",
    "register_backend",
    "CONTRACTS",
    "ContractDescriptor",
    "OperationSignature",
    "RecordReader",
    "RecordRemover",
    "RecordWriter",
    "describe_contract",
    "ensure_implements",
    "implemented_contracts",
    "MemoryStorage",
    "ReadOnlyStorage",
    "SlotStorage",
]
