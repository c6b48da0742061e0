"""
Capability contracts for record storage.

Each contract is a narrow ``Protocol`` used by one group of callers:

- ``RecordReader``: read-only access (listing, lookup, counting)
- ``RecordWriter``: appending new records
- ``RecordRemover``: removing records by id

A backend implements the union of contracts matching what it can really do.
Consumers declare their dependencies with these types only, and the
composition root checks conformance with ``ensure_implements`` before any
consumer is constructed.

Usage::

    from datalayer.storage.contracts import RecordReader, ensure_implements

    ensure_implements(storage, RecordReader, RecordRemover)
    describe_contract(RecordRemover).operation_names  # ("remove",)
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Dict, List, Protocol, Tuple, Type, runtime_checkable

from datalayer.errors import CapabilityViolationError, InvalidInputError, RecordNotFoundError
from datalayer.storage.base import Record


def raises(*failures: Type[Exception]) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Declare the failure conditions a contract operation may signal."""
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        func.__contract_failures__ = tuple(f.__name__ for f in failures)
        return func
    return decorator


@runtime_checkable
class RecordReader(Protocol):
    """Read access to the records held by a backend."""

    def list(self) -> List[str]:
        """Return the values of all held records in insertion order."""
        ...

    def entries(self) -> List[Record]:
        """Return all held records (id and value) in insertion order."""
        ...

    @raises(RecordNotFoundError, InvalidInputError)
    def get(self, record_id: int) -> str:
        """Return the value of a record."""
        ...

    def count(self) -> int:
        """Return the number of held records."""
        ...


@runtime_checkable
class RecordWriter(Protocol):
    """Append access."""

    @raises(InvalidInputError)
    def add(self, value: str) -> int:
        """Store a new record and return its id."""
        ...


@runtime_checkable
class RecordRemover(Protocol):
    """Removal by id."""

    @raises(RecordNotFoundError, InvalidInputError)
    def remove(self, record_id: int) -> str:
        """
        Remove exactly one record and return its value.

        A missing id raises ``RecordNotFoundError`` and leaves state unchanged.
        Removing the same id twice fails on the second call.
        """
        ...


CONTRACTS: Tuple[type, ...] = (RecordReader, RecordWriter, RecordRemover)


@dataclass(frozen=True)
class OperationSignature:
    """A single operation of a contract."""
    name: str
    parameters: Tuple[str, ...]
    returns: str
    failures: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "parameters": list(self.parameters),
            "returns": self.returns,
            "failures": list(self.failures),
        }


@dataclass(frozen=True)
class ContractDescriptor:
    """Immutable description of a contract: its name and ordered operations."""
    name: str
    operations: Tuple[OperationSignature, ...]

    @property
    def operation_names(self) -> Tuple[str, ...]:
        return tuple(op.name for op in self.operations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "operations": [op.to_dict() for op in self.operations],
        }


@lru_cache(maxsize=None)
def describe_contract(contract: type) -> ContractDescriptor:
    """Build the descriptor of a contract from its Protocol definition."""
    operations = []
    for name, member in vars(contract).items():
        if name.startswith("_") or not inspect.isfunction(member):
            continue
        signature = inspect.signature(member)
        parameters = []
        for param in list(signature.parameters.values())[1:]:
            annotation = param.annotation
            if annotation is inspect.Parameter.empty:
                parameters.append(param.name)
            else:
                parameters.append(f"{param.name}: {_annotation_name(annotation)}")
        operations.append(
            OperationSignature(
                name=name,
                parameters=tuple(parameters),
                returns=_annotation_name(signature.return_annotation),
                failures=getattr(member, "__contract_failures__", ()),
            )
        )
    return ContractDescriptor(name=contract.__name__, operations=tuple(operations))


def _annotation_name(annotation: Any) -> str:
    if annotation is inspect.Signature.empty:
        return "None"
    if isinstance(annotation, str):
        return annotation
    return getattr(annotation, "__name__", repr(annotation))


def missing_operations(backend: Any, contract: type) -> List[str]:
    """Return ``Contract.operation`` names the backend fails to provide."""
    descriptor = describe_contract(contract)
    missing = []
    for op in descriptor.operations:
        attr = getattr(backend, op.name, None)
        if attr is None or not callable(attr):
            missing.append(f"{descriptor.name}.{op.name}")
            continue
        expected = [p.split(":")[0] for p in op.parameters]
        try:
            actual = [
                p.name for p in inspect.signature(attr).parameters.values()
                if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
            ]
        except (TypeError, ValueError):
            missing.append(f"{descriptor.name}.{op.name}")
            continue
        if actual[:len(expected)] != expected:
            missing.append(f"{descriptor.name}.{op.name}")
    return missing


def satisfies(backend: Any, contract: type) -> bool:
    """True when the backend provides every operation of the contract."""
    return not missing_operations(backend, contract)


def implemented_contracts(backend: Any) -> Tuple[type, ...]:
    """Return the known contracts the backend satisfies, in declaration order."""
    return tuple(c for c in CONTRACTS if satisfies(backend, c))


def ensure_implements(backend: Any, *contracts: type) -> None:
    """
    Verify the backend provides every operation of every given contract.

    Raises:
        CapabilityViolationError: listing all missing operations
    """
    missing: List[str] = []
    for contract in contracts:
        missing.extend(missing_operations(backend, contract))
    if missing:
        raise CapabilityViolationError(type(backend).__name__, missing)
