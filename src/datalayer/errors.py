"""
Failure conditions signalled by the data-access layer.

Three kinds of failure exist:

- ``RecordNotFoundError``: the referenced record does not exist.
- ``InvalidInputError``: a parameter violates a declared constraint.
- ``CapabilityViolationError``: a backend does not satisfy a contract it is
  wired against. This is a wiring defect raised by the composition root,
  never something a consumer recovers from.

Backends raise the first two to their immediate caller. Consumers either
translate them into a caller-facing result or let them propagate.
"""

from __future__ import annotations

from typing import Any, Sequence


class DataLayerError(Exception):
    """Base class for every failure raised by datalayer."""


class RecordNotFoundError(DataLayerError, LookupError):
    """Raised when an operation targets a record id that is not held."""

    def __init__(self, record_id: int) -> None:
        self.record_id = record_id
        super().__init__(f"Record {record_id} not found")


class InvalidInputError(DataLayerError, ValueError):
    """Raised when a parameter violates its declared constraint."""

    def __init__(self, parameter: str, value: Any, reason: str) -> None:
        self.parameter = parameter
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {parameter} {value!r}: {reason}")


class CapabilityViolationError(DataLayerError, TypeError):
    """
    Raised when a backend is wired where it cannot satisfy a contract.

    Carries the backend name and the contract operations it lacks so the
    wiring defect can be fixed at the composition root.
    """

    def __init__(self, backend: str, missing: Sequence[str]) -> None:
        self.backend = backend
        self.missing = tuple(missing)
        super().__init__(
            f"Backend '{backend}' does not implement: {', '.join(self.missing)}"
        )


def validate_record_id(record_id: Any) -> int:
    """Return ``record_id`` if it is a non-negative int, else raise."""
    # bool is an int subclass but never a meaningful identifier
    if isinstance(record_id, bool) or not isinstance(record_id, int):
        raise InvalidInputError("record_id", record_id, "must be an integer")
    if record_id < 0:
        raise InvalidInputError("record_id", record_id, "must be non-negative")
    return record_id


def validate_value(value: Any) -> str:
    """Return ``value`` if it is a non-empty string, else raise."""
    if not isinstance(value, str):
        raise InvalidInputError("value", value, "must be a string")
    if not value.strip():
        raise InvalidInputError("value", value, "must not be empty")
    return value
